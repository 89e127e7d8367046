"""Link directives for Cargo build scripts."""
from __future__ import annotations

from typing import Iterator, TextIO
import sys

from .build_info import BuildInfo


def link_directives(build_info: BuildInfo) -> Iterator[str]:
    for dependency in build_info.dependencies:
        for lib_path in dependency.lib_paths:
            yield f"cargo:rustc-link-search=native={lib_path}"
        for lib in dependency.libs:
            yield f"cargo:rustc-link-lib={lib}"
        for system_lib in dependency.system_libs:
            yield f"cargo:rustc-link-lib={system_lib}"


def emit_link_directives(build_info: BuildInfo, stream: TextIO | None = None) -> int:
    """Print every directive to ``stream`` (stdout by default); returns the count."""

    output = stream or sys.stdout
    count = 0
    for directive in link_directives(build_info):
        print(directive, file=output)
        count += 1
    return count


__all__ = ["emit_link_directives", "link_directives"]
