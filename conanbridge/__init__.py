"""Integration layer between build scripts and the Conan package manager."""
from __future__ import annotations

from .build_info import BuildInfo, BuildInfoError, DependencyInfo, load_build_info
from .client import ConanClient
from .install import (
    BUILD_ALL,
    BUILD_CASCADE,
    BUILD_MISSING,
    BUILD_NEVER,
    BUILD_OUTDATED,
    BuildConfiguration,
    BuildPolicy,
    ConanFileTarget,
    InstallConfiguration,
    PackageTarget,
    StandardGenerator,
)
from .linkage import emit_link_directives, link_directives
from .output import Remote, parse_remote_list, parse_version
from .platforms import detect_settings, map_arch, map_build_type, map_os

__version__ = "0.1.0"

__all__ = [
    "BUILD_ALL",
    "BUILD_CASCADE",
    "BUILD_MISSING",
    "BUILD_NEVER",
    "BUILD_OUTDATED",
    "BuildConfiguration",
    "BuildInfo",
    "BuildInfoError",
    "BuildPolicy",
    "ConanClient",
    "ConanFileTarget",
    "DependencyInfo",
    "InstallConfiguration",
    "PackageTarget",
    "Remote",
    "StandardGenerator",
    "detect_settings",
    "emit_link_directives",
    "link_directives",
    "load_build_info",
    "map_arch",
    "map_build_type",
    "map_os",
    "parse_remote_list",
    "parse_version",
]
