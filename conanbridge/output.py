"""Parsing of Conan's textual command output."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List
import re


VERSION_PATTERN = re.compile(r"Conan version ([\d.]+)")
REMOTE_LINE_PATTERN = re.compile(r"\s*(\S+)\s+(\S+)\s+(True|False)(?:\s+(True|False))?\s*")


@dataclass(frozen=True)
class Remote:
    """A configured package repository endpoint."""

    name: str
    url: str
    verify_ssl: bool | None = None
    disabled: bool = False

    def add_arguments(self, *, index: int | None = None, force: bool = False) -> List[str]:
        """Return the arguments following ``conan`` that register this remote."""

        arguments = ["remote", "add"]
        if index is not None:
            arguments.extend(["-i", str(index)])
        if force:
            arguments.append("--force")
        arguments.extend([self.name, self.url])
        if self.verify_ssl is not None:
            arguments.append("True" if self.verify_ssl else "False")
        return arguments


def parse_version(output: str) -> str | None:
    """Extract the version number from ``conan --version`` output."""

    match = VERSION_PATTERN.search(output)
    if match is None:
        return None
    return match.group(1)


def parse_remote_line(line: str) -> Remote | None:
    match = REMOTE_LINE_PATTERN.fullmatch(line)
    if match is None:
        return None
    name, url, verify, disabled = match.groups()
    return Remote(name=name, url=url, verify_ssl=verify == "True", disabled=disabled == "True")


def parse_remote_list(output: str, *, strict: bool = True) -> List[Remote] | None:
    """Parse ``conan remote list --raw`` output, one remote per line.

    Each line reads ``<name> <url> <verify_ssl>``, optionally followed by a
    second ``True`` that marks the remote as disabled. In strict mode a single
    line of any other shape discards the whole listing and ``None`` is
    returned. With ``strict=False`` such lines are skipped instead.
    """

    remotes: List[Remote] = []
    for line in output.splitlines():
        remote = parse_remote_line(line)
        if remote is None:
            if strict:
                return None
            continue
        remotes.append(remote)
    return remotes


__all__ = [
    "Remote",
    "parse_remote_line",
    "parse_remote_list",
    "parse_version",
]
