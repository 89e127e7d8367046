"""Translation of Cargo platform vocabulary into Conan setting values."""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping
import os


CARGO_OS_TO_CONAN_OS: Mapping[str, str] = MappingProxyType(
    {
        "windows": "Windows",
        "linux": "Linux",
        "macos": "Macos",
        "android": "Android",
        "ios": "iOS",
        "freebsd": "FreeBSD",
    }
)

# Endianness suffixes (e.g. powerpc64le) are not covered and pass through unchanged.
CARGO_ARCH_TO_CONAN_ARCH: Mapping[str, str] = MappingProxyType(
    {
        "powerpc": "ppc32",
        "powerpc64": "ppc64",
        "arm": "armv7",
        "aarch64": "armv8",
    }
)

TARGET_OS_VARIABLE = "CARGO_CFG_TARGET_OS"
TARGET_ARCH_VARIABLE = "CARGO_CFG_TARGET_ARCH"
PROFILE_VARIABLE = "PROFILE"


def map_os(os_name: str) -> str:
    """Return the Conan ``os`` setting for a Cargo target OS."""
    return CARGO_OS_TO_CONAN_OS.get(os_name, os_name)


def map_arch(arch_name: str) -> str:
    """Return the Conan ``arch`` setting for a Cargo target architecture."""
    return CARGO_ARCH_TO_CONAN_ARCH.get(arch_name, arch_name)


def map_build_type(profile: str) -> str:
    if profile == "debug":
        return "Debug"
    if profile == "release":
        return "Release"
    return profile


def detect_settings(environ: Mapping[str, str] | None = None) -> Dict[str, str]:
    """Derive Conan settings from the variables Cargo exports to build scripts.

    Only variables that are present contribute a setting, so the result may
    be empty when called outside of a build script.
    """

    env = os.environ if environ is None else environ
    settings: Dict[str, str] = {}

    target_os = env.get(TARGET_OS_VARIABLE)
    if target_os is not None:
        settings["os"] = map_os(target_os)

    target_arch = env.get(TARGET_ARCH_VARIABLE)
    if target_arch is not None:
        settings["arch"] = map_arch(target_arch)

    profile = env.get(PROFILE_VARIABLE)
    if profile is not None:
        settings["build_type"] = map_build_type(profile)

    return settings


__all__ = [
    "CARGO_ARCH_TO_CONAN_ARCH",
    "CARGO_OS_TO_CONAN_OS",
    "detect_settings",
    "map_arch",
    "map_build_type",
    "map_os",
]
