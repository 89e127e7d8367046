"""Decoding of the ``conanbuildinfo.json`` report written by the ``json`` generator."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, TextIO, Tuple
import json


BUILD_INFO_FILENAME = "conanbuildinfo.json"


class BuildInfoError(ValueError):
    """Raised when a mapping does not follow the build-info schema."""


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data:
        raise BuildInfoError(f"{context}: missing required field '{key}'")
    return data[key]


def _as_string(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise BuildInfoError(f"{label} must be a string")
    return value


def _as_string_list(value: Any, label: str) -> Tuple[str, ...]:
    if not isinstance(value, list):
        raise BuildInfoError(f"{label} must be a list of strings")
    return tuple(_as_string(item, f"{label} entries") for item in value)


def _as_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise BuildInfoError(f"{label} must be an object")
    return value


def _as_string_map(value: Any, label: str) -> Dict[str, str]:
    return {key: _as_string(item, f"{label}.{key}") for key, item in _as_mapping(value, label).items()}


@dataclass(frozen=True)
class DependencyInfo:
    name: str
    version: str
    rootpath: str
    sysroot: str
    description: str | None = None
    include_paths: Tuple[str, ...] = ()
    lib_paths: Tuple[str, ...] = ()
    bin_paths: Tuple[str, ...] = ()
    build_paths: Tuple[str, ...] = ()
    res_paths: Tuple[str, ...] = ()
    libs: Tuple[str, ...] = ()
    system_libs: Tuple[str, ...] = ()
    defines: Tuple[str, ...] = ()
    cflags: Tuple[str, ...] = ()
    cxxflags: Tuple[str, ...] = ()
    cppflags: Tuple[str, ...] = ()
    sharedlinkflags: Tuple[str, ...] = ()
    exelinkflags: Tuple[str, ...] = ()
    frameworks: Tuple[str, ...] = ()
    framework_paths: Tuple[str, ...] = ()

    LIST_FIELDS = (
        "include_paths",
        "lib_paths",
        "bin_paths",
        "build_paths",
        "res_paths",
        "libs",
        "system_libs",
        "defines",
        "cflags",
        "cxxflags",
        "cppflags",
        "sharedlinkflags",
        "exelinkflags",
        "frameworks",
        "framework_paths",
    )

    @classmethod
    def from_mapping(cls, data: Any) -> "DependencyInfo":
        data = _as_mapping(data, "dependency")
        name = _as_string(_require(data, "name", "dependency"), "dependency.name")
        context = f"dependency '{name}'"

        description = data.get("description")
        if description is not None:
            description = _as_string(description, f"{context} description")

        lists = {
            key: _as_string_list(_require(data, key, context), f"{context} {key}")
            for key in cls.LIST_FIELDS
        }
        return cls(
            name=name,
            version=_as_string(_require(data, "version", context), f"{context} version"),
            rootpath=_as_string(_require(data, "rootpath", context), f"{context} rootpath"),
            sysroot=_as_string(_require(data, "sysroot", context), f"{context} sysroot"),
            description=description,
            **lists,
        )

    def to_mapping(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "rootpath": self.rootpath,
            "sysroot": self.sysroot,
        }
        for key in self.LIST_FIELDS:
            data[key] = list(getattr(self, key))
        return data


@dataclass(frozen=True)
class BuildInfo:
    """Resolved dependency graph as reported by Conan.

    Maps are exposed as read-only views, nested ones included.
    """

    deps_env_info: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    deps_user_info: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    dependencies: Tuple[DependencyInfo, ...] = ()
    settings: Mapping[str, str] = field(default_factory=dict)
    options: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "deps_env_info",
            MappingProxyType({key: tuple(values) for key, values in self.deps_env_info.items()}),
        )
        for name in ("deps_user_info", "options"):
            nested = {key: MappingProxyType(dict(values)) for key, values in getattr(self, name).items()}
            object.__setattr__(self, name, MappingProxyType(nested))
        object.__setattr__(self, "dependencies", tuple(self.dependencies))
        object.__setattr__(self, "settings", MappingProxyType(dict(self.settings)))

    @classmethod
    def from_mapping(cls, data: Any) -> "BuildInfo":
        """Decode a parsed report, raising :class:`BuildInfoError` on schema violations."""

        data = _as_mapping(data, "build info")
        context = "build info"

        env_info = _as_mapping(_require(data, "deps_env_info", context), "deps_env_info")
        user_info = _as_mapping(_require(data, "deps_user_info", context), "deps_user_info")
        dependencies = _require(data, "dependencies", context)
        if not isinstance(dependencies, list):
            raise BuildInfoError("dependencies must be a list")
        options = _as_mapping(_require(data, "options", context), "options")

        return cls(
            deps_env_info={
                key: _as_string_list(value, f"deps_env_info.{key}") for key, value in env_info.items()
            },
            deps_user_info={
                key: _as_string_map(value, f"deps_user_info.{key}") for key, value in user_info.items()
            },
            dependencies=tuple(DependencyInfo.from_mapping(entry) for entry in dependencies),
            settings=_as_string_map(_require(data, "settings", context), "settings"),
            options={key: _as_string_map(value, f"options.{key}") for key, value in options.items()},
        )

    @classmethod
    def from_json(cls, content: str | bytes) -> "BuildInfo | None":
        """Decode a JSON report; ``None`` when it is not valid JSON or not a build-info report."""

        try:
            data = json.loads(content)
        except (ValueError, RecursionError):
            return None
        return cls._decode(data)

    @classmethod
    def from_reader(cls, stream: TextIO) -> "BuildInfo | None":
        try:
            data = json.load(stream)
        except (ValueError, RecursionError):
            return None
        return cls._decode(data)

    @classmethod
    def from_file(cls, path: Path) -> "BuildInfo | None":
        """Read ``path``; I/O errors propagate, malformed content yields ``None``."""

        with Path(path).open("r", encoding="utf-8") as handle:
            return cls.from_reader(handle)

    @classmethod
    def _decode(cls, data: Any) -> "BuildInfo | None":
        try:
            return cls.from_mapping(data)
        except BuildInfoError:
            return None

    def find_dependency(self, name: str) -> DependencyInfo | None:
        for dependency in self.dependencies:
            if dependency.name == name:
                return dependency
        return None

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "deps_env_info": {key: list(values) for key, values in self.deps_env_info.items()},
            "deps_user_info": {key: dict(values) for key, values in self.deps_user_info.items()},
            "dependencies": [dependency.to_mapping() for dependency in self.dependencies],
            "settings": dict(self.settings),
            "options": {key: dict(values) for key, values in self.options.items()},
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_mapping(), indent=indent)


def load_build_info(install_folder: Path) -> BuildInfo | None:
    """Load ``conanbuildinfo.json`` from a ``conan install`` output folder."""

    return BuildInfo.from_file(Path(install_folder) / BUILD_INFO_FILENAME)


def dependency_names(build_info: BuildInfo) -> List[str]:
    return [dependency.name for dependency in build_info.dependencies]


__all__ = [
    "BUILD_INFO_FILENAME",
    "BuildInfo",
    "BuildInfoError",
    "DependencyInfo",
    "dependency_names",
    "load_build_info",
]
