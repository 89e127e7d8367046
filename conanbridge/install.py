"""Installation configuration model and its ``conan install`` argument vector."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Union
import os

from core.config_loader import normalize_string_list, normalize_string_map


class StandardGenerator(str, Enum):
    """Generators shipped with Conan 1.x."""

    CMAKE = "cmake"
    CMAKE_MULTI = "cmake_multi"
    CMAKE_PATHS = "cmake_paths"
    CMAKE_FIND_PACKAGE = "cmake_find_package"
    CMAKE_FIND_PACKAGE_MULTI = "cmake_find_package_multi"
    VISUAL_STUDIO = "visual_studio"
    VISUAL_STUDIO_MULTI = "visual_studio_multi"
    VISUAL_STUDIO_LEGACY = "visual_studio_legacy"
    XCODE = "xcode"
    COMPILER_ARGS = "compiler_args"
    GCC = "gcc"
    BOOST_BUILD = "boost-build"
    B2 = "b2"
    QBS = "qbs"
    QMAKE = "qmake"
    SCONS = "scons"
    PKG_CONFIG = "pkg_config"
    VIRTUALENV = "virtualenv"
    VIRTUALENV_PYTHON = "virtualenv_python"
    VIRTUALBUILDENV = "virtualbuildenv"
    VIRTUALRUNENV = "virtualrunenv"
    YOUCOMPLETEME = "youcompleteme"
    TXT = "txt"
    JSON = "json"
    PREMAKE = "premake"
    MAKE = "make"
    DEPLOY = "deploy"


Generator = Union[StandardGenerator, str]


def generator_name(generator: Generator) -> str:
    """Return the token passed to ``-g`` for ``generator``.

    Anything that is not a :class:`StandardGenerator` is treated as a custom
    generator name and passed through verbatim.
    """

    if isinstance(generator, StandardGenerator):
        return generator.value
    if not isinstance(generator, str):
        raise TypeError(f"Generator must be a string, got {type(generator).__name__}")
    name = generator.strip()
    if not name:
        raise ValueError("Generator names cannot be empty")
    return name


@dataclass(frozen=True)
class ConanFileTarget:
    """Install the requirements of a conanfile (``.txt`` or ``.py``)."""

    path: str
    reference: str | None = None

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Conanfile path cannot be empty")
        if self.reference is not None and not self.reference.strip():
            object.__setattr__(self, "reference", None)

    def to_arguments(self) -> List[str]:
        arguments = [self.path]
        if self.reference is not None:
            arguments.append(self.reference)
        return arguments


@dataclass(frozen=True)
class PackageTarget:
    """Install a single package by reference, e.g. ``zlib/1.2.11@_/_``."""

    reference: str

    def to_arguments(self) -> List[str]:
        return [self.reference]


InstallTarget = Union[ConanFileTarget, PackageTarget]


class BuildPolicy(Enum):
    ALL = "all"
    NEVER = "never"
    MISSING = "missing"
    CASCADE = "cascade"
    OUTDATED = "outdated"
    PACKAGE = "package"


@dataclass(frozen=True)
class BuildConfiguration:
    """One ``--build`` directive."""

    policy: BuildPolicy
    pattern: str | None = None

    def __post_init__(self) -> None:
        if self.policy is BuildPolicy.PACKAGE:
            if not self.pattern:
                raise ValueError("Package build configurations require a non-empty pattern")
        elif self.pattern is not None:
            raise ValueError(f"Build policy '{self.policy.value}' does not take a pattern")

    @classmethod
    def package(cls, pattern: str) -> "BuildConfiguration":
        return cls(BuildPolicy.PACKAGE, pattern)

    @classmethod
    def parse(cls, value: str | None) -> "BuildConfiguration":
        """Parse a textual policy; unknown words are package patterns."""

        text = (value or "").strip()
        if not text or text == BuildPolicy.ALL.value:
            return cls(BuildPolicy.ALL)
        for policy in (BuildPolicy.NEVER, BuildPolicy.MISSING, BuildPolicy.CASCADE, BuildPolicy.OUTDATED):
            if text == policy.value:
                return cls(policy)
        return cls.package(text)

    def to_arguments(self) -> List[str]:
        if self.policy is BuildPolicy.ALL:
            return ["--build"]
        if self.policy is BuildPolicy.PACKAGE:
            return ["--build", str(self.pattern)]
        return ["--build", self.policy.value]


BUILD_ALL = BuildConfiguration(BuildPolicy.ALL)
BUILD_NEVER = BuildConfiguration(BuildPolicy.NEVER)
BUILD_MISSING = BuildConfiguration(BuildPolicy.MISSING)
BUILD_CASCADE = BuildConfiguration(BuildPolicy.CASCADE)
BUILD_OUTDATED = BuildConfiguration(BuildPolicy.OUTDATED)


def _key_value_arguments(flag: str, values: Mapping[str, str]) -> List[str]:
    arguments: List[str] = []
    for key, value in values.items():
        arguments.append(flag)
        arguments.append(f"{key}={value}")
    return arguments


@dataclass(frozen=True)
class InstallConfiguration:
    """Everything needed to compile one ``conan install`` invocation.

    Lists keep their order on the command line. Maps are copied on
    construction into read-only views, so neither the caller nor later code
    can change them.
    """

    target: InstallTarget
    install_folder: str
    generators: Tuple[str, ...] = ()
    no_imports: bool = False
    build_configurations: Tuple[BuildConfiguration, ...] = (BUILD_ALL,)
    env: Mapping[str, str] = field(default_factory=dict)
    env_build: Mapping[str, str] = field(default_factory=dict)
    options: Mapping[str, str] = field(default_factory=dict)
    options_build: Mapping[str, str] = field(default_factory=dict)
    settings: Mapping[str, str] = field(default_factory=dict)
    settings_build: Mapping[str, str] = field(default_factory=dict)
    profile: str | None = None
    profile_build: str | None = None
    remote: str | None = None
    update: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.target, (ConanFileTarget, PackageTarget)):
            raise TypeError("target must be a ConanFileTarget or PackageTarget")
        folder = os.fspath(self.install_folder)
        if not folder:
            raise ValueError("install_folder cannot be empty")
        object.__setattr__(self, "install_folder", folder)
        object.__setattr__(self, "generators", tuple(generator_name(item) for item in self.generators))
        configurations = tuple(self.build_configurations)
        for entry in configurations:
            if not isinstance(entry, BuildConfiguration):
                raise TypeError("build_configurations entries must be BuildConfiguration instances")
        object.__setattr__(self, "build_configurations", configurations)
        for name in ("env", "env_build", "options", "options_build", "settings", "settings_build"):
            values = getattr(self, name)
            object.__setattr__(self, name, MappingProxyType({str(key): str(value) for key, value in values.items()}))

    def to_arguments(self) -> List[str]:
        """Return the arguments following ``conan install``."""

        arguments: List[str] = list(self.target.to_arguments())

        for generator in self.generators:
            arguments.extend(["-g", generator])

        arguments.extend(["-if", self.install_folder])

        if self.no_imports:
            arguments.append("--no-imports")

        for configuration in self.build_configurations:
            arguments.extend(configuration.to_arguments())

        arguments.extend(_key_value_arguments("-e", self.env))
        arguments.extend(_key_value_arguments("-e:b", self.env_build))
        arguments.extend(_key_value_arguments("-o", self.options))
        arguments.extend(_key_value_arguments("-o:b", self.options_build))

        if self.profile is not None:
            arguments.extend(["-pr", self.profile])
        if self.profile_build is not None:
            arguments.extend(["-pr:b", self.profile_build])

        if self.remote is not None:
            arguments.extend(["-r", self.remote])

        arguments.extend(_key_value_arguments("-s", self.settings))
        arguments.extend(_key_value_arguments("-s:b", self.settings_build))

        if self.update:
            arguments.append("--update")

        return arguments

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        *,
        base_dir: Path | None = None,
        default_settings: Mapping[str, str] | None = None,
    ) -> "InstallConfiguration":
        """Build a configuration from an ``[install]`` table.

        Relative ``conanfile`` and ``install_folder`` paths are resolved
        against ``base_dir`` when given. ``default_settings`` sit underneath
        the table's own ``settings``.
        """

        if not isinstance(data, Mapping):
            raise TypeError("[install] section must be a table")

        allowed_keys = {
            "conanfile",
            "reference",
            "package",
            "install_folder",
            "generators",
            "build",
            "no_imports",
            "update",
            "profile",
            "build_profile",
            "remote",
            "env",
            "env_build",
            "options",
            "options_build",
            "settings",
            "settings_build",
        }
        unknown = {str(key) for key in data.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"[install] contains unknown keys: {joined}")

        target = _target_from_mapping(data, base_dir)

        install_folder = data.get("install_folder")
        if not install_folder or not str(install_folder).strip():
            raise ValueError("install.install_folder is required")
        install_folder = str(install_folder).strip()
        if base_dir is not None and not Path(install_folder).is_absolute():
            install_folder = str(base_dir / install_folder)

        generators = normalize_string_list(data.get("generators"), field_name="install.generators")

        build_value = data.get("build")
        build_configurations: Tuple[BuildConfiguration, ...]
        if build_value is None:
            build_configurations = (BUILD_ALL,)
        elif isinstance(build_value, Sequence) and not isinstance(build_value, (str, bytes)):
            build_configurations = tuple(_parse_build_entry(item) for item in build_value)
        else:
            build_configurations = (_parse_build_entry(build_value),)

        settings: Dict[str, str] = dict(default_settings or {})
        settings.update(normalize_string_map(data.get("settings"), field_name="install.settings"))

        return cls(
            target=target,
            install_folder=install_folder,
            generators=tuple(generators),
            no_imports=_read_flag(data, "no_imports"),
            build_configurations=build_configurations,
            env=normalize_string_map(data.get("env"), field_name="install.env"),
            env_build=normalize_string_map(data.get("env_build"), field_name="install.env_build"),
            options=normalize_string_map(data.get("options"), field_name="install.options"),
            options_build=normalize_string_map(data.get("options_build"), field_name="install.options_build"),
            settings=settings,
            settings_build=normalize_string_map(data.get("settings_build"), field_name="install.settings_build"),
            profile=_read_optional_string(data, "profile"),
            profile_build=_read_optional_string(data, "build_profile"),
            remote=_read_optional_string(data, "remote"),
            update=_read_flag(data, "update"),
        )


def _target_from_mapping(data: Mapping[str, Any], base_dir: Path | None) -> InstallTarget:
    conanfile = _read_optional_string(data, "conanfile")
    package = _read_optional_string(data, "package")
    reference = _read_optional_string(data, "reference")
    if conanfile and package:
        raise ValueError("install.conanfile and install.package are mutually exclusive")
    if package:
        if reference:
            raise ValueError("install.reference is only valid together with install.conanfile")
        return PackageTarget(reference=package)
    if conanfile:
        if base_dir is not None and not Path(conanfile).is_absolute():
            conanfile = str(base_dir / conanfile)
        return ConanFileTarget(path=conanfile, reference=reference)
    raise ValueError("Either install.conanfile or install.package is required")


def _parse_build_entry(value: Any) -> BuildConfiguration:
    if value is True:
        return BUILD_ALL
    if value is False:
        return BUILD_NEVER
    if not isinstance(value, str):
        raise TypeError("install.build entries must be strings")
    return BuildConfiguration.parse(value)


def _read_flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise TypeError(f"install.{key} must be a boolean")
    return value


def _read_optional_string(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"install.{key} must be a string")
    text = value.strip()
    return text or None


__all__ = [
    "BUILD_ALL",
    "BUILD_CASCADE",
    "BUILD_MISSING",
    "BUILD_NEVER",
    "BUILD_OUTDATED",
    "BuildConfiguration",
    "BuildPolicy",
    "ConanFileTarget",
    "Generator",
    "InstallConfiguration",
    "InstallTarget",
    "PackageTarget",
    "StandardGenerator",
    "generator_name",
]
