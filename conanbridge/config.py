"""Loading of install configurations from TOML, JSON or YAML files."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping
import os

from core.config_loader import load_config_file
from core.console import Console

from .install import InstallConfiguration
from .platforms import detect_settings


EXECUTABLE_VARIABLE = "CONANBRIDGE_CONAN"


@dataclass(slots=True)
class BridgeSettings:
    executable: str | None = None
    log_level: str = "error"
    detect_settings: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BridgeSettings":
        section = data.get("conan", {}) if isinstance(data, Mapping) else {}
        if not isinstance(section, Mapping):
            raise TypeError("[conan] section must be a table")

        allowed_keys = {"executable", "log_level", "detect_settings"}
        unknown = {str(key) for key in section.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"[conan] contains unknown keys: {joined}")

        log_level = str(section.get("log_level", "error")).strip().lower()
        if log_level not in Console.LEVELS:
            raise ValueError(f"conan.log_level must be one of: {', '.join(Console.LEVELS)}")

        detect = section.get("detect_settings", False)
        if not isinstance(detect, bool):
            raise TypeError("conan.detect_settings must be a boolean")

        executable = section.get("executable")
        return cls(
            executable=str(executable) if executable else None,
            log_level=log_level,
            detect_settings=detect,
        )

    def resolve_executable(self, environ: Mapping[str, str] | None = None) -> str | None:
        env = os.environ if environ is None else environ
        return env.get(EXECUTABLE_VARIABLE) or self.executable


@dataclass(slots=True)
class InstallFile:
    path: Path
    settings: BridgeSettings
    configuration: InstallConfiguration


def parse_install_mapping(
    data: Mapping[str, Any],
    *,
    base_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> tuple[BridgeSettings, InstallConfiguration]:
    settings = BridgeSettings.from_mapping(data)
    install_section = data.get("install")
    if install_section is None:
        raise ValueError("[install] section is required")
    defaults = detect_settings(environ) if settings.detect_settings else None
    configuration = InstallConfiguration.from_mapping(
        install_section,
        base_dir=base_dir,
        default_settings=defaults,
    )
    return settings, configuration


def load_install_file(path: Path, *, environ: Mapping[str, str] | None = None) -> InstallFile:
    """Load ``path``; relative paths inside it resolve against its directory."""

    path = Path(path)
    data = load_config_file(path)
    settings, configuration = parse_install_mapping(data, base_dir=path.parent, environ=environ)
    return InstallFile(path=path, settings=settings, configuration=configuration)


__all__ = [
    "BridgeSettings",
    "EXECUTABLE_VARIABLE",
    "InstallFile",
    "load_install_file",
    "parse_install_mapping",
]
