"""Shared core utilities for driving external command line tools."""

from .command_runner import (
    CommandError,
    CommandLaunchError,
    CommandResult,
    CommandRunner,
    RecordingCommandRunner,
    SubprocessCommandRunner,
)
from .config_loader import (
    ConfigLoader,
    FILE_LOADERS,
    load_config_file,
    normalize_string_list,
    normalize_string_map,
)
from .console import Console

__all__ = [
    "CommandError",
    "CommandLaunchError",
    "CommandResult",
    "CommandRunner",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "ConfigLoader",
    "FILE_LOADERS",
    "load_config_file",
    "normalize_string_list",
    "normalize_string_map",
    "Console",
]
