"""Thin wrapper running the Conan executable through a :class:`CommandRunner`."""
from __future__ import annotations

from pathlib import Path
from typing import List
import shutil

from core.command_runner import CommandResult, CommandRunner, SubprocessCommandRunner
from core.console import Console

from .install import InstallConfiguration
from .output import Remote, parse_remote_list, parse_version


DEFAULT_EXECUTABLE = "conan"


class ConanClient:
    """Queries and drives a Conan installation.

    Failing to start the executable raises
    :class:`core.command_runner.CommandLaunchError`; a query whose output
    cannot be parsed returns ``None`` instead.
    """

    def __init__(
        self,
        executable: Path | str = DEFAULT_EXECUTABLE,
        *,
        runner: CommandRunner | None = None,
        console: Console | None = None,
    ) -> None:
        self.executable = str(executable)
        self.runner = runner or SubprocessCommandRunner()
        self.console = console or Console()

    @classmethod
    def find_system(
        cls,
        *,
        runner: CommandRunner | None = None,
        console: Console | None = None,
    ) -> "ConanClient | None":
        """Locate ``conan`` on ``PATH``."""

        path = shutil.which(DEFAULT_EXECUTABLE)
        if path is None:
            return None
        return cls(path, runner=runner, console=console)

    def command(self, *arguments: str) -> List[str]:
        return [self.executable, *arguments]

    def _query(self, *arguments: str, note: str) -> CommandResult:
        command = self.command(*arguments)
        self.console.debug(f"Running {self.runner.format_command(command)}")
        return self.runner.run(command, check=False, note=note)

    def version(self) -> str | None:
        result = self._query("--version", note="conan version")
        version = parse_version(result.stdout)
        if version is None:
            self.console.debug(f"No version found in output: {result.stdout!r}")
        return version

    def remotes(self, *, strict: bool = True) -> List[Remote] | None:
        result = self._query("remote", "list", "--raw", note="conan remotes")
        remotes = parse_remote_list(result.stdout, strict=strict)
        if remotes is None:
            self.console.debug("Remote listing contained a malformed line")
        return remotes

    def add_remote(self, remote: Remote, *, index: int | None = None, force: bool = False) -> bool:
        result = self._query(*remote.add_arguments(index=index, force=force), note=f"add remote {remote.name}")
        if not result.succeeded:
            self.console.error(f"Adding remote '{remote.name}' failed: {result.stderr.strip()}")
        return result.succeeded

    def remove_remote(self, name: str) -> bool:
        result = self._query("remote", "remove", name, note=f"remove remote {name}")
        if not result.succeeded:
            self.console.error(f"Removing remote '{name}' failed: {result.stderr.strip()}")
        return result.succeeded

    def install_command(self, configuration: InstallConfiguration) -> List[str]:
        return self.command("install", *configuration.to_arguments())

    def install(
        self,
        configuration: InstallConfiguration,
        *,
        cwd: Path | None = None,
        stream: bool = False,
    ) -> CommandResult:
        """Run ``conan install``; a non-zero exit raises :class:`CommandError`."""

        command = self.install_command(configuration)
        self.console.info(f"Installing into {configuration.install_folder}")
        self.console.debug(f"Running {self.runner.format_command(command)}")
        return self.runner.run(command, cwd=cwd, check=True, note="conan install", stream=stream)


__all__ = ["ConanClient", "DEFAULT_EXECUTABLE"]
