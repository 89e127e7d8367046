"""Command line interface for conanbridge."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable, Sequence
import sys

from core.command_runner import (
    CommandError,
    CommandLaunchError,
    CommandRunner,
    RecordingCommandRunner,
    SubprocessCommandRunner,
)
from core.console import Console

from .build_info import BUILD_INFO_FILENAME, BuildInfo, dependency_names
from .client import ConanClient
from .config import EXECUTABLE_VARIABLE, BridgeSettings, InstallFile, load_install_file
from .linkage import emit_link_directives


def _make_runner(dry_run: bool) -> SubprocessCommandRunner | RecordingCommandRunner:
    return RecordingCommandRunner() if dry_run else SubprocessCommandRunner()


def _emit_dry_run_output(runner: CommandRunner) -> None:
    if isinstance(runner, RecordingCommandRunner):
        for line in runner.iter_formatted():
            print(line)


def _parse_arguments(argv: Sequence[str]) -> Namespace:
    parser = ArgumentParser(prog="conanbridge", description="Drive Conan installs from structured configuration")
    parser.add_argument(
        "--log-level",
        choices=list(Console.LEVELS),
        default=None,
        help="Console verbosity (defaults to the configuration file or 'error')",
    )
    parser.add_argument("--conan", default=None, help=f"Conan executable (overrides ${EXECUTABLE_VARIABLE})")
    parser.add_argument("-n", "--dry-run", action="store_true", help="Print commands instead of running them")

    subparsers = parser.add_subparsers(dest="command", required=True)

    args_parser = subparsers.add_parser("args", help="Print the compiled 'conan install' arguments")
    args_parser.add_argument("config", type=Path, help="Install configuration file")

    install_parser = subparsers.add_parser("install", help="Run 'conan install' for a configuration")
    install_parser.add_argument("config", type=Path, help="Install configuration file")

    subparsers.add_parser("version", help="Print the Conan version")

    remotes_parser = subparsers.add_parser("remotes", help="List configured remotes")
    remotes_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip malformed lines instead of rejecting the whole listing",
    )

    deps_parser = subparsers.add_parser("deps", help="Inspect a conanbuildinfo.json report")
    deps_parser.add_argument("report", type=Path, help="Path to conanbuildinfo.json or its folder")
    deps_parser.add_argument("name", nargs="?", default=None, help="Show a single dependency")

    link_parser = subparsers.add_parser("link", help="Print Cargo link directives for a report")
    link_parser.add_argument("report", type=Path, help="Path to conanbuildinfo.json or its folder")

    return parser.parse_args(list(argv))


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(list(argv) if argv is not None else sys.argv[1:])

    if args.command in {"args", "install"}:
        return _handle_install(args)
    if args.command == "version":
        return _handle_version(args)
    if args.command == "remotes":
        return _handle_remotes(args)
    if args.command == "deps":
        return _handle_deps(args)
    if args.command == "link":
        return _handle_link(args)
    raise ValueError(f"Unknown command: {args.command}")


def _make_console(args: Namespace, configured: str | None = None) -> Console:
    return Console(args.log_level or configured or "error")


def _load_install(args: Namespace) -> InstallFile | None:
    try:
        return load_install_file(args.config)
    except (OSError, ValueError, TypeError, RuntimeError) as exc:
        print(f"Error: {exc}")
        return None


def _resolve_client(args: Namespace, console: Console, settings: BridgeSettings | None = None) -> ConanClient | None:
    runner = _make_runner(args.dry_run)
    executable = args.conan or (settings or BridgeSettings()).resolve_executable()
    if executable:
        return ConanClient(executable, runner=runner, console=console)
    client = ConanClient.find_system(runner=runner, console=console)
    if client is None:
        console.error("Conan executable not found on PATH")
    return client


def _handle_install(args: Namespace) -> int:
    install_file = _load_install(args)
    if install_file is None:
        return 2
    console = _make_console(args, install_file.settings.log_level)
    configuration = install_file.configuration

    if args.command == "args":
        for token in configuration.to_arguments():
            print(token)
        return 0

    client = _resolve_client(args, console, install_file.settings)
    if client is None:
        return 1
    try:
        client.install(configuration, stream=not args.dry_run)
    except CommandLaunchError as exc:
        console.error(str(exc))
        return 1
    except CommandError as exc:
        console.error(f"conan install failed with exit code {exc.result.returncode}")
        return 1
    _emit_dry_run_output(client.runner)
    return 0


def _handle_version(args: Namespace) -> int:
    console = _make_console(args)
    client = _resolve_client(args, console)
    if client is None:
        return 1
    try:
        version = client.version()
    except CommandLaunchError as exc:
        console.error(str(exc))
        return 1
    _emit_dry_run_output(client.runner)
    if args.dry_run:
        return 0
    if version is None:
        console.error("Could not determine the Conan version")
        return 1
    print(version)
    return 0


def _handle_remotes(args: Namespace) -> int:
    console = _make_console(args)
    client = _resolve_client(args, console)
    if client is None:
        return 1
    try:
        remotes = client.remotes(strict=not args.lenient)
    except CommandLaunchError as exc:
        console.error(str(exc))
        return 1
    _emit_dry_run_output(client.runner)
    if args.dry_run:
        return 0
    if remotes is None:
        console.error("Could not parse the remote listing")
        return 1
    for remote in remotes:
        verify = "-" if remote.verify_ssl is None else str(remote.verify_ssl)
        suffix = "  (disabled)" if remote.disabled else ""
        print(f"{remote.name}  {remote.url}  verify_ssl={verify}{suffix}")
    return 0


def _load_report(args: Namespace, console: Console) -> BuildInfo | None:
    path: Path = args.report
    if path.is_dir():
        path = path / BUILD_INFO_FILENAME
    try:
        build_info = BuildInfo.from_file(path)
    except OSError as exc:
        console.error(f"Cannot read '{path}': {exc}")
        return None
    if build_info is None:
        console.error(f"'{path}' is not a valid build-info report")
    return build_info


def _handle_deps(args: Namespace) -> int:
    console = _make_console(args)
    build_info = _load_report(args, console)
    if build_info is None:
        return 1

    if args.name is None:
        for name in dependency_names(build_info):
            print(name)
        return 0

    dependency = build_info.find_dependency(args.name)
    if dependency is None:
        console.error(f"No dependency named '{args.name}'")
        return 1
    print(f"{dependency.name}/{dependency.version}")
    if dependency.description:
        print(f"  description: {dependency.description}")
    print(f"  rootpath: {dependency.rootpath}")
    for label, values in (
        ("include_paths", dependency.include_paths),
        ("lib_paths", dependency.lib_paths),
        ("libs", dependency.libs),
        ("system_libs", dependency.system_libs),
        ("defines", dependency.defines),
    ):
        if values:
            print(f"  {label}: {', '.join(values)}")
    return 0


def _handle_link(args: Namespace) -> int:
    console = _make_console(args)
    build_info = _load_report(args, console)
    if build_info is None:
        return 1
    count = emit_link_directives(build_info)
    console.debug(f"Emitted {count} link directives")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
