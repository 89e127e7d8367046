from __future__ import annotations

from contextlib import redirect_stderr
import io
import unittest
from unittest.mock import patch

from conanbridge.client import ConanClient
from conanbridge.install import BUILD_MISSING, InstallConfiguration, PackageTarget, StandardGenerator
from conanbridge.output import Remote
from core.command_runner import CommandError, CommandLaunchError, CommandRunner, RecordingCommandRunner
from core.console import Console


class _MissingExecutableRunner(CommandRunner):
    def run(self, command, **kwargs):  # type: ignore[override]
        raise CommandLaunchError(command, FileNotFoundError(2, "No such file or directory"))


class ConanClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = RecordingCommandRunner()
        self.client = ConanClient("/opt/conan/bin/conan", runner=self.runner)

    def test_version(self) -> None:
        self.runner.queue_output("Conan version 1.34.0\n")
        self.assertEqual(self.client.version(), "1.34.0")
        self.assertEqual(self.runner.commands[0].command, ["/opt/conan/bin/conan", "--version"])

    def test_version_absent(self) -> None:
        self.runner.queue_output("", returncode=1, stderr="boom")
        self.assertIsNone(self.client.version())

    def test_remotes(self) -> None:
        self.runner.queue_output("conan-center https://center.conan.io True\n")
        self.assertEqual(
            self.client.remotes(),
            [Remote("conan-center", "https://center.conan.io", True)],
        )
        self.assertEqual(
            self.runner.commands[0].command,
            ["/opt/conan/bin/conan", "remote", "list", "--raw"],
        )

    def test_remotes_malformed(self) -> None:
        self.runner.queue_output("conan-center https://center.conan.io True\nbad\n")
        self.assertIsNone(self.client.remotes())

    def test_add_and_remove_remote(self) -> None:
        self.assertTrue(self.client.add_remote(Remote("local", "http://localhost:9300", True), index=1))
        self.assertTrue(self.client.remove_remote("local"))
        self.assertEqual(
            [record.command[1:] for record in self.runner.commands],
            [
                ["remote", "add", "-i", "1", "local", "http://localhost:9300", "True"],
                ["remote", "remove", "local"],
            ],
        )

    def test_failed_remote_change_is_reported(self) -> None:
        stderr = io.StringIO()
        client = ConanClient("conan", runner=self.runner, console=Console("error"))
        self.runner.queue_output(returncode=1, stderr="ERROR: Remote 'local' not found")
        with redirect_stderr(stderr):
            self.assertFalse(client.remove_remote("local"))
        self.assertIn("[ERROR] Removing remote 'local' failed", stderr.getvalue())

    def test_install_command(self) -> None:
        config = InstallConfiguration(
            target=PackageTarget("zlib/1.2.11@_/_"),
            install_folder="temp",
            generators=(StandardGenerator.JSON,),
            build_configurations=(BUILD_MISSING,),
        )
        self.client.install(config)
        self.assertEqual(
            self.runner.commands[0].command,
            ["/opt/conan/bin/conan", "install", "zlib/1.2.11@_/_", "-g", "json", "-if", "temp", "--build", "missing"],
        )
        self.assertEqual(self.runner.commands[0].note, "conan install")

    def test_install_failure_raises(self) -> None:
        config = InstallConfiguration(target=PackageTarget("zlib/1.2.11@_/_"), install_folder="temp")
        self.runner.queue_output(returncode=1, stderr="ERROR: Missing prebuilt package")
        with self.assertRaises(CommandError):
            self.client.install(config)

    def test_launch_failure_is_not_absence(self) -> None:
        client = ConanClient("/missing/conan", runner=_MissingExecutableRunner())
        with self.assertRaises(CommandLaunchError):
            client.version()
        with self.assertRaises(CommandLaunchError):
            client.remotes()

    def test_find_system(self) -> None:
        with patch("conanbridge.client.shutil.which", return_value="/usr/bin/conan"):
            client = ConanClient.find_system(runner=self.runner)
        self.assertIsNotNone(client)
        self.assertEqual(client.executable, "/usr/bin/conan")

        with patch("conanbridge.client.shutil.which", return_value=None):
            self.assertIsNone(ConanClient.find_system())


if __name__ == "__main__":
    unittest.main()
