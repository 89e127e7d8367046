from __future__ import annotations

from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path
import io
import sys
import unittest

from core.command_runner import (
    CommandError,
    CommandLaunchError,
    RecordingCommandRunner,
    SubprocessCommandRunner,
)
from core.console import Console


class SubprocessCommandRunnerTests(unittest.TestCase):
    def test_captures_output(self) -> None:
        runner = SubprocessCommandRunner()
        result = runner.run([sys.executable, "-c", "print('Conan version 1.60.0')"])
        self.assertEqual(result.returncode, 0)
        self.assertEqual(result.stdout.strip(), "Conan version 1.60.0")

    def test_non_zero_exit(self) -> None:
        runner = SubprocessCommandRunner()
        command = [sys.executable, "-c", "import sys; sys.exit(3)"]
        with self.assertRaises(CommandError) as ctx:
            runner.run(command)
        self.assertEqual(ctx.exception.result.returncode, 3)
        self.assertEqual(runner.run(command, check=False).returncode, 3)

    def test_missing_executable(self) -> None:
        runner = SubprocessCommandRunner()
        with self.assertRaises(CommandLaunchError) as ctx:
            runner.run(["/nonexistent/bin/conan", "--version"])
        self.assertIn("/nonexistent/bin/conan", str(ctx.exception))
        self.assertIsInstance(ctx.exception.reason, OSError)


class RecordingCommandRunnerTests(unittest.TestCase):
    def test_records_and_formats(self) -> None:
        runner = RecordingCommandRunner()
        runner.run(["conan", "install", "zlib/1.2.11@_/_", "-o", "zlib:shared=True"], note="conan install")
        lines = list(runner.iter_formatted(workspace=Path("/work")))
        self.assertEqual(
            lines,
            ["[dry-run] conan install (cwd=/work) conan install zlib/1.2.11@_/_ -o zlib:shared=True"],
        )

    def test_queued_outputs(self) -> None:
        runner = RecordingCommandRunner()
        runner.queue_output("first")
        runner.queue_output("second", returncode=2)
        self.assertEqual(runner.run(["a"]).stdout, "first")
        self.assertEqual(runner.run(["b"], check=False).returncode, 2)
        self.assertEqual(runner.run(["c"]).stdout, "")


class ConsoleTests(unittest.TestCase):
    def test_levels(self) -> None:
        out = io.StringIO()
        err = io.StringIO()
        console = Console("info")
        with redirect_stdout(out), redirect_stderr(err):
            console.info("hello")
            console.debug("hidden")
            console.error("bad")
        self.assertEqual(out.getvalue(), "[INFO] hello\n")
        self.assertEqual(err.getvalue(), "[ERROR] bad\n")

    def test_none_is_silent(self) -> None:
        out = io.StringIO()
        console = Console(stream=out, error_stream=out)
        console.error("bad")
        self.assertEqual(out.getvalue(), "")

    def test_unknown_level(self) -> None:
        with self.assertRaises(ValueError):
            Console("verbose")


if __name__ == "__main__":
    unittest.main()
