from __future__ import annotations

import textwrap
import unittest

from conanbridge.output import Remote, parse_remote_line, parse_remote_list, parse_version


class VersionParserTests(unittest.TestCase):
    def test_plain_output(self) -> None:
        self.assertEqual(parse_version("Conan version 1.34.0\n"), "1.34.0")

    def test_surrounding_noise(self) -> None:
        output = "\n\n  WARN: something\nConan version 1.59.0  \n"
        self.assertEqual(parse_version(output), "1.59.0")

    def test_no_match(self) -> None:
        self.assertIsNone(parse_version(""))
        self.assertIsNone(parse_version("conan: command not found"))
        self.assertIsNone(parse_version("Conan version unknown"))


class RemoteParserTests(unittest.TestCase):
    def test_single_remote(self) -> None:
        remotes = parse_remote_list("conan-center https://center.conan.io True\n")
        self.assertEqual(
            remotes,
            [Remote(name="conan-center", url="https://center.conan.io", verify_ssl=True)],
        )

    def test_multiple_remotes_keep_order(self) -> None:
        output = textwrap.dedent(
            """\
            conancenter https://center.conan.io True
            internal https://artifacts.example.com/api/conan/conan-local False
            """
        )
        remotes = parse_remote_list(output)
        self.assertIsNotNone(remotes)
        self.assertEqual([remote.name for remote in remotes], ["conancenter", "internal"])
        self.assertFalse(remotes[1].verify_ssl)

    def test_empty_listing(self) -> None:
        self.assertEqual(parse_remote_list(""), [])

    def test_malformed_line_discards_everything(self) -> None:
        output = "conan-center https://center.conan.io True\nbroken https://example.com\n"
        self.assertIsNone(parse_remote_list(output))

    def test_lenient_mode_skips_malformed_lines(self) -> None:
        output = "conan-center https://center.conan.io True\nbroken https://example.com\n"
        remotes = parse_remote_list(output, strict=False)
        self.assertEqual(remotes, [Remote("conan-center", "https://center.conan.io", True)])

    def test_boolean_literal_is_case_sensitive(self) -> None:
        self.assertIsNone(parse_remote_line("local http://localhost:9300 true"))

    def test_disabled_remote(self) -> None:
        output = "conancenter https://center.conan.io True \nlocal http://localhost:9300 False True\n"
        self.assertEqual(
            parse_remote_list(output),
            [
                Remote("conancenter", "https://center.conan.io", True),
                Remote("local", "http://localhost:9300", False, disabled=True),
            ],
        )

    def test_unknown_trailing_tokens_are_rejected(self) -> None:
        self.assertIsNone(parse_remote_line("local http://localhost:9300 True extra"))

    def test_tabs_and_padding(self) -> None:
        self.assertEqual(
            parse_remote_line("  local\thttp://localhost:9300   False  "),
            Remote("local", "http://localhost:9300", False),
        )


class RemoteArgumentTests(unittest.TestCase):
    def test_minimal(self) -> None:
        remote = Remote("local", "http://localhost:9300")
        self.assertEqual(remote.add_arguments(), ["remote", "add", "local", "http://localhost:9300"])

    def test_index_force_and_ssl(self) -> None:
        remote = Remote("local", "http://localhost:9300", verify_ssl=False)
        self.assertEqual(
            remote.add_arguments(index=0, force=True),
            ["remote", "add", "-i", "0", "--force", "local", "http://localhost:9300", "False"],
        )


if __name__ == "__main__":
    unittest.main()
