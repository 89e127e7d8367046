from __future__ import annotations

import unittest
from unittest.mock import patch

from conanbridge.platforms import (
    CARGO_ARCH_TO_CONAN_ARCH,
    CARGO_OS_TO_CONAN_OS,
    detect_settings,
    map_arch,
    map_build_type,
    map_os,
)


class PlatformMappingTests(unittest.TestCase):
    def test_os_names(self) -> None:
        self.assertEqual(map_os("windows"), "Windows")
        self.assertEqual(map_os("linux"), "Linux")
        self.assertEqual(map_os("macos"), "Macos")
        self.assertEqual(map_os("android"), "Android")
        self.assertEqual(map_os("ios"), "iOS")
        self.assertEqual(map_os("freebsd"), "FreeBSD")

    def test_unknown_os_passes_through(self) -> None:
        self.assertEqual(map_os("unknown_os"), "unknown_os")
        self.assertEqual(map_os("Windows"), "Windows")

    def test_arch_names(self) -> None:
        self.assertEqual(map_arch("powerpc"), "ppc32")
        self.assertEqual(map_arch("powerpc64"), "ppc64")
        self.assertEqual(map_arch("arm"), "armv7")
        self.assertEqual(map_arch("aarch64"), "armv8")
        self.assertEqual(map_arch("x86_64"), "x86_64")

    def test_build_type(self) -> None:
        self.assertEqual(map_build_type("debug"), "Debug")
        self.assertEqual(map_build_type("release"), "Release")
        self.assertEqual(map_build_type("bench"), "bench")

    def test_tables_are_read_only(self) -> None:
        with self.assertRaises(TypeError):
            CARGO_OS_TO_CONAN_OS["plan9"] = "Plan9"  # type: ignore[index]
        with self.assertRaises(TypeError):
            CARGO_ARCH_TO_CONAN_ARCH["riscv64"] = "riscv64"  # type: ignore[index]


class DetectSettingsTests(unittest.TestCase):
    def test_all_variables_present(self) -> None:
        settings = detect_settings(
            {
                "CARGO_CFG_TARGET_OS": "android",
                "CARGO_CFG_TARGET_ARCH": "aarch64",
                "PROFILE": "release",
            }
        )
        self.assertEqual(settings, {"os": "Android", "arch": "armv8", "build_type": "Release"})

    def test_missing_variables_are_skipped(self) -> None:
        self.assertEqual(detect_settings({"PROFILE": "debug"}), {"build_type": "Debug"})
        self.assertEqual(detect_settings({}), {})

    def test_defaults_to_process_environment(self) -> None:
        with patch.dict("os.environ", {"CARGO_CFG_TARGET_OS": "linux"}, clear=True):
            self.assertEqual(detect_settings(), {"os": "Linux"})


if __name__ == "__main__":
    unittest.main()
