from __future__ import annotations

import unittest
from unittest.mock import patch

from emc import selection
from emc.errors import UnknownBuildSystem, UnknownCommand
from emc.selection import (
    BuildSystem,
    Command,
    Platform,
    detect_platform,
    normalize_build_system,
    normalize_command,
)


class NormalizeCommandTests(unittest.TestCase):
    def test_accepts_enum_members(self) -> None:
        for command in Command:
            self.assertIs(normalize_command(command), command)

    def test_accepts_case_insensitive_strings(self) -> None:
        self.assertIs(normalize_command("build"), Command.BUILD)
        self.assertIs(normalize_command("UnInstall"), Command.UNINSTALL)
        self.assertIs(normalize_command("  FRESH "), Command.FRESH)

    def test_accepts_keyword_style_tokens(self) -> None:
        self.assertIs(normalize_command(":setup"), Command.SETUP)
        self.assertIs(normalize_command(":Clean"), Command.CLEAN)

    def test_rejects_unknown_tokens(self) -> None:
        for value in ("compile", "", "build all", None, 3):
            with self.subTest(value=value):
                with self.assertRaises(UnknownCommand):
                    normalize_command(value)  # type: ignore[arg-type]

    def test_unknown_command_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            normalize_command("deploy")


class NormalizeBuildSystemTests(unittest.TestCase):
    def test_known_aliases(self) -> None:
        self.assertIs(normalize_build_system("make"), BuildSystem.MAKE)
        self.assertIs(normalize_build_system("NMake"), BuildSystem.MAKE)
        self.assertIs(normalize_build_system(":cmake"), BuildSystem.CMAKE)
        self.assertIs(normalize_build_system(BuildSystem.CMAKE), BuildSystem.CMAKE)

    def test_rejects_other_tools(self) -> None:
        with self.assertRaises(UnknownBuildSystem):
            normalize_build_system("ninja")


class DetectPlatformTests(unittest.TestCase):
    def test_maps_known_identifiers(self) -> None:
        cases = {
            "win32": Platform.WINDOWS,
            "darwin": Platform.MACOS,
            "linux": Platform.GENERIC_UNIX,
            "freebsd14": Platform.GENERIC_UNIX,
            "openbsd7": Platform.GENERIC_UNIX,
            "cygwin": Platform.GENERIC_UNIX,
            "gnu0": Platform.GENERIC_UNIX,
        }
        for ident, expected in cases.items():
            with self.subTest(ident=ident):
                self.assertIs(detect_platform(ident), expected)

    def test_unknown_identifier_is_unsupported(self) -> None:
        self.assertIs(detect_platform("emscripten"), Platform.UNSUPPORTED)
        self.assertIs(detect_platform("aix"), Platform.UNSUPPORTED)

    def test_defaults_to_sys_platform(self) -> None:
        with patch.object(selection.sys, "platform", "darwin"):
            self.assertIs(detect_platform(), Platform.MACOS)

    def test_host_platform_is_memoized(self) -> None:
        selection.host_platform.cache_clear()
        try:
            with patch.object(selection, "detect_platform", return_value=Platform.WINDOWS) as detect:
                self.assertIs(selection.host_platform(), Platform.WINDOWS)
                self.assertIs(selection.host_platform(), Platform.WINDOWS)
            detect.assert_called_once_with()
        finally:
            selection.host_platform.cache_clear()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
