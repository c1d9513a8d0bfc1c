from __future__ import annotations

import re
import shlex
import unittest

from emc.errors import UnsupportedCombination
from emc.make import build_make_command
from emc.parameters import BuildParameters
from emc.selection import Platform
from emc.toolchain import MsvcToolchain


VCVARS = r"C:\Program Files\Microsoft Visual Studio\2022\Community\VC\Auxiliary\Build\vcvars64.bat"


class UnixMakeCommandTests(unittest.TestCase):
    def test_default_build_directory_has_no_cd_prefix(self) -> None:
        params = BuildParameters(makefile="Makefile", targets="all test")
        self.assertEqual(build_make_command(Platform.GENERIC_UNIX, params), "make -f Makefile all test")

    def test_explicit_build_directory_is_entered_first(self) -> None:
        params = BuildParameters(build_dir="/tmp/x", makefile="Foobar.mk", targets="")
        self.assertEqual(build_make_command(Platform.GENERIC_UNIX, params), "cd /tmp/x ; make -f Foobar.mk ")

    def test_build_directory_with_spaces_is_quoted(self) -> None:
        params = BuildParameters(build_dir="/tmp/my build", targets="all")
        crafted = build_make_command(Platform.MACOS, params)
        self.assertTrue(crafted.startswith("cd '/tmp/my build' ; make"))

    def test_empty_targets_keep_default_target(self) -> None:
        for targets in ("", None):
            with self.subTest(targets=targets):
                crafted = build_make_command(Platform.GENERIC_UNIX, BuildParameters(targets=targets))
                self.assertEqual(crafted, "make -f Makefile ")
                self.assertNotIn("all", crafted)

    def test_targets_are_appended_verbatim(self) -> None:
        params = BuildParameters(targets="lib  VAR=value bin")
        self.assertTrue(build_make_command(Platform.GENERIC_UNIX, params).endswith(" lib  VAR=value bin"))

    def test_macros_round_trip_as_single_argument(self) -> None:
        macros = "CFLAGS=-O2 -g & echo; rm x"
        params = BuildParameters(macros=macros, targets="all")
        crafted = build_make_command(Platform.GENERIC_UNIX, params)
        self.assertEqual(shlex.split(crafted), ["make", "-f", "Makefile", macros, "all"])

    def test_makefile_name_is_quoted(self) -> None:
        params = BuildParameters(makefile="my rules.mk", targets="")
        self.assertEqual(shlex.split(build_make_command(Platform.GENERIC_UNIX, params))[:3], ["make", "-f", "my rules.mk"])

    def test_dry_run_flag(self) -> None:
        params = BuildParameters(targets="all", dry_run=True)
        self.assertEqual(build_make_command(Platform.GENERIC_UNIX, params), "make -f Makefile -n all")

    def test_crafting_is_idempotent(self) -> None:
        params = BuildParameters(build_dir="/src/a b", macros="X=1", targets="all")
        self.assertEqual(
            build_make_command(Platform.GENERIC_UNIX, params),
            build_make_command(Platform.GENERIC_UNIX, params),
        )


class NmakeCommandTests(unittest.TestCase):
    def test_bootstrap_precedes_nmake(self) -> None:
        params = BuildParameters(targets="all")
        self.assertEqual(
            build_make_command(Platform.WINDOWS, params),
            f'("{VCVARS}" > nul) & nmake /NOLOGO /F Makefile all',
        )

    def test_explicit_build_directory(self) -> None:
        params = BuildParameters(build_dir=r"C:\My Build", targets="")
        self.assertEqual(
            build_make_command(Platform.WINDOWS, params),
            f'cd /d "C:\\My Build" & ("{VCVARS}" > nul) & nmake /NOLOGO /F Makefile ',
        )

    def test_macros_are_double_quoted(self) -> None:
        params = BuildParameters(macros="CFG=Release", targets="install")
        self.assertTrue(build_make_command(Platform.WINDOWS, params).endswith(' "CFG=Release" install'))

    def test_custom_toolchain_location_and_logo(self) -> None:
        toolchain = MsvcToolchain(
            installation_folder=r"D:\VS\2019",
            edition="Enterprise",
            vcvars_script="vcvars32.bat",
            nologo=False,
        )
        crafted = build_make_command(Platform.WINDOWS, BuildParameters(targets=""), toolchain=toolchain)
        self.assertEqual(
            crafted,
            r'("D:\VS\2019\Enterprise\VC\Auxiliary\Build\vcvars32.bat" > nul) & nmake /F Makefile ',
        )

    def test_nmake_is_a_whole_word(self) -> None:
        crafted = build_make_command(Platform.WINDOWS, BuildParameters())
        self.assertRegex(crafted, re.compile(r"\bnmake\b"))


class UnsupportedMakePlatformTests(unittest.TestCase):
    def test_unsupported_platform_raises(self) -> None:
        with self.assertRaises(UnsupportedCombination):
            build_make_command(Platform.UNSUPPORTED, BuildParameters())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
