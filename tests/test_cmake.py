from __future__ import annotations

import unittest

from emc.cmake import build_cmake_command
from emc.errors import UnsupportedCombination
from emc.parameters import BuildParameters
from emc.selection import Command, Platform


VCVARS = r"C:\Program Files\Microsoft Visual Studio\2022\Community\VC\Auxiliary\Build\vcvars64.bat"


class CmakeVerbTests(unittest.TestCase):
    def test_verbs_with_supplied_directories(self) -> None:
        params = BuildParameters(source_dir="/src", build_dir="/build", install_dir="/opt/app")
        expected = {
            Command.SETUP: "cmake /src",
            Command.BUILD: "cmake --build /build",
            Command.INSTALL: "cmake --install /opt/app",
            Command.UNINSTALL: "cmake --uninstall",
            Command.CLEAN: "cmake --build /build -t clean",
            Command.FRESH: "cmake --fresh /build",
        }
        for command, text in expected.items():
            with self.subTest(command=command):
                self.assertEqual(build_cmake_command(Platform.GENERIC_UNIX, command, params), text)

    def test_omitted_directories_use_unquoted_shorthand(self) -> None:
        params = BuildParameters()
        self.assertEqual(build_cmake_command(Platform.MACOS, Command.SETUP, params), "cmake .")
        self.assertEqual(build_cmake_command(Platform.MACOS, Command.BUILD, params), "cmake --build .")

    def test_supplied_directories_are_quoted(self) -> None:
        params = BuildParameters(build_dir="/tmp/my build")
        self.assertEqual(
            build_cmake_command(Platform.GENERIC_UNIX, Command.BUILD, params),
            "cmake --build '/tmp/my build'",
        )

    def test_install_with_two_targets(self) -> None:
        params = BuildParameters(install_dir="/usr/local", targets="lib bin")
        self.assertEqual(
            build_cmake_command(Platform.GENERIC_UNIX, Command.INSTALL, params),
            "cmake --install /usr/local -t lib -t bin",
        )

    def test_three_targets_give_three_suffixes(self) -> None:
        params = BuildParameters(build_dir="/b", targets=" one  two three ")
        crafted = build_cmake_command(Platform.GENERIC_UNIX, Command.BUILD, params)
        self.assertEqual(crafted.count(" -t "), 3)
        self.assertTrue(crafted.endswith("-t one -t two -t three"))

    def test_empty_targets_add_no_suffix(self) -> None:
        params = BuildParameters(build_dir="/b", targets="")
        self.assertNotIn(" -t ", build_cmake_command(Platform.GENERIC_UNIX, Command.BUILD, params))

    def test_dry_run_switch_precedes_targets(self) -> None:
        params = BuildParameters(build_dir="/b", targets="app", dry_run=True)
        self.assertEqual(
            build_cmake_command(Platform.GENERIC_UNIX, Command.BUILD, params),
            "cmake --build /b -N -t app",
        )


class WindowsCmakeTests(unittest.TestCase):
    def test_build_is_prefixed_with_bootstrap(self) -> None:
        params = BuildParameters(build_dir="C:\\out")
        crafted = build_cmake_command(Platform.WINDOWS, Command.BUILD, params)
        self.assertEqual(crafted, f'("{VCVARS}" > nul) & cmake --build C:\\out')
        self.assertLess(crafted.index("vcvars64.bat"), crafted.index("cmake --build"))

    def test_windows_paths_with_spaces_use_double_quotes(self) -> None:
        params = BuildParameters(source_dir=r"C:\My Project")
        crafted = build_cmake_command(Platform.WINDOWS, Command.SETUP, params)
        self.assertTrue(crafted.endswith('cmake "C:\\My Project"'))


class UnsupportedCmakePlatformTests(unittest.TestCase):
    def test_unsupported_platform_raises(self) -> None:
        with self.assertRaises(UnsupportedCombination):
            build_cmake_command(Platform.UNSUPPORTED, Command.BUILD, BuildParameters())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
