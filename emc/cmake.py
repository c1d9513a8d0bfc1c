"""Command lines for the cmake meta-build tool."""
from __future__ import annotations

from typing import Callable, Dict

from .errors import UnsupportedCombination
from .parameters import DEFAULT_DIRECTORY_SHORTHAND, BuildParameters
from .selection import BuildSystem, Command, Platform
from .toolchain import MsvcToolchain, quote_argument


def _directory(value: object, platform: Platform) -> str:
    if value is None:
        return DEFAULT_DIRECTORY_SHORTHAND
    return quote_argument(str(value), platform)


_VERBS: Dict[Command, Callable[[BuildParameters, Platform], str]] = {
    Command.SETUP: lambda p, pl: f"cmake {_directory(p.source_dir, pl)}",
    Command.BUILD: lambda p, pl: f"cmake --build {_directory(p.build_dir, pl)}",
    Command.INSTALL: lambda p, pl: f"cmake --install {_directory(p.install_dir, pl)}",
    Command.UNINSTALL: lambda p, pl: "cmake --uninstall",
    Command.CLEAN: lambda p, pl: f"cmake --build {_directory(p.build_dir, pl)} -t clean",
    Command.FRESH: lambda p, pl: f"cmake --fresh {_directory(p.build_dir, pl)}",
}


def build_cmake_command(
    platform: Platform,
    command: Command,
    params: BuildParameters,
    *,
    toolchain: MsvcToolchain | None = None,
) -> str:
    """Return the cmake command line implementing ``command``."""

    if platform not in (Platform.WINDOWS, Platform.MACOS, Platform.GENERIC_UNIX):
        raise UnsupportedCombination(platform, BuildSystem.CMAKE)

    text = _VERBS[command](params, platform)
    if params.dry_run:
        text += " -N"
    for target in params.target_list():
        text += f" -t {target}"

    if platform is Platform.WINDOWS:
        text = (toolchain or MsvcToolchain()).bootstrap_prefix() + text
    return text


__all__ = ["build_cmake_command"]
