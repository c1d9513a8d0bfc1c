"""Command lines for make (Unix, macOS) and nmake (Windows)."""
from __future__ import annotations

from .errors import UnsupportedCombination
from .parameters import BuildParameters
from .selection import BuildSystem, Platform
from .toolchain import MsvcToolchain, quote_argument


def _tail(platform: Platform, params: BuildParameters) -> str:
    # Macros are one opaque argument; targets pass through untouched.
    text = ""
    if params.macros:
        text += f"{quote_argument(params.macros, platform)} "
    return text + (params.targets or "")


def build_unix_make_command(platform: Platform, params: BuildParameters) -> str:
    prefix = ""
    if params.build_dir_supplied:
        prefix = f"cd {quote_argument(str(params.build_dir), platform)} ; "

    command = "make"
    if params.makefile:
        command += f" -f {quote_argument(params.makefile, platform)}"
    if params.dry_run:
        command += " -n"
    return f"{prefix}{command} {_tail(platform, params)}"


def build_nmake_command(params: BuildParameters, toolchain: MsvcToolchain | None = None) -> str:
    toolchain = toolchain or MsvcToolchain()
    platform = Platform.WINDOWS

    prefix = ""
    if params.build_dir_supplied:
        prefix = f"cd /d {quote_argument(str(params.build_dir), platform)} & "

    command = "nmake"
    if toolchain.nologo:
        command += " /NOLOGO"
    if params.makefile:
        command += f" /F {quote_argument(params.makefile, platform)}"
    if params.dry_run:
        command += " /N"
    return f"{prefix}{toolchain.bootstrap_prefix()}{command} {_tail(platform, params)}"


def build_make_command(
    platform: Platform,
    params: BuildParameters,
    *,
    toolchain: MsvcToolchain | None = None,
) -> str:
    """Return the make-equivalent command line for ``platform``.

    ``params.targets`` is appended verbatim; an empty or missing target
    string leaves make to pick its default target.
    """

    if platform is Platform.WINDOWS:
        return build_nmake_command(params, toolchain)
    if platform in (Platform.MACOS, Platform.GENERIC_UNIX):
        return build_unix_make_command(platform, params)
    raise UnsupportedCombination(platform, BuildSystem.MAKE)


__all__ = ["build_make_command", "build_nmake_command", "build_unix_make_command"]
