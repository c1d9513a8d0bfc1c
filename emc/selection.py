"""Canonical command, build-system and platform selection."""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
import sys

from .errors import UnknownBuildSystem, UnknownCommand


class Command(str, Enum):
    SETUP = "setup"
    BUILD = "build"
    INSTALL = "install"
    UNINSTALL = "uninstall"
    CLEAN = "clean"
    FRESH = "fresh"

    def __str__(self) -> str:
        return self.value


class BuildSystem(str, Enum):
    MAKE = "make"
    CMAKE = "cmake"

    def __str__(self) -> str:
        return self.value


class Platform(str, Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    GENERIC_UNIX = "generic-unix"
    UNSUPPORTED = "unsupported"

    def __str__(self) -> str:
        return self.value


_BUILD_SYSTEM_ALIASES = {
    "make": BuildSystem.MAKE,
    "nmake": BuildSystem.MAKE,
    "gmake": BuildSystem.MAKE,
    "cmake": BuildSystem.CMAKE,
}

_UNIX_PREFIXES = ("linux", "freebsd", "openbsd", "netbsd", "dragonfly", "gnu", "cygwin", "msys")


def _token(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip().lstrip(":").lower()


def normalize_command(value: Command | str) -> Command:
    """Return the canonical :class:`Command` for ``value``.

    ``value`` may be a :class:`Command` or a case-insensitive string; a
    leading ``:`` is tolerated so keyword-style tokens such as ``":build"``
    are accepted too.
    """

    if isinstance(value, Command):
        return value
    token = _token(value)
    if token:
        try:
            return Command(token)
        except ValueError:
            pass
    raise UnknownCommand(value)


def normalize_build_system(value: BuildSystem | str) -> BuildSystem:
    if isinstance(value, BuildSystem):
        return value
    token = _token(value)
    if token in _BUILD_SYSTEM_ALIASES:
        return _BUILD_SYSTEM_ALIASES[token]
    raise UnknownBuildSystem(value)


def detect_platform(system_id: str | None = None) -> Platform:
    """Map an operating-system identifier (``sys.platform`` style) to a :class:`Platform`."""

    ident = (system_id if system_id is not None else sys.platform).lower()
    if ident in {"win32", "windows", "windows-nt"}:
        return Platform.WINDOWS
    if ident == "darwin":
        return Platform.MACOS
    if ident.startswith(_UNIX_PREFIXES) or "bsd" in ident:
        return Platform.GENERIC_UNIX
    return Platform.UNSUPPORTED


@lru_cache(maxsize=1)
def host_platform() -> Platform:
    return detect_platform()


__all__ = [
    "BuildSystem",
    "Command",
    "Platform",
    "detect_platform",
    "host_platform",
    "normalize_build_system",
    "normalize_command",
]
