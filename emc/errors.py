"""Exceptions raised while selecting, validating and crafting build commands."""
from __future__ import annotations

from pathlib import Path


class EmcError(RuntimeError):
    """Base class for all errors raised by emc."""


class UnknownCommand(EmcError, ValueError):
    """Raised when a command token names none of the canonical verbs."""

    def __init__(self, value: object):
        super().__init__(
            f"Unknown command {value!r}; expected one of: setup, build, install, uninstall, clean, fresh"
        )
        self.value = value


class UnknownBuildSystem(EmcError, ValueError):
    """Raised when a build-system token is neither make nor cmake."""

    def __init__(self, value: object):
        super().__init__(f"Unknown build system {value!r}; expected 'make' or 'cmake'")
        self.value = value


class UnsupportedCombination(EmcError):
    """Raised when no builder exists for a (platform, build system) pair."""

    def __init__(self, platform: object, build_system: object):
        super().__init__(f"No command builder for platform {platform!s} with build system {build_system!s}")
        self.platform = platform
        self.build_system = build_system


class UnsupportedPlatform(UnsupportedCombination):
    """Raised when the host operating system is not recognised."""

    def __init__(self, system_id: str, build_system: object = None):
        EmcError.__init__(self, f"Unsupported platform: {system_id}")
        self.platform = system_id
        self.build_system = build_system


class MissingDirectory(EmcError):
    def __init__(self, role: str, path: Path):
        super().__init__(f"{role.capitalize()} directory does not exist: {path}")
        self.role = role
        self.path = path


class MissingBuildFile(EmcError):
    def __init__(self, description: str, path: Path):
        super().__init__(f"{description} not found: {path}")
        self.description = description
        self.path = path


__all__ = [
    "EmcError",
    "MissingBuildFile",
    "MissingDirectory",
    "UnknownBuildSystem",
    "UnknownCommand",
    "UnsupportedCombination",
    "UnsupportedPlatform",
]
