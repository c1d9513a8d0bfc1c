"""emc: craft and dispatch make, nmake and cmake command lines."""

from .dispatch import BUILDERS, craft_command, resolve_builder, run, validate_parameters, wait_for
from .errors import (
    EmcError,
    MissingBuildFile,
    MissingDirectory,
    UnknownBuildSystem,
    UnknownCommand,
    UnsupportedCombination,
    UnsupportedPlatform,
)
from .parameters import BuildParameters, parse_targets
from .selection import (
    BuildSystem,
    Command,
    Platform,
    detect_platform,
    host_platform,
    normalize_build_system,
    normalize_command,
)
from .toolchain import MsvcToolchain

__all__ = [
    "BUILDERS",
    "BuildParameters",
    "BuildSystem",
    "Command",
    "EmcError",
    "MissingBuildFile",
    "MissingDirectory",
    "MsvcToolchain",
    "Platform",
    "UnknownBuildSystem",
    "UnknownCommand",
    "UnsupportedCombination",
    "UnsupportedPlatform",
    "craft_command",
    "detect_platform",
    "host_platform",
    "normalize_build_system",
    "normalize_command",
    "parse_targets",
    "resolve_builder",
    "run",
    "validate_parameters",
    "wait_for",
]
