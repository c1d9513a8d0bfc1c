"""Select, validate, craft and launch make or cmake command lines."""
from __future__ import annotations

from typing import Callable, Dict, List, Mapping, Tuple
import sys
import time

from core.command_runner import CommandRunner, ExecutionOptions, ProcessHandle

from .cmake import build_cmake_command
from .console import Console
from .errors import MissingBuildFile, MissingDirectory, UnsupportedCombination, UnsupportedPlatform
from .make import build_make_command
from .parameters import (
    CMAKE_PROJECT_FILE,
    BuildParameters,
    command_advisories,
    resolve_make_targets,
)
from .selection import (
    BuildSystem,
    Command,
    Platform,
    host_platform,
    normalize_build_system,
    normalize_command,
)
from .toolchain import MsvcToolchain


DEFAULT_POLL_INTERVAL = 1.0

Builder = Callable[..., str]


def _craft_make(
    platform: Platform,
    command: Command,
    params: BuildParameters,
    *,
    toolchain: MsvcToolchain | None = None,
    target_overrides: Mapping[str, str] | None = None,
) -> str:
    params = resolve_make_targets(command, params, target_overrides)
    return build_make_command(platform, params, toolchain=toolchain)


def _craft_cmake(
    platform: Platform,
    command: Command,
    params: BuildParameters,
    *,
    toolchain: MsvcToolchain | None = None,
    target_overrides: Mapping[str, str] | None = None,
) -> str:
    return build_cmake_command(platform, command, params, toolchain=toolchain)


BUILDERS: Dict[Tuple[Platform, BuildSystem], Builder] = {
    (Platform.WINDOWS, BuildSystem.MAKE): _craft_make,
    (Platform.MACOS, BuildSystem.MAKE): _craft_make,
    (Platform.GENERIC_UNIX, BuildSystem.MAKE): _craft_make,
    (Platform.WINDOWS, BuildSystem.CMAKE): _craft_cmake,
    (Platform.MACOS, BuildSystem.CMAKE): _craft_cmake,
    (Platform.GENERIC_UNIX, BuildSystem.CMAKE): _craft_cmake,
}


def resolve_builder(platform: Platform, build_system: BuildSystem) -> Builder:
    builder = BUILDERS.get((platform, build_system))
    if builder is None:
        raise UnsupportedCombination(platform, build_system)
    return builder


def craft_command(
    platform: Platform,
    build_system: BuildSystem | str,
    command: Command | str,
    params: BuildParameters,
    *,
    toolchain: MsvcToolchain | None = None,
    target_overrides: Mapping[str, str] | None = None,
) -> str:
    """Return the command line for ``command`` without touching the filesystem."""

    build_system = normalize_build_system(build_system)
    command = normalize_command(command)
    builder = resolve_builder(platform, build_system)
    return builder(
        platform,
        command,
        params,
        toolchain=toolchain,
        target_overrides=target_overrides,
    )


def validate_parameters(build_system: BuildSystem, params: BuildParameters) -> None:
    """Check that the directories and build files ``params`` refers to exist."""

    build_dir = params.resolved_build_dir()
    if not build_dir.is_dir():
        raise MissingDirectory("build", build_dir)

    if build_system is BuildSystem.MAKE:
        if params.makefile_path() is None:
            raise MissingBuildFile("Makefile", build_dir / params.makefile)
        return

    source_dir = params.resolved_source_dir()
    if not source_dir.is_dir():
        raise MissingDirectory("source", source_dir)
    install_dir = params.resolved_install_dir()
    if not install_dir.is_dir():
        raise MissingDirectory("install", install_dir)
    project_file = source_dir / CMAKE_PROJECT_FILE
    if not project_file.is_file():
        raise MissingBuildFile("CMake project file", project_file)


def wait_for(
    handle: ProcessHandle,
    runner: CommandRunner,
    *,
    interval: float = DEFAULT_POLL_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
) -> ProcessHandle:
    """Block until ``handle`` leaves the runner's in-progress set."""

    while runner.is_running(handle):
        sleep(interval)
    return handle


def run(
    command: Command | str,
    build_system: BuildSystem | str,
    params: BuildParameters,
    *,
    runner: CommandRunner,
    platform: Platform | None = None,
    toolchain: MsvcToolchain | None = None,
    target_overrides: Mapping[str, str] | None = None,
    console: Console | None = None,
    options: ExecutionOptions | None = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> ProcessHandle:
    """Validate ``params``, craft the command line and hand it to ``runner``.

    Every error is raised before a process is launched. The returned handle
    belongs to the caller; with ``params.wait`` set the call returns only once
    the process has finished.
    """

    console = console or Console()
    command = normalize_command(command)
    build_system = normalize_build_system(build_system)
    platform = platform or host_platform()
    if platform is Platform.UNSUPPORTED:
        raise UnsupportedPlatform(sys.platform, build_system)

    resolve_builder(platform, build_system)
    validate_parameters(build_system, params)

    advisories: List[str] = command_advisories(build_system, command, params, target_overrides)
    for advisory in advisories:
        console.warning(advisory)

    crafted = craft_command(
        platform,
        build_system,
        command,
        params,
        toolchain=toolchain,
        target_overrides=target_overrides,
    )
    console.info(f"{command} ({build_system}, {platform}): {crafted}")

    handle = runner.start(crafted, options=options, note=f"{build_system} {command}")
    if params.wait:
        console.debug(f"Waiting for '{handle.name}' to finish")
        wait_for(handle, runner, interval=poll_interval)
    return handle


__all__ = [
    "BUILDERS",
    "DEFAULT_POLL_INTERVAL",
    "craft_command",
    "resolve_builder",
    "run",
    "validate_parameters",
    "wait_for",
]
