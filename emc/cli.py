"""Command line interface for emc."""
from __future__ import annotations

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable, List
import sys

from core.command_runner import CommandError, SubprocessCommandRunner

from .config import EmcSettings, discover_config_files, load_settings
from .console import Console
from .dispatch import craft_command, run, wait_for
from .errors import EmcError
from .parameters import BuildParameters
from .selection import Command, Platform, host_platform


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(prog="emc", description="Craft and run make or cmake command lines")
    parser.add_argument(
        "-c",
        "--config",
        dest="config_files",
        action="append",
        default=[],
        metavar="PATH",
        help="Additional configuration file (repeatable; later files win)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug output")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only report errors")

    parser.add_argument("command", choices=[command.value for command in Command], help="Build action to perform")
    parser.add_argument("-s", "--build-system", help="Build system to use: make or cmake (default from configuration)")
    parser.add_argument("-d", "--build-dir", help="Build directory (default: current directory)")
    parser.add_argument("-S", "--source-dir", help="Source directory holding CMakeLists.txt (cmake only)")
    parser.add_argument("-i", "--install-dir", help="Install directory (cmake only)")
    parser.add_argument("-f", "--makefile", help="Makefile name or path (make only)")
    parser.add_argument("-D", "--macros", default="", help="Macro definitions passed to make, e.g. 'CC=clang'")
    parser.add_argument(
        "-t",
        "--targets",
        action="append",
        default=None,
        metavar="TARGETS",
        help="Space-separated targets (repeatable); pass '' to use make's default target",
    )
    parser.add_argument("-n", "--dry-run", action="store_true", help="Ask the build tool for a dry run")
    parser.add_argument("-w", "--wait", action="store_true", help="Exit with the build's exit code")
    parser.add_argument("-p", "--print", dest="print_only", action="store_true", help="Print the command line without running it")
    parser.add_argument(
        "--platform",
        choices=[platform.value for platform in Platform if platform is not Platform.UNSUPPORTED],
        help="Target platform for --print (default: host platform)",
    )
    return parser.parse_args(list(argv))


def _console_level(args: Namespace, settings: EmcSettings) -> str:
    if args.verbose:
        return "debug"
    if args.quiet:
        return "error"
    return settings.verbosity


def _build_parameters(args: Namespace, settings: EmcSettings) -> BuildParameters:
    targets: str | None = None
    if args.targets is not None:
        targets = " ".join(value for value in args.targets if value)
    return BuildParameters(
        build_dir=args.build_dir,
        source_dir=args.source_dir,
        install_dir=args.install_dir,
        makefile=args.makefile or settings.makefile,
        macros=args.macros,
        targets=targets,
        dry_run=args.dry_run,
        wait=args.wait,
    )


def _handle_print(args: Namespace, settings: EmcSettings, params: BuildParameters) -> int:
    platform = Platform(args.platform) if args.platform else host_platform()
    crafted = craft_command(
        platform,
        args.build_system or settings.build_system,
        args.command,
        params,
        toolchain=settings.msvc,
        target_overrides=settings.targets,
    )
    print(crafted)
    return 0


def _handle_run(args: Namespace, settings: EmcSettings, params: BuildParameters, console: Console) -> int:
    runner = SubprocessCommandRunner()
    handle = run(
        args.command,
        args.build_system or settings.build_system,
        params,
        runner=runner,
        toolchain=settings.msvc,
        target_overrides=settings.targets,
        console=console,
        options=settings.execution_options(),
        poll_interval=settings.poll_interval,
    )
    # The build's output pipe closes when this process exits, so always wait.
    wait_for(handle, runner, interval=settings.poll_interval)
    returncode = handle.returncode or 0
    if returncode:
        console.error(f"'{handle.command}' exited with code {returncode}")
    return returncode if params.wait else 0


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    workspace = Path.cwd()

    try:
        files: List[Path] = discover_config_files(workspace, explicit=args.config_files)
        settings = load_settings(files)
    except (OSError, TypeError, ValueError) as exc:
        print(f"Error: {exc}")
        return 2

    console = Console(_console_level(args, settings))
    for path in settings.sources:
        console.debug(f"Loaded configuration from {path}")

    params = _build_parameters(args, settings)
    try:
        if args.print_only:
            return _handle_print(args, settings, params)
        return _handle_run(args, settings, params, console)
    except EmcError as exc:
        print(f"Error: {exc}")
        return 2
    except CommandError as exc:
        console.error(str(exc))
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
