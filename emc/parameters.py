"""Build parameters and the per-command defaults shared by the builders."""
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Mapping
import re

from .selection import BuildSystem, Command


DEFAULT_MAKEFILE = "Makefile"
CMAKE_PROJECT_FILE = "CMakeLists.txt"
DEFAULT_DIRECTORY_SHORTHAND = "."


def parse_targets(text: str | None) -> List[str]:
    """Split a raw target string on whitespace, dropping empty entries."""

    if not text:
        return []
    return text.split()


@dataclass(frozen=True, slots=True)
class BuildParameters:
    """Parameters of a single make or cmake invocation.

    Directory fields and ``targets`` are ``None`` when the caller did not
    supply them; the builders only emit ``cd`` prefixes, quoted paths or
    target text for values that were supplied.
    """

    build_dir: Path | str | None = None
    source_dir: Path | str | None = None
    install_dir: Path | str | None = None
    makefile: str = DEFAULT_MAKEFILE
    macros: str = ""
    targets: str | None = None
    dry_run: bool = False
    wait: bool = False

    @staticmethod
    def _resolve(value: Path | str | None) -> Path:
        return Path(value) if value is not None else Path.cwd()

    @property
    def build_dir_supplied(self) -> bool:
        return self.build_dir is not None

    @property
    def source_dir_supplied(self) -> bool:
        return self.source_dir is not None

    @property
    def install_dir_supplied(self) -> bool:
        return self.install_dir is not None

    @property
    def targets_supplied(self) -> bool:
        return self.targets is not None

    def resolved_build_dir(self) -> Path:
        return self._resolve(self.build_dir)

    def resolved_source_dir(self) -> Path:
        return self._resolve(self.source_dir)

    def resolved_install_dir(self) -> Path:
        return self._resolve(self.install_dir)

    def target_list(self) -> List[str]:
        return parse_targets(self.targets)

    def with_targets(self, targets: str | None) -> "BuildParameters":
        return replace(self, targets=targets)

    def makefile_path(self) -> Path | None:
        """Locate the makefile at its literal path or inside the build directory."""

        literal = Path(self.makefile)
        if literal.is_file():
            return literal
        candidate = self.resolved_build_dir() / self.makefile
        if candidate.is_file():
            return candidate
        return None


@dataclass(frozen=True, slots=True)
class CommandDefaults:
    """Default make target text for a command and the advisory attached to it."""

    make_targets: str
    advisory: str | None = None
    check_target: bool = False


COMMAND_DEFAULTS: Dict[Command, CommandDefaults] = {
    Command.SETUP: CommandDefaults(
        "setup",
        advisory="make has no native setup step; the makefile does not define a 'setup' target",
        check_target=True,
    ),
    Command.BUILD: CommandDefaults(""),
    Command.INSTALL: CommandDefaults("install"),
    Command.UNINSTALL: CommandDefaults("uninstall"),
    Command.CLEAN: CommandDefaults("clean"),
    Command.FRESH: CommandDefaults(
        "fresh",
        advisory="make has no native fresh step; the makefile does not define a 'fresh' target",
        check_target=True,
    ),
}

CMAKE_ADVISORIES: Dict[Command, str] = {
    Command.UNINSTALL: "cmake has no uninstall command; 'cmake --uninstall' is not guaranteed to do anything",
}


def default_make_targets(command: Command, overrides: Mapping[str, str] | None = None) -> str:
    if overrides and command.value in overrides:
        return str(overrides[command.value])
    return COMMAND_DEFAULTS[command].make_targets


def resolve_make_targets(
    command: Command,
    params: BuildParameters,
    overrides: Mapping[str, str] | None = None,
) -> BuildParameters:
    """Fill in the command's default make targets unless the caller supplied some."""

    if params.targets_supplied:
        return params
    return params.with_targets(default_make_targets(command, overrides))


def makefile_defines_target(makefile: Path, target: str) -> bool:
    pattern = re.compile(rf"^(?:[^\s:#=]+\s+)*{re.escape(target)}(?:\s+[^\s:#=]+)*\s*::?(?!=)", re.M)
    try:
        text = makefile.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return False
    return bool(pattern.search(text))


def command_advisories(
    build_system: BuildSystem,
    command: Command,
    params: BuildParameters,
    overrides: Mapping[str, str] | None = None,
) -> List[str]:
    """Return warnings for commands the underlying tool may silently ignore."""

    if build_system is BuildSystem.CMAKE:
        advisory = CMAKE_ADVISORIES.get(command)
        return [advisory] if advisory else []

    defaults = COMMAND_DEFAULTS[command]
    if not defaults.check_target or params.targets_supplied:
        return []
    targets = parse_targets(default_make_targets(command, overrides))
    makefile = params.makefile_path()
    if makefile is not None and targets and all(makefile_defines_target(makefile, t) for t in targets):
        return []
    return [defaults.advisory] if defaults.advisory else []


__all__ = [
    "BuildParameters",
    "CMAKE_ADVISORIES",
    "CMAKE_PROJECT_FILE",
    "COMMAND_DEFAULTS",
    "CommandDefaults",
    "DEFAULT_DIRECTORY_SHORTHAND",
    "DEFAULT_MAKEFILE",
    "command_advisories",
    "default_make_targets",
    "makefile_defines_target",
    "parse_targets",
    "resolve_make_targets",
]
