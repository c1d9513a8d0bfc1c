"""Layered emc settings loaded from TOML, JSON or YAML files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping
import os

from core.command_runner import DEFAULT_OUTPUT_NAME, ExecutionOptions
from core.config_loader import find_config_file, load_config_file, merge_mappings, split_path_list

from .console import Console
from .parameters import DEFAULT_MAKEFILE
from .selection import BuildSystem, Command, normalize_build_system, normalize_command
from .toolchain import MsvcToolchain


CONFIG_STEM = "emc"
USER_CONFIG_STEM = "config"
CONFIG_ENV_VAR = "EMC_CONFIG"


@dataclass(slots=True)
class EmcSettings:
    build_system: BuildSystem = BuildSystem.MAKE
    makefile: str = DEFAULT_MAKEFILE
    verbosity: str = "info"
    poll_interval: float = 1.0
    max_line_length: int | None = None
    output_name: str = DEFAULT_OUTPUT_NAME
    msvc: MsvcToolchain = field(default_factory=MsvcToolchain)
    targets: Dict[str, str] = field(default_factory=dict)
    sources: List[Path] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, sources: Iterable[Path] = ()) -> "EmcSettings":
        section = data.get("emc", {})
        if not isinstance(section, Mapping):
            raise TypeError("[emc] configuration section must be a mapping")

        allowed_keys = {
            "build_system",
            "makefile",
            "verbosity",
            "poll_interval",
            "max_line_length",
            "output_name",
            "msvc",
            "targets",
        }
        unknown = {str(key) for key in section.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"[emc] section contains unknown keys: {joined}")

        settings = cls(sources=list(sources))
        if "build_system" in section:
            settings.build_system = normalize_build_system(str(section["build_system"]))
        if "makefile" in section:
            settings.makefile = str(section["makefile"])
        if "verbosity" in section:
            verbosity = str(section["verbosity"]).lower()
            if verbosity not in Console.LEVELS:
                raise ValueError(f"Unknown verbosity '{verbosity}'")
            settings.verbosity = verbosity
        if "poll_interval" in section:
            interval = float(section["poll_interval"])
            if interval <= 0:
                raise ValueError("poll_interval must be positive")
            settings.poll_interval = interval
        if "max_line_length" in section:
            length = int(section["max_line_length"])
            settings.max_line_length = length if length > 0 else None
        if "output_name" in section:
            settings.output_name = str(section["output_name"])

        msvc_section = section.get("msvc")
        if isinstance(msvc_section, Mapping):
            settings.msvc = MsvcToolchain.from_mapping(msvc_section)

        targets_section = section.get("targets")
        if isinstance(targets_section, Mapping):
            for raw_command, raw_targets in targets_section.items():
                command = normalize_command(str(raw_command))
                settings.targets[command.value] = str(raw_targets)
        return settings

    def execution_options(self) -> ExecutionOptions:
        name = self.output_name
        return ExecutionOptions(
            max_line_length=self.max_line_length,
            name_function=lambda _command: name,
        )

    def make_targets_for(self, command: Command) -> str | None:
        return self.targets.get(command.value)


def _user_config_dir(env: Mapping[str, str]) -> Path:
    base = env.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "emc"
    return Path.home() / ".config" / "emc"


def discover_config_files(
    workspace: Path,
    *,
    explicit: Iterable[str] = (),
    env: Mapping[str, str] | None = None,
) -> List[Path]:
    """Return configuration files in increasing order of precedence."""

    env = os.environ if env is None else env
    files: List[Path] = []

    user_file = find_config_file(_user_config_dir(env), USER_CONFIG_STEM)
    if user_file is not None:
        files.append(user_file)

    project_file = find_config_file(workspace, CONFIG_STEM)
    if project_file is not None:
        files.append(project_file)

    named = split_path_list([env.get(CONFIG_ENV_VAR, "")], os.pathsep)
    named.extend(explicit)
    for entry in named:
        path = Path(entry)
        if not path.is_absolute():
            path = workspace / path
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        files.append(path)

    ordered: List[Path] = []
    for path in files:
        if path in ordered:
            ordered.remove(path)
        ordered.append(path)
    return ordered


def load_settings(files: Iterable[Path]) -> EmcSettings:
    merged: Dict[str, Any] = {}
    sources: List[Path] = []
    for path in files:
        merged = merge_mappings(merged, load_config_file(path))
        sources.append(path)
    return EmcSettings.from_mapping(merged, sources=sources)


__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_STEM",
    "EmcSettings",
    "discover_config_files",
    "load_settings",
]
