"""MSVC environment bootstrap settings and shell quoting rules."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import Any, Mapping
import re
import shlex

from .selection import Platform


DEFAULT_MSVC_FOLDER = r"C:\Program Files\Microsoft Visual Studio\2022"
DEFAULT_MSVC_EDITION = "Community"
DEFAULT_VCVARS_FOLDER = r"VC\Auxiliary\Build"
DEFAULT_VCVARS_SCRIPT = "vcvars64.bat"
WINDOWS_NULL_DEVICE = "nul"

_CMD_SPECIAL = re.compile(r'[\s&|<>^()%!",;=]')


def quote_windows(text: str) -> str:
    """Quote ``text`` as a single ``cmd.exe`` argument."""

    if text and not _CMD_SPECIAL.search(text):
        return text
    return '"' + text.replace('"', '\\"') + '"'


def quote_argument(text: str, platform: Platform) -> str:
    """Quote ``text`` for the shell that runs commands on ``platform``."""

    if platform is Platform.WINDOWS:
        return quote_windows(text)
    return shlex.quote(text)


@dataclass(frozen=True, slots=True)
class MsvcToolchain:
    """Location of the Visual Studio compiler-environment bootstrap script."""

    installation_folder: str = DEFAULT_MSVC_FOLDER
    edition: str = DEFAULT_MSVC_EDITION
    vcvars_folder: str = DEFAULT_VCVARS_FOLDER
    vcvars_script: str = DEFAULT_VCVARS_SCRIPT
    nologo: bool = True

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MsvcToolchain":
        allowed_keys = {"installation_folder", "edition", "vcvars_folder", "vcvars_script", "nologo"}
        unknown = {str(key) for key in data.keys() if str(key) not in allowed_keys}
        if unknown:
            joined = ", ".join(sorted(unknown))
            raise ValueError(f"MSVC settings contain unknown keys: {joined}")
        values = {key: str(value) for key, value in data.items() if key != "nologo"}
        if "nologo" in data:
            values["nologo"] = bool(data["nologo"])
        return cls(**values)

    def vcvars_path(self) -> str:
        path = PureWindowsPath(self.installation_folder, self.edition, self.vcvars_folder, self.vcvars_script)
        return str(path)

    def bootstrap_prefix(self) -> str:
        """Command text that loads the compiler environment with its banner suppressed."""

        return f'("{self.vcvars_path()}" > {WINDOWS_NULL_DEVICE}) & '


__all__ = [
    "DEFAULT_MSVC_EDITION",
    "DEFAULT_MSVC_FOLDER",
    "DEFAULT_VCVARS_FOLDER",
    "DEFAULT_VCVARS_SCRIPT",
    "MsvcToolchain",
    "WINDOWS_NULL_DEVICE",
    "quote_argument",
    "quote_windows",
]
