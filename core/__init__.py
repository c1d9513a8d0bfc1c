"""Shared core utilities for launching commands and loading configuration."""

from .command_runner import (
    CommandError,
    CommandRunner,
    ExecutionOptions,
    ProcessHandle,
    RecordedCommand,
    RecordingCommandRunner,
    SubprocessCommandRunner,
)
from .config_loader import (
    ConfigLoader,
    FILE_LOADERS,
    find_config_file,
    load_config_file,
    merge_mappings,
    split_path_list,
)

__all__ = [
    "CommandError",
    "CommandRunner",
    "ExecutionOptions",
    "ProcessHandle",
    "RecordedCommand",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "ConfigLoader",
    "FILE_LOADERS",
    "find_config_file",
    "load_config_file",
    "merge_mappings",
    "split_path_list",
]
