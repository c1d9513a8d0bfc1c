"""Utilities for launching shell command lines and tracking them until they exit."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Set
import subprocess
import threading


DEFAULT_OUTPUT_NAME = "*emc-compilation*"

OutputSink = Callable[[str, str], None]


def default_name_function(command: str) -> str:
    return DEFAULT_OUTPUT_NAME


def _print_sink(name: str, line: str) -> None:
    print(f"[{name}] {line}")


@dataclass(slots=True)
class ExecutionOptions:
    """Presentation options for the output of a launched command."""

    max_line_length: int | None = None
    name_function: Callable[[str], str] = default_name_function

    def clip(self, line: str) -> str:
        if self.max_line_length and len(line) > self.max_line_length:
            return line[: self.max_line_length] + " [...]"
        return line


@dataclass(eq=False)
class ProcessHandle:
    """A launched command and the output captured from it so far."""

    command: str
    name: str
    note: str | None = None
    returncode: int | None = None
    output: List[str] = field(default_factory=list)
    process: subprocess.Popen | None = field(default=None, repr=False)

    @property
    def finished(self) -> bool:
        return self.returncode is not None


class CommandError(RuntimeError):
    """Raised when a command cannot be launched."""

    def __init__(self, command: str, reason: str):
        super().__init__(f"Failed to launch command: {command}\nreason: {reason}")
        self.command = command
        self.reason = reason


class CommandRunner:
    """Abstract command runner interface.

    Runners keep the set of handles whose processes are still alive in
    :attr:`in_progress`; it is the only registry of running commands.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._in_progress: Set[ProcessHandle] = set()

    @property
    def in_progress(self) -> frozenset[ProcessHandle]:
        with self._lock:
            return frozenset(self._in_progress)

    def is_running(self, handle: ProcessHandle) -> bool:
        with self._lock:
            return handle in self._in_progress

    def _track(self, handle: ProcessHandle) -> None:
        with self._lock:
            self._in_progress.add(handle)

    def _release(self, handle: ProcessHandle) -> None:
        with self._lock:
            self._in_progress.discard(handle)

    def start(
        self,
        command: str,
        *,
        options: ExecutionOptions | None = None,
        note: str | None = None,
    ) -> ProcessHandle:
        raise NotImplementedError


class SubprocessCommandRunner(CommandRunner):
    """Command runner that launches command lines through the system shell."""

    def __init__(self, sink: OutputSink | None = None) -> None:
        super().__init__()
        self._sink = sink or _print_sink

    def start(
        self,
        command: str,
        *,
        options: ExecutionOptions | None = None,
        note: str | None = None,
    ) -> ProcessHandle:
        options = options or ExecutionOptions()
        handle = ProcessHandle(
            command=command,
            name=options.name_function(command),
            note=note,
        )
        try:
            handle.process = subprocess.Popen(
                command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            raise CommandError(command, str(exc)) from exc

        self._track(handle)
        reader = threading.Thread(
            target=self._pump,
            args=(handle, options),
            name=f"emc-output-{handle.process.pid}",
            daemon=True,
        )
        reader.start()
        return handle

    def _pump(self, handle: ProcessHandle, options: ExecutionOptions) -> None:
        process = handle.process
        assert process is not None and process.stdout is not None
        try:
            for raw in process.stdout:
                line = options.clip(raw.rstrip("\r\n"))
                handle.output.append(line)
                self._sink(handle.name, line)
        finally:
            process.stdout.close()
            handle.returncode = process.wait()
            self._release(handle)


@dataclass(slots=True)
class RecordedCommand:
    command: str
    note: str | None
    name: str


class RecordingCommandRunner(CommandRunner):
    """Command runner that records commands instead of executing them."""

    def __init__(self) -> None:
        super().__init__()
        self.commands: List[RecordedCommand] = []

    def start(
        self,
        command: str,
        *,
        options: ExecutionOptions | None = None,
        note: str | None = None,
    ) -> ProcessHandle:
        options = options or ExecutionOptions()
        record = RecordedCommand(
            command=command,
            note=note,
            name=options.name_function(command),
        )
        self.commands.append(record)
        return ProcessHandle(command=command, name=record.name, note=note, returncode=0)

