"""Utilities for executing shell commands with optional dry-run support."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List
import subprocess


@dataclass
class CommandResult:
    """Represents the outcome of an executed command."""

    command: str
    returncode: int


class CommandRunner:
    """Abstract command runner interface.

    Commands are complete shell command lines; the runner hands them to the
    platform shell unchanged and lets their output stream to the terminal.
    """

    def run(self, command: str, *, note: str | None = None) -> CommandResult:
        raise NotImplementedError


class SubprocessCommandRunner(CommandRunner):
    """Command runner that executes commands via :mod:`subprocess`."""

    def run(self, command: str, *, note: str | None = None) -> CommandResult:
        process = subprocess.run(command, shell=True, check=False)
        return CommandResult(command=command, returncode=process.returncode)


@dataclass(slots=True)
class RecordedCommand:
    command: str
    note: str | None


class RecordingCommandRunner(CommandRunner):
    """Command runner that records commands instead of executing them."""

    def __init__(self) -> None:
        self.commands: List[RecordedCommand] = []

    def run(self, command: str, *, note: str | None = None) -> CommandResult:
        self.commands.append(RecordedCommand(command=command, note=note))
        return CommandResult(command=command, returncode=0)

    def iter_formatted(self) -> Iterable[str]:
        for record in self.commands:
            parts: List[str] = ["[dry-run]"]
            if record.note:
                parts.append(record.note)
            parts.append(record.command)
            yield " ".join(parts)


__all__ = [
    "CommandResult",
    "CommandRunner",
    "RecordedCommand",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
]
