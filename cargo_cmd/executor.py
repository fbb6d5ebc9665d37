"""Sequential execution of resolved command entries."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from core.command_runner import CommandRunner

from .commands import CommandEntry
from .context import Console


@dataclass(frozen=True, slots=True)
class ExitStatus:
    """How a shell command finished: a numeric exit code or a signal."""

    code: int | None = None
    signal: int | None = None

    @classmethod
    def from_returncode(cls, returncode: int) -> "ExitStatus":
        # subprocess reports death by signal N as -N
        if returncode < 0:
            return cls(signal=-returncode)
        return cls(code=returncode)

    @property
    def success(self) -> bool:
        return self.code == 0

    @property
    def exit_code(self) -> int:
        if self.code is None:
            return 1
        return self.code

    def describe(self) -> str:
        if self.signal is not None:
            return f"terminated by signal {self.signal}"
        return f"exit code {self.code}"


def build_command_line(template: str, extra_args: Sequence[str]) -> str:
    """Append ``extra_args`` to ``template`` separated by single spaces.

    Arguments are not quoted; the shell sees them exactly as typed.
    """

    return " ".join([template, *extra_args])


def execute(
    runner: CommandRunner,
    template: str,
    extra_args: Sequence[str] = (),
    *,
    note: str | None = None,
) -> ExitStatus:
    command = build_command_line(template, extra_args)
    result = runner.run(command, note=note)
    return ExitStatus.from_returncode(result.returncode)


def run_commands(
    entries: Iterable[CommandEntry],
    extra_args: Sequence[str],
    *,
    runner: CommandRunner,
    console: Console,
) -> int:
    """Run ``entries`` in order and return the exit code for the process.

    The first command that does not succeed stops the sequence.
    """

    entries = list(entries)
    show_headers = len(entries) > 1

    for entry in entries:
        if show_headers:
            print(f"\n[{entry.hook_name}]")
        print(f"> {build_command_line(entry.template, extra_args)}")
        status = execute(runner, entry.template, extra_args, note=entry.hook_name)
        if not status.success:
            console.error(f"Command '{entry.hook_name}' failed: {status.describe()}")
            return status.exit_code
        console.debug(f"Command '{entry.hook_name}' finished with {status.describe()}")
    return 0


__all__ = [
    "ExitStatus",
    "build_command_line",
    "execute",
    "run_commands",
]
