"""Shared core utilities for configuration loading and command execution."""

from .command_runner import (
    CommandResult,
    CommandRunner,
    RecordedCommand,
    RecordingCommandRunner,
    SubprocessCommandRunner,
)
from .config_loader import (
    load_config_file,
    normalize_string_list,
    normalize_string_mapping,
)

__all__ = [
    "CommandResult",
    "CommandRunner",
    "RecordedCommand",
    "RecordingCommandRunner",
    "SubprocessCommandRunner",
    "load_config_file",
    "normalize_string_list",
    "normalize_string_mapping",
]
