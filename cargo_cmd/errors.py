"""Error types raised while resolving manifest commands."""
from __future__ import annotations


class CargoCmdError(RuntimeError):
    """Base class for every resolution failure.

    ``message`` describes what was being attempted and ``reason`` carries the
    detail: the offending path, pattern or the underlying diagnostic.
    """

    def __init__(self, message: str, reason: str = "") -> None:
        self.message = message
        self.reason = reason
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.reason:
            return self.message
        return f"{self.message}: {self.reason}"


class ManifestIOError(CargoCmdError):
    """A manifest file could not be opened or read."""


class ManifestParseError(CargoCmdError):
    """A manifest file is not valid TOML."""


class GlobError(CargoCmdError):
    """A matched filesystem entry could not be resolved while globbing."""


class PatternError(GlobError):
    """A workspace member pattern is not a valid glob."""


class PathConversionError(CargoCmdError):
    """A resolved path cannot be represented as a manifest path string."""


class MalformedManifest(CargoCmdError):
    """A manifest parsed but does not have the expected shape."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message, path)

    def _render(self) -> str:
        return f'Malformed manifest "{self.path}": {self.message}'


class MissingCommand(CargoCmdError):
    """The requested command is not declared in a command table."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("Command not found", name)

    def _render(self) -> str:
        return f'Command "{self.name}" not found in Cargo.toml'


__all__ = [
    "CargoCmdError",
    "GlobError",
    "MalformedManifest",
    "ManifestIOError",
    "ManifestParseError",
    "MissingCommand",
    "PathConversionError",
    "PatternError",
]
