"""Run user-defined commands declared in Cargo manifest metadata."""
from __future__ import annotations

from .commands import CommandEntry, aggregate, commands_for, resolve_commands
from .errors import (
    CargoCmdError,
    GlobError,
    MalformedManifest,
    ManifestIOError,
    ManifestParseError,
    MissingCommand,
    PathConversionError,
    PatternError,
)
from .manifest import (
    PackageManifest,
    RootManifest,
    VirtualManifest,
    WorkspaceManifest,
    classify,
    parse,
)
from .paths import resolve_members

__all__ = [
    "CargoCmdError",
    "CommandEntry",
    "GlobError",
    "MalformedManifest",
    "ManifestIOError",
    "ManifestParseError",
    "MissingCommand",
    "PackageManifest",
    "PathConversionError",
    "PatternError",
    "RootManifest",
    "VirtualManifest",
    "WorkspaceManifest",
    "aggregate",
    "classify",
    "commands_for",
    "parse",
    "resolve_commands",
    "resolve_members",
]
