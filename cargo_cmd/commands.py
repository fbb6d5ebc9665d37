"""Lookup of named commands and their ``pre``/``post`` hooks."""
from __future__ import annotations

from typing import List, NamedTuple

from .errors import MissingCommand
from .manifest import (
    CommandTable,
    Manifest,
    PackageManifest,
    RootManifest,
    VirtualManifest,
    WorkspaceManifest,
    classify,
)


class CommandEntry(NamedTuple):
    hook_name: str
    template: str


def hook_names(name: str) -> tuple[str, str, str]:
    return (f"pre{name}", name, f"post{name}")


def commands_for(table: CommandTable, name: str) -> List[CommandEntry]:
    """Return the ``pre<name>``, ``<name>``, ``post<name>`` entries of ``table``.

    Hooks alone never satisfy a request: :class:`MissingCommand` is raised
    when ``name`` itself is not declared.
    """

    if name not in table:
        raise MissingCommand(name)
    return [CommandEntry(hook, table[hook]) for hook in hook_names(name) if hook in table]


def _commands_or_empty(table: CommandTable, name: str) -> List[CommandEntry]:
    try:
        return commands_for(table, name)
    except MissingCommand:
        return []


def _aggregate_workspace(workspace: WorkspaceManifest, name: str) -> List[CommandEntry]:
    entries = _commands_or_empty(workspace.commands, name)
    for member in workspace.members:
        entries.extend(_commands_or_empty(member.commands, name))
    return entries


def aggregate(manifest: Manifest | WorkspaceManifest, name: str) -> List[CommandEntry]:
    """Collect the ordered command entries for ``name`` across ``manifest``.

    Within a workspace, scopes and members without the command contribute
    nothing. A missing command is fatal for a plain package, and for a root
    or virtual manifest when no scope at all produced an entry.
    """

    if isinstance(manifest, PackageManifest):
        return commands_for(manifest.commands, name)
    if isinstance(manifest, WorkspaceManifest):
        return _aggregate_workspace(manifest, name)

    if isinstance(manifest, RootManifest):
        entries = _commands_or_empty(manifest.package.commands, name)
        entries.extend(_aggregate_workspace(manifest.workspace, name))
    elif isinstance(manifest, VirtualManifest):
        entries = _aggregate_workspace(manifest.workspace, name)
    else:
        raise TypeError(f"Unsupported manifest type: {type(manifest).__name__}")

    if not entries:
        raise MissingCommand(name)
    return entries


def resolve_commands(path: str, name: str) -> List[CommandEntry]:
    """Classify the manifest at ``path`` and aggregate ``name`` across it."""

    return aggregate(classify(path), name)


__all__ = [
    "CommandEntry",
    "aggregate",
    "commands_for",
    "hook_names",
    "resolve_commands",
]
