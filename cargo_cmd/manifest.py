"""Manifest loading and classification.

A manifest is classified as exactly one of three shapes:

* :class:`PackageManifest` -- a ``[package]`` table and no ``[workspace]``.
* :class:`RootManifest` -- both a ``[package]`` and a ``[workspace]`` table.
* :class:`VirtualManifest` -- a ``[workspace]`` table without a package.

Workspace members are expanded from the ``members`` globs and loaded
recursively; each member must itself be a plain package manifest.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union
import tomllib

from core.config_loader import load_config_file, normalize_string_list, normalize_string_mapping

from .errors import MalformedManifest, ManifestIOError, ManifestParseError
from .paths import member_manifest_path, resolve_members

CommandTable = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class PackageManifest:
    path: str
    commands: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class WorkspaceManifest:
    members: Tuple[PackageManifest, ...] = ()
    commands: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RootManifest:
    path: str
    package: PackageManifest
    workspace: WorkspaceManifest


@dataclass(frozen=True, slots=True)
class VirtualManifest:
    path: str
    workspace: WorkspaceManifest


Manifest = Union[PackageManifest, RootManifest, VirtualManifest]


def parse(path: str | Path) -> Dict[str, Any]:
    """Read and parse the TOML document at ``path`` without validating it."""

    try:
        return load_config_file(Path(path))
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestIOError(f'Failed to read file "{path}"', str(exc)) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ManifestParseError(f'Failed to parse "{path}"', str(exc)) from exc


def _metadata_commands(path: str, section: Mapping[str, Any], scope: str) -> Dict[str, str]:
    metadata = section.get("metadata")
    if metadata is None:
        return {}
    if not isinstance(metadata, Mapping):
        raise MalformedManifest(path, f"{scope}.metadata is not a table")
    try:
        return normalize_string_mapping(metadata.get("commands"), field_name=f"{scope}.metadata.commands")
    except TypeError as exc:
        raise MalformedManifest(path, str(exc)) from exc


def _load_package(path: str, section: Any) -> PackageManifest:
    if not isinstance(section, Mapping):
        raise MalformedManifest(path, "Package is not a table")
    return PackageManifest(path=path, commands=_metadata_commands(path, section, "package"))


def _load_workspace(path: str, section: Any) -> WorkspaceManifest:
    if not isinstance(section, Mapping):
        raise MalformedManifest(path, "Workspace is not a table")

    raw_members = section.get("members")
    if raw_members is None:
        raise MalformedManifest(path, "Workspace does not contain members")
    if not isinstance(raw_members, list):
        raise MalformedManifest(path, "Workspace members is not an array")
    try:
        patterns = normalize_string_list(raw_members, field_name="workspace.members")
        excludes = normalize_string_list(section.get("exclude"), field_name="workspace.exclude")
    except TypeError as exc:
        raise MalformedManifest(path, str(exc)) from exc

    members = []
    for directory in resolve_members(patterns, excludes, root=Path(path).parent):
        member_path = member_manifest_path(directory)
        member = classify(member_path)
        if not isinstance(member, PackageManifest):
            raise MalformedManifest(member_path, "Only package members are currently supported")
        members.append(member)

    return WorkspaceManifest(
        members=tuple(members),
        commands=_metadata_commands(path, section, "workspace"),
    )


def classify(path: str | Path) -> Manifest:
    """Load the manifest at ``path`` and classify it.

    Every call re-reads the file; nothing is cached between calls.
    """

    path_str = str(path)
    document = parse(path_str)
    if not isinstance(document, Mapping):
        raise MalformedManifest(path_str, "Manifest is not a table")

    package_section = document.get("package")
    workspace_section = document.get("workspace")

    package = _load_package(path_str, package_section) if package_section is not None else None

    if workspace_section is not None:
        workspace = _load_workspace(path_str, workspace_section)
        if package is not None:
            return RootManifest(path=path_str, package=package, workspace=workspace)
        return VirtualManifest(path=path_str, workspace=workspace)

    if package is not None:
        return package

    raise MalformedManifest(path_str, "Manifest contains neither package nor workspace")


__all__ = [
    "CommandTable",
    "Manifest",
    "PackageManifest",
    "RootManifest",
    "VirtualManifest",
    "WorkspaceManifest",
    "classify",
    "parse",
]
