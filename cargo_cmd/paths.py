"""Expansion of workspace member globs into member directories."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence
import fnmatch
import os
import stat

from .errors import GlobError, PathConversionError, PatternError

MANIFEST_NAME = "Cargo.toml"


def _normalize(root: Path, path: str | Path) -> str:
    return os.path.normpath(os.path.join(root, path))


def validate_pattern(pattern: str) -> None:
    """Raise :class:`PatternError` when ``pattern`` is not a usable glob.

    ``**`` must form a whole path component and every ``[`` must open a
    character class that is closed later in the pattern.
    """

    for component in pattern.replace(os.sep, "/").split("/"):
        if "**" in component and component != "**":
            raise PatternError(
                f'Invalid glob pattern "{pattern}"',
                "recursive wildcards must form a single path component",
            )

    index = 0
    while index < len(pattern):
        if pattern[index] != "[":
            index += 1
            continue
        start = index + 1
        if start < len(pattern) and pattern[start] == "!":
            start += 1
        # a ']' directly after the opening bracket is a literal member
        if start < len(pattern) and pattern[start] == "]":
            start += 1
        close = pattern.find("]", start)
        if close == -1:
            raise PatternError(f'Invalid glob pattern "{pattern}"', "invalid range pattern")
        index = close + 1


def _has_magic(component: str) -> bool:
    return any(char in component for char in "*?[")


def _scan(directory: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as entries:
            return list(entries)
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as exc:
        raise GlobError("Error reading path for globbing", f"{directory}: {exc}") from exc


def _walk_directories(directory: Path) -> List[Path]:
    found: List[Path] = []
    for entry in _scan(directory):
        if entry.is_dir(follow_symlinks=False):
            path = directory / entry.name
            found.append(path)
            found.extend(_walk_directories(path))
    return found


def expand_pattern(pattern: str, *, root: Path) -> List[Path]:
    """Return every directory matching ``pattern`` relative to ``root``.

    Wildcards match dot-entries too. Matches keep filesystem iteration order.
    A directory that cannot be listed, or a matched entry that cannot be
    stat'ed, raises :class:`GlobError` instead of being skipped.
    """

    validate_pattern(pattern)
    if not pattern:
        return []

    pure = Path(pattern)
    parts = pure.parts
    if pure.is_absolute():
        candidates = [Path(parts[0])]
        parts = parts[1:]
    else:
        candidates = [root]

    for index, part in enumerate(parts):
        last = index == len(parts) - 1
        expanded: List[Path] = []
        for base in candidates:
            if part == "**":
                expanded.append(base)
                expanded.extend(_walk_directories(base))
            elif _has_magic(part):
                for entry in _scan(base):
                    if fnmatch.fnmatchcase(entry.name, part) and (last or entry.is_dir()):
                        expanded.append(base / entry.name)
            else:
                expanded.append(base / part)
        candidates = expanded

    matches: List[Path] = []
    for path in candidates:
        if not os.path.lexists(path):
            continue
        try:
            status = os.stat(path)
        except OSError as exc:
            raise GlobError("Error reading path for globbing", f"{path}: {exc}") from exc
        if stat.S_ISDIR(status.st_mode):
            matches.append(path)
    return matches


def resolve_members(
    patterns: Sequence[str],
    excludes: Iterable[str] = (),
    *,
    root: Path | None = None,
) -> List[Path]:
    """Expand member ``patterns`` in order, dropping exact ``excludes``.

    A match is excluded only when its normalised path equals a normalised
    exclude entry; excludes are literal paths, never patterns.
    """

    base = root if root is not None else Path(".")
    excluded = {_normalize(base, entry) for entry in excludes}

    members: List[Path] = []
    for pattern in patterns:
        for path in expand_pattern(pattern, root=base):
            if _normalize(base, path) in excluded:
                continue
            members.append(path)
    return members


def member_manifest_path(directory: Path) -> str:
    """Return the manifest path string for a member ``directory``."""

    path = directory / MANIFEST_NAME
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathConversionError("Failed to convert path to string", repr(path)) from exc
    return text


__all__ = [
    "MANIFEST_NAME",
    "expand_pattern",
    "member_manifest_path",
    "resolve_members",
    "validate_pattern",
]
