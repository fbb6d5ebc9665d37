"""Shared helpers for loading TOML configuration mappings."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import tomllib


def load_config_file(path: Path) -> Dict[str, Any]:
    """Load and decode a TOML mapping from ``path``.

    ``OSError`` and ``UnicodeDecodeError`` propagate when the file cannot be
    read; ``tomllib.TOMLDecodeError`` propagates on malformed syntax.
    """

    text = path.read_text(encoding="utf-8")
    return tomllib.loads(text)


def normalize_string_list(value: Any, *, field_name: str | None = None) -> List[str]:
    """Coerce an array value into a list of strings."""

    if value is None:
        return []

    label = f"{field_name} " if field_name else ""
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise TypeError(f"{label}must be an array of strings")

    items: List[str] = []
    for item in value:
        if not isinstance(item, str):
            raise TypeError(f"{label}entries must be strings")
        items.append(item)
    return items


def normalize_string_mapping(value: Any, *, field_name: str | None = None) -> Dict[str, str]:
    """Coerce a table value into a ``str -> str`` dictionary."""

    if value is None:
        return {}

    label = f"{field_name} " if field_name else ""
    if not isinstance(value, Mapping):
        raise TypeError(f"{label}must be a table")

    result: Dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(item, str):
            raise TypeError(f"{label}value for '{key}' must be a string")
        result[str(key)] = item
    return result


__all__ = [
    "load_config_file",
    "normalize_string_list",
    "normalize_string_mapping",
]
