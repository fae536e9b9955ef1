"""User metadata normalisation and merge helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

MergeMetadata = Callable[[dict[str, Any], dict[str, Any]], dict[str, Any]]


def _header_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def stringify_metadata(metadata: Any) -> dict[str, str]:
    """Return metadata as the string-to-string mapping the object store accepts.

    Entries with a None value are dropped.
    """
    if not metadata or not isinstance(metadata, Mapping):
        return {}
    return {
        str(key): _header_value(value) for key, value in metadata.items() if value is not None
    }


def shallow_merge(current: Mapping[str, Any], update: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay ``update`` on ``current``; a None value in ``update`` removes the key."""
    merged = dict(current)
    for key, value in update.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged
