"""
Storage interface definitions for Wei Legend.

Uses Protocol classes to define the contract for save storage.
The core treats saves as opaque JSON-compatible dicts keyed by slot name;
implementations can keep them in memory or on disk.
"""

from __future__ import annotations

from typing import Any, Protocol

SaveData = dict[str, Any]


class SaveRepository(Protocol):
    """
    Interface for save-slot storage.

    Read at session start, written at session boundaries. Implementations
    must return copies so callers never share state with the store.
    """

    def load(self, key: str) -> SaveData | None:
        """Get the stored save for a key, or None if absent or unreadable."""
        ...

    def save(self, key: str, data: SaveData) -> None:
        """Insert or replace the save for a key."""
        ...

    def delete(self, key: str) -> None:
        """Remove the save for a key. Missing keys are ignored."""
        ...
