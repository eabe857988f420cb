"""
Storage layer for Wei Legend.

Provides the save-slot interface and its implementations:
- InMemorySaveRepository: For testing
- JsonFileSaveRepository: For the command-line client
"""

from __future__ import annotations

from weilegend.db.interfaces import SaveData, SaveRepository
from weilegend.db.memory import InMemorySaveRepository, JsonFileSaveRepository

__all__ = [
    # Protocol interface
    "SaveData",
    "SaveRepository",
    # Implementations
    "InMemorySaveRepository",
    "JsonFileSaveRepository",
]
