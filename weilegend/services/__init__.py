"""
Service layer for Wei Legend.

Services are the callers of the battle core: player commands, idle
hunting, saving and loading, and admin shortcuts.
"""

from __future__ import annotations

from weilegend.services.idle import IdleRunner, IdleSession, IdleSummary, start_idle
from weilegend.services.persistence import SaveService, dump_character, restore_character

__all__ = [
    "IdleRunner",
    "IdleSession",
    "IdleSummary",
    "SaveService",
    "dump_character",
    "restore_character",
    "start_idle",
]
