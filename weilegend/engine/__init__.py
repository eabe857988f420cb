"""
Battle Engine for Wei Legend.

Resolves one automatic battle per call; schedulers and commands live in
the services layer.
"""

from weilegend.engine.battle import BattleEngine
from weilegend.engine.models import BattleOptions, BattleResult, EngineConfig

__all__ = [
    "BattleEngine",
    "BattleOptions",
    "BattleResult",
    "EngineConfig",
]
