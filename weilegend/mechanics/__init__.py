"""
Game Mechanics for Wei Legend.

Pure rules: randomness, stat derivation, set bonuses, loot, skills,
combat actions, and rewards. Nothing here performs I/O.
"""

from weilegend.mechanics.dice import Dice, DiceResult
from weilegend.mechanics.loot import generate_equipment, generate_set_piece
from weilegend.mechanics.rewards import (
    DropRoll,
    exp_to_next_level,
    grant_experience,
    roll_drops,
)
from weilegend.mechanics.sets import SetEvaluation, SetStatusRow, evaluate_sets
from weilegend.mechanics.spells import (
    SkillCast,
    add_training,
    perform_skill,
    pick_skill_priority,
    training_need,
)
from weilegend.mechanics.stats import DerivedStats, clamp_resources, derive_stats

__all__ = [
    # Randomness
    "Dice",
    "DiceResult",
    # Stats
    "DerivedStats",
    "derive_stats",
    "clamp_resources",
    # Sets
    "SetEvaluation",
    "SetStatusRow",
    "evaluate_sets",
    # Loot
    "generate_equipment",
    "generate_set_piece",
    # Skills
    "SkillCast",
    "add_training",
    "perform_skill",
    "pick_skill_priority",
    "training_need",
    # Rewards
    "DropRoll",
    "exp_to_next_level",
    "grant_experience",
    "roll_drops",
]
