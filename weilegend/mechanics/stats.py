"""
Derived Stat Aggregation.

Combines class base stats, per-level growth, equipped items, and active
set bonuses into the combat stats used by the battle engine.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel

from weilegend.mechanics.sets import evaluate_sets
from weilegend.models.character import Character, Profession
from weilegend.models.content import SetTemplate
from weilegend.models.equipment import StatBonus

ATTACK_SPEED_RANGE = (0.82, 1.82)
CRIT_RATE_RANGE = (0.0, 0.45)
LIFESTEAL_RANGE = (0.0, 0.35)
PARALYZE_RANGE = (0.0, 0.20)

PARALYZE_PER_ITEM = 0.12
"""Paralyze chance granted by each equipped paralysis item."""


class ProfessionProfile(BaseModel):
    """Base stats at level 1 and growth per level for one class."""

    attack: int
    magic: int
    tao: int
    defense: int
    hp: int
    mp: int
    attack_growth: int
    magic_growth: int
    tao_growth: int
    defense_growth: int
    hp_growth: int
    mp_growth: int


PROFESSION_PROFILES: dict[Profession, ProfessionProfile] = {
    Profession.WARRIOR: ProfessionProfile(
        attack=22, magic=6, tao=6, defense=10, hp=260, mp=90,
        attack_growth=5, magic_growth=1, tao_growth=1,
        defense_growth=4, hp_growth=34, mp_growth=14,
    ),
    Profession.MAGE: ProfessionProfile(
        attack=8, magic=22, tao=7, defense=7, hp=180, mp=220,
        attack_growth=1, magic_growth=5, tao_growth=2,
        defense_growth=3, hp_growth=28, mp_growth=22,
    ),
    Profession.TAOIST: ProfessionProfile(
        attack=10, magic=7, tao=20, defense=8, hp=215, mp=170,
        attack_growth=2, magic_growth=1, tao_growth=5,
        defense_growth=3, hp_growth=28, mp_growth=22,
    ),
}


class DerivedStats(BaseModel):
    """Combat stats derived from a character's current state."""

    attack: int
    magic: int
    tao: int
    attack_speed: float
    crit_rate: float
    lifesteal: float
    paralyze_chance: float
    defense: int
    max_hp: int
    max_mp: int
    luck: int

    def primary(self, profession: Profession) -> int:
        """The stat the given class fights with."""
        return getattr(self, profession.primary_key)


def _clamp(value: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return max(low, min(high, value))


def equipment_totals(character: Character) -> StatBonus:
    """Sum of the effective stats of every equipped item."""
    total = StatBonus()
    for item in character.equipped():
        total = total.plus(item.effective_bonus())
    return total


def derive_stats(character: Character, sets: Sequence[SetTemplate]) -> DerivedStats:
    """
    Compute derived combat stats.

    Pure: does not mutate the character. Call again after any change to
    level, equipment, or set composition; results must not be cached.

    Args:
        character: The character
        sets: Set templates from the content catalogue

    Returns:
        DerivedStats with clamped rates
    """
    profile = PROFESSION_PROFILES[character.profession]
    growth_levels = character.level - 1
    gear = equipment_totals(character)
    bonus = evaluate_sets(character, sets).effects
    paralyze_items = sum(1 for item in character.equipped() if item.special == "paralyze")

    attack_speed = _clamp(round(1.0 + gear.attack_speed + bonus.attack_speed, 3), ATTACK_SPEED_RANGE)

    return DerivedStats(
        attack=profile.attack + growth_levels * profile.attack_growth + gear.attack + bonus.attack,
        magic=profile.magic + growth_levels * profile.magic_growth + gear.magic + bonus.magic,
        tao=profile.tao + growth_levels * profile.tao_growth + gear.tao + bonus.tao,
        attack_speed=attack_speed,
        crit_rate=_clamp(gear.crit_rate + bonus.crit_rate, CRIT_RATE_RANGE),
        lifesteal=_clamp(gear.lifesteal + bonus.lifesteal, LIFESTEAL_RANGE),
        paralyze_chance=_clamp(paralyze_items * PARALYZE_PER_ITEM, PARALYZE_RANGE),
        defense=profile.defense + growth_levels * profile.defense_growth + gear.defense + bonus.defense,
        max_hp=max(1, profile.hp + growth_levels * profile.hp_growth + gear.hp + bonus.hp),
        max_mp=max(0, profile.mp + growth_levels * profile.mp_growth + gear.mp + bonus.mp),
        luck=character.base_luck + gear.luck + bonus.luck,
    )


def clamp_resources(character: Character, sets: Sequence[SetTemplate]) -> DerivedStats:
    """Clamp hp/mp into [0, max] after anything that may change the maxima."""
    stats = derive_stats(character, sets)
    character.hp = max(0, min(stats.max_hp, character.hp))
    character.mp = max(0, min(stats.max_mp, character.mp))
    return stats
