"""
Reward and Progression Resolution.

Experience/gold awards, the level-up loop, and the independent drop
trials rolled after a victory.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from weilegend.mechanics.dice import Dice
from weilegend.mechanics.loot import generate_equipment
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import Character, ItemName
from weilegend.models.content import GameContent, MonsterTemplate
from weilegend.models.equipment import Equipment, format_equipment

EXP_ROLL_RANGE = (0.78, 1.05)
GOLD_ROLL_RANGE = (0.72, 1.04)

CONSUMABLE_DROPS = (
    ItemName.HP_POTION,
    ItemName.MP_POTION,
    ItemName.TRAINING_SCROLL,
    ItemName.STRENGTHEN_STONE,
)


def exp_to_next_level(level: int) -> int:
    return 90 + level * level * 25


def grant_experience(character: Character, amount: int, content: GameContent) -> list[str]:
    """
    Add experience and run the level-up loop.

    Each level gained fully restores hp and mp to the new maxima.

    Returns:
        One log line per level gained.
    """
    logs: list[str] = []
    character.exp += max(0, amount)
    while character.exp >= exp_to_next_level(character.level):
        character.exp -= exp_to_next_level(character.level)
        character.level += 1
        stats = derive_stats(character, content.sets)
        character.hp = stats.max_hp
        character.mp = stats.max_mp
        logs.append(f"角色升级至 Lv.{character.level}，生命与魔法完全恢复，战力显著提升。")
    return logs


def clamp_rate(rate: float) -> float:
    return max(0.0, min(1.0, rate))


def roll_exp(monster: MonsterTemplate, reward_rate: float, dice: Dice) -> int:
    factor = dice.rand_float(*EXP_ROLL_RANGE) * clamp_rate(reward_rate)
    return max(1, math.floor(monster.exp * factor))


def roll_gold(monster: MonsterTemplate, reward_rate: float, dice: Dice) -> int:
    factor = dice.rand_float(*GOLD_ROLL_RANGE) * clamp_rate(reward_rate)
    return max(1, math.floor(monster.gold * factor))


# =============================================================================
# Drops
# =============================================================================


def equipment_drop_chance(luck: int, tier: int, is_boss: bool) -> float:
    chance = 0.08 + luck * 0.007 + tier * 0.01 + (0.25 if is_boss else 0.0)
    return max(0.08, min(0.6, chance))


def consumable_drop_chance(is_boss: bool) -> float:
    return 0.14 + (0.1 if is_boss else 0.0)


def book_drop_chance(luck: int, tier: int, is_boss: bool) -> float:
    chance = 0.02 + tier * 0.006 + luck * 0.001 + (0.12 if is_boss else 0.0)
    return max(0.02, min(0.3, chance))


class DropRoll(BaseModel):
    """Everything won from one victory's drop trials."""

    equipment: list[Equipment] = Field(default_factory=list)
    items: dict[ItemName, int] = Field(default_factory=dict)
    books: list[str] = Field(default_factory=list, description="Skill template ids")
    descriptions: list[str] = Field(default_factory=list)


def roll_drops(
    character: Character,
    monster: MonsterTemplate,
    tier: int,
    luck: int,
    drop_rate: float,
    content: GameContent,
    dice: Dice,
) -> DropRoll:
    """
    Roll the three independent drop trials.

    Nothing is applied to the character here; the battle engine writes
    the result back once the battle is over.
    """
    drops = DropRoll()
    rate = clamp_rate(drop_rate)

    if dice.chance(equipment_drop_chance(luck, tier, monster.is_boss) * rate):
        item = generate_equipment(
            level=monster.level,
            tier=tier,
            luck=luck,
            is_boss=monster.is_boss,
            profession=character.profession,
            sets=content.sets,
            dice=dice,
        )
        drops.equipment.append(item)
        drops.descriptions.append(f"掉落装备：{format_equipment(item)}")

    if dice.chance(consumable_drop_chance(monster.is_boss) * rate):
        kind = dice.choice(CONSUMABLE_DROPS)
        count = dice.roll("1d2").total if kind == ItemName.HP_POTION else 1
        drops.items[kind] = drops.items.get(kind, 0) + count
        drops.descriptions.append(f"掉落物品：{kind.value} x{count}")

    if dice.chance(book_drop_chance(luck, tier, monster.is_boss) * rate):
        candidates = content.profession_skills(character.profession)
        if candidates:
            template = dice.choice(candidates)
            drops.books.append(template.id)
            drops.descriptions.append(f"掉落技能书：{template.book_name}")

    return drops


def apply_drops(character: Character, drops: DropRoll) -> None:
    character.bag.extend(drops.equipment)
    for kind, count in drops.items.items():
        character.add_item(kind, count)
    for skill_id in drops.books:
        character.skill_books[skill_id] = character.skill_books.get(skill_id, 0) + 1
