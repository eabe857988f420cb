"""
Character Models for Wei Legend.

The persistent character: profession, progression, inventory, equipment,
learned skills, and auto-potion settings.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from weilegend.models.equipment import SLOT_ORDER, Equipment, EquipmentSlot


class Profession(str, Enum):
    """The three playable classes."""

    WARRIOR = "战士"
    MAGE = "法师"
    TAOIST = "道士"

    @property
    def primary_key(self) -> str:
        """Name of the stat this class fights with."""
        return {
            Profession.WARRIOR: "attack",
            Profession.MAGE: "magic",
            Profession.TAOIST: "tao",
        }[self]


class ItemName(str, Enum):
    """Consumables tracked as inventory counts."""

    HP_POTION = "金创药"
    MP_POTION = "魔法药"
    TRAINING_SCROLL = "修炼卷轴"
    STRENGTHEN_STONE = "强化石"
    LUCKY_OIL = "幸运油"


POTION_THRESHOLD_MIN = 5
POTION_THRESHOLD_MAX = 95


class PotionConfig(BaseModel):
    """Auto-potion thresholds, as percentages of max hp/mp."""

    auto_hp_enabled: bool = True
    auto_hp_threshold: int = Field(
        default=35, ge=POTION_THRESHOLD_MIN, le=POTION_THRESHOLD_MAX
    )
    auto_mp_enabled: bool = True
    auto_mp_threshold: int = Field(
        default=25, ge=POTION_THRESHOLD_MIN, le=POTION_THRESHOLD_MAX
    )


class SkillState(BaseModel):
    """Per-character progress for one learned skill."""

    template_id: str
    level: int = Field(default=1, ge=1)
    training: int = Field(default=0, ge=0)
    auto_use: bool = True
    cooldown_left: int = Field(default=0, ge=0)


def _empty_equipment() -> dict[EquipmentSlot, Equipment | None]:
    return {slot: None for slot in SLOT_ORDER}


def _empty_inventory() -> dict[ItemName, int]:
    return {item: 0 for item in ItemName}


class Character(BaseModel):
    """
    The player's persistent character.

    Mutated in place by battles and commands. Callers must not run two
    operations against the same character concurrently.
    """

    name: str = Field(min_length=1)
    profession: Profession
    level: int = Field(default=1, ge=1)
    exp: int = Field(default=0, ge=0)
    gold: int = Field(default=0, ge=0)
    base_luck: int = Field(default=1, ge=0)
    hp: int = Field(default=0, ge=0)
    mp: int = Field(default=0, ge=0)

    inventory: dict[ItemName, int] = Field(default_factory=_empty_inventory)
    skill_books: dict[str, int] = Field(default_factory=dict)
    equipments: dict[EquipmentSlot, Equipment | None] = Field(
        default_factory=_empty_equipment
    )
    bag: list[Equipment] = Field(default_factory=list)
    skills: dict[str, SkillState] = Field(default_factory=dict)
    potion_config: PotionConfig = Field(default_factory=PotionConfig)

    def equipped(self) -> list[Equipment]:
        """Equipped items in slot order."""
        return [
            item for slot in SLOT_ORDER if (item := self.equipments.get(slot)) is not None
        ]

    def count(self, item: ItemName) -> int:
        return self.inventory.get(item, 0)

    def add_item(self, item: ItemName, amount: int) -> None:
        self.inventory[item] = max(0, self.count(item) + amount)
