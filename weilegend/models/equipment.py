"""
Equipment Models for Wei Legend.

Defines equipment slots, rarity tiers, additive stat blocks, and the
equipment item itself along with its effective-stat rules.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field


class EquipmentSlot(str, Enum):
    """The ten fixed equipment slots, in display order."""

    HELMET = "helmet"
    NECKLACE = "necklace"
    LEFT_BRACELET = "leftBracelet"
    RIGHT_BRACELET = "rightBracelet"
    LEFT_RING = "leftRing"
    RIGHT_RING = "rightRing"
    BELT = "belt"
    BOOTS = "boots"
    WEAPON = "weapon"
    ARMOR = "armor"

    @property
    def display_name(self) -> str:
        return SLOT_NAMES[self]


SLOT_ORDER: list[EquipmentSlot] = list(EquipmentSlot)

SLOT_NAMES: dict[EquipmentSlot, str] = {
    EquipmentSlot.HELMET: "头盔",
    EquipmentSlot.NECKLACE: "项链",
    EquipmentSlot.LEFT_BRACELET: "左手镯",
    EquipmentSlot.RIGHT_BRACELET: "右手镯",
    EquipmentSlot.LEFT_RING: "左戒指",
    EquipmentSlot.RIGHT_RING: "右戒指",
    EquipmentSlot.BELT: "腰带",
    EquipmentSlot.BOOTS: "靴子",
    EquipmentSlot.WEAPON: "武器",
    EquipmentSlot.ARMOR: "衣服",
}


class Rarity(str, Enum):
    """Equipment rarity, ordered from common to epic."""

    COMMON = "普通"
    FINE = "精良"
    RARE = "稀有"
    EPIC = "史诗"

    @property
    def rank(self) -> int:
        """Ordinal position (0 = common, 3 = epic)."""
        return RARITY_ORDER.index(self)


RARITY_ORDER: list[Rarity] = list(Rarity)

SetColor = Literal["crimson", "azure", "jade", "amber"]

PRIMARY_KEYS: tuple[str, ...] = ("attack", "magic", "tao")
"""The three class-flavored primary attributes."""

STRENGTHEN_KEYS: frozenset[str] = frozenset(
    {"attack", "magic", "tao", "defense", "hp", "mp"}
)
"""Stats that scale by 12% of base per strengthen level."""

STRENGTHEN_RATE = 0.12
STRENGTHEN_SPEED_STEP = 0.005


# =============================================================================
# Stat Blocks
# =============================================================================


class StatBonus(BaseModel):
    """
    An additive block of combat stats.

    Used for elite affixes, set tier bonuses, and aggregated totals.
    """

    attack: int = 0
    magic: int = 0
    tao: int = 0
    attack_speed: float = 0.0
    defense: int = 0
    hp: int = 0
    mp: int = 0
    luck: int = 0
    crit_rate: float = 0.0
    lifesteal: float = 0.0

    def is_empty(self) -> bool:
        """Check whether every field is zero."""
        return all(value == 0 for value in self.model_dump().values())

    def plus(self, other: StatBonus) -> StatBonus:
        """Return the field-wise sum of two blocks."""
        mine = self.model_dump()
        theirs = other.model_dump()
        return StatBonus(**{key: mine[key] + theirs[key] for key in mine})

    def describe(self) -> str:
        """Short human-readable summary of the non-zero fields."""
        labels = {
            "attack": "攻击",
            "magic": "魔法",
            "tao": "道术",
            "attack_speed": "攻速",
            "defense": "防御",
            "hp": "生命",
            "mp": "魔法值",
            "luck": "幸运",
            "crit_rate": "暴击",
            "lifesteal": "吸血",
        }
        parts = []
        for key, value in self.model_dump().items():
            if not value:
                continue
            if key in ("attack_speed", "crit_rate", "lifesteal"):
                parts.append(f"{labels[key]}+{value * 100:g}%")
            else:
                parts.append(f"{labels[key]}+{value}")
        return " ".join(parts) if parts else "无"


# =============================================================================
# Equipment
# =============================================================================


def new_equipment_id() -> str:
    """Generate a short unique equipment id."""
    return f"eq_{uuid4().hex[:8]}"


class Equipment(BaseModel):
    """
    A piece of equipment.

    Immutable once generated except for ``strengthen`` and the base
    luck raised by lucky oil.
    """

    id: str = Field(default_factory=new_equipment_id)
    name: str = Field(min_length=1)
    slot: EquipmentSlot
    level_req: int = Field(default=1, ge=1)
    rarity: Rarity = Rarity.COMMON

    attack: int = 0
    magic: int = 0
    tao: int = 0
    attack_speed: float = 0.0
    defense: int = 0
    hp: int = 0
    mp: int = 0
    luck: int = 0

    strengthen: int = Field(default=0, ge=0)
    is_elite: bool = False
    elite_bonus: StatBonus = Field(default_factory=StatBonus)
    special: Literal["paralyze"] | None = None

    set_id: str | None = None
    set_name: str | None = None
    set_color: SetColor | None = None

    def stat(self, key: str) -> float:
        """
        Effective value of one stat.

        base + elite + floor(base * 0.12 * strengthen) for the scaling stats;
        attack speed gains a flat 0.005 per strengthen level when the item
        carries base attack speed; luck is base + elite.
        """
        base = getattr(self, key)
        elite = getattr(self.elite_bonus, key)
        if key in STRENGTHEN_KEYS:
            return base + elite + int(base * STRENGTHEN_RATE * self.strengthen)
        if key == "attack_speed":
            bonus = STRENGTHEN_SPEED_STEP * self.strengthen if base > 0 else 0.0
            return round(base + elite + bonus, 3)
        return base + elite

    def effective_bonus(self) -> StatBonus:
        """All effective stats of this item as one additive block."""
        return StatBonus(
            attack=int(self.stat("attack")),
            magic=int(self.stat("magic")),
            tao=int(self.stat("tao")),
            attack_speed=self.stat("attack_speed"),
            defense=int(self.stat("defense")),
            hp=int(self.stat("hp")),
            mp=int(self.stat("mp")),
            luck=int(self.stat("luck")),
        )

    @property
    def display_name(self) -> str:
        suffix = "·极品" if self.is_elite else ""
        return f"{self.name}{suffix}"


def format_equipment(item: Equipment) -> str:
    """Formatted one-line description used in logs and the bag listing."""
    parts = []
    for key, label in (("attack", "攻"), ("magic", "魔"), ("tao", "道")):
        value = int(item.stat(key))
        if value:
            parts.append(f"{label}{value}")
    speed = item.stat("attack_speed")
    if speed:
        parts.append(f"速+{speed:.3f}")
    parts.append(f"防{int(item.stat('defense'))}")
    parts.append(f"生{int(item.stat('hp'))}")
    parts.append(f"蓝{int(item.stat('mp'))}")
    parts.append(f"运{int(item.stat('luck'))}")

    tags = ""
    if item.set_name:
        tags += f"【{item.set_name}】"
    if item.special == "paralyze":
        tags += "〔麻痹〕"
    return (
        f"{tags}{item.display_name} [{item.rarity.value}] +{item.strengthen} "
        f"({' '.join(parts)})"
    )
