"""
Static Content Models for Wei Legend.

Skill templates, set templates, monsters, maps, and the shop list.
A GameContent catalogue bundles them and is passed, read-only, to every
part of the core that needs reference data.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from weilegend.models.character import ItemName, Profession
from weilegend.models.equipment import EquipmentSlot, SetColor, StatBonus


class SkillKind(str, Enum):
    """What a skill does when cast."""

    ATTACK = "attack"
    SHIELD = "shield"
    POISON = "poison"
    HEAL = "heal"
    SUMMON = "summon"


# =============================================================================
# Skills
# =============================================================================


class StrikeProfile(BaseModel):
    """
    Per-skill strike behavior for attack skills.

    Carries the skill's narration and crit tuning so the combat loop never
    branches on skill ids. ``flavor`` and ``crit_flavor`` are format strings
    receiving ``name`` and ``damage``.
    """

    model_config = ConfigDict(frozen=True)

    flavor: str
    crit_flavor: str | None = None
    crit_multiplier: float = Field(default=1.3, ge=1.3, le=1.55)
    crit_base: float = Field(default=0.05, ge=0.0, le=1.0)
    shock_chance: float = Field(default=0.0, ge=0.0, le=1.0)
    shock_text: str = ""

    def crit_rate(self, luck: int, attack_speed: float, crit_bonus: float) -> float:
        """Chance this skill crits for a caster with the given stats."""
        rate = (
            self.crit_base
            + luck * 0.01
            + max(0.0, attack_speed - 1.0) * 0.12
            + crit_bonus
        )
        return max(0.0, min(0.6, rate))

    def describe(self, name: str, damage: int, critical: bool) -> str:
        if critical:
            template = self.crit_flavor or (self.flavor + " 暴击！")
            return template.format(name=name, damage=damage)
        return self.flavor.format(name=name, damage=damage)


class SkillTemplate(BaseModel):
    """Static definition of a skill."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    book_name: str
    profession: Profession
    unlock_level: int = Field(ge=1)
    kind: SkillKind
    mana_cost: int = Field(ge=0)
    cooldown: int = Field(ge=0, description="Rounds before it can be cast again")
    description: str = ""
    base_power: int = Field(ge=0)
    scaling: float = Field(ge=0.0, description="Coefficient against the primary stat")
    duration: int = Field(default=0, ge=0, description="Rounds, for non-instant kinds")
    strike: StrikeProfile | None = Field(default=None, description="Attack kind only")
    cast_text: str = Field(
        default="",
        description="Narration for non-attack kinds; receives name, rounds, amount",
    )


# =============================================================================
# Sets
# =============================================================================


class SetTier(BaseModel):
    """One bonus tier of a set."""

    model_config = ConfigDict(frozen=True)

    pieces: int = Field(ge=1)
    bonus: StatBonus
    label: str = ""


class SetTemplate(BaseModel):
    """Static definition of an equipment set."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: SetColor
    profession: Profession | None = None
    grade: Literal["entry", "advanced"] = "entry"
    slots: list[EquipmentSlot]
    piece_names: dict[EquipmentSlot, str]
    tiers: list[SetTier]

    @property
    def max_pieces(self) -> int:
        return len(self.slots)

    def allows(self, profession: Profession) -> bool:
        return self.profession is None or self.profession == profession


# =============================================================================
# Monsters & Maps
# =============================================================================


class MonsterTemplate(BaseModel):
    """Static definition of an opponent."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    is_boss: bool = False
    level: int = Field(ge=1)
    hp: int = Field(gt=0)
    attack: int = Field(ge=0)
    defense: int = Field(ge=0)
    exp: int = Field(ge=0)
    gold: int = Field(ge=0)
    skill_text: str


class MapArea(BaseModel):
    """A hunting ground with its monster roster and loot tier."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    min_level: int = Field(ge=1)
    max_level: int = Field(ge=1)
    drop_tier: int = Field(ge=0)
    monsters: list[MonsterTemplate] = Field(min_length=1)
    bosses: list[MonsterTemplate] = Field(default_factory=list)


class ShopItem(BaseModel):
    """A consumable sold by the shop."""

    model_config = ConfigDict(frozen=True)

    name: ItemName
    price: int = Field(gt=0)
    description: str = ""


# =============================================================================
# Catalogue
# =============================================================================


class GameContent(BaseModel):
    """
    Immutable reference data consumed by the core.

    Built once by the content layer and injected wherever needed.
    """

    model_config = ConfigDict(frozen=True)

    skills: dict[str, SkillTemplate]
    sets: list[SetTemplate]
    maps: list[MapArea]
    shop: list[ShopItem]
    initial_items: dict[ItemName, int] = Field(default_factory=dict)

    def skill(self, skill_id: str) -> SkillTemplate | None:
        return self.skills.get(skill_id)

    def profession_skills(self, profession: Profession) -> list[SkillTemplate]:
        """Skills of one profession, ordered by unlock level."""
        return sorted(
            (t for t in self.skills.values() if t.profession == profession),
            key=lambda t: t.unlock_level,
        )

    def set_template(self, set_id: str) -> SetTemplate | None:
        for template in self.sets:
            if template.id == set_id:
                return template
        return None

    def map_area(self, map_id: str) -> MapArea | None:
        for area in self.maps:
            if area.id == map_id:
                return area
        return None

    def available_maps(self, level: int) -> list[MapArea]:
        return [area for area in self.maps if level >= area.min_level]

    def shop_item(self, name: ItemName) -> ShopItem | None:
        for item in self.shop:
            if item.name == name:
                return item
        return None
