"""
Core Data Models for Wei Legend.

These models define the game's data: the persistent character, equipment,
static content, and battle-scoped fighter state.
"""

from weilegend.models.character import (
    Character,
    ItemName,
    PotionConfig,
    Profession,
    SkillState,
)
from weilegend.models.content import (
    GameContent,
    MapArea,
    MonsterTemplate,
    SetTemplate,
    SetTier,
    ShopItem,
    SkillKind,
    SkillTemplate,
    StrikeProfile,
)
from weilegend.models.equipment import (
    RARITY_ORDER,
    SLOT_ORDER,
    Equipment,
    EquipmentSlot,
    Rarity,
    StatBonus,
    format_equipment,
)
from weilegend.models.fighter import (
    Fighter,
    Paralyzed,
    Poisoned,
    Shielded,
    StatusEffect,
    Summoned,
)

__all__ = [
    # Character
    "Character",
    "ItemName",
    "PotionConfig",
    "Profession",
    "SkillState",
    # Equipment
    "Equipment",
    "EquipmentSlot",
    "Rarity",
    "RARITY_ORDER",
    "SLOT_ORDER",
    "StatBonus",
    "format_equipment",
    # Content
    "GameContent",
    "MapArea",
    "MonsterTemplate",
    "SetTemplate",
    "SetTier",
    "ShopItem",
    "SkillKind",
    "SkillTemplate",
    "StrikeProfile",
    # Fighter
    "Fighter",
    "Paralyzed",
    "Poisoned",
    "Shielded",
    "StatusEffect",
    "Summoned",
]
