"""
Save and Restore for Wei Legend.

Turns characters into JSON-compatible save documents and back. Restoring
is defensive: every field is validated on its own and replaced by its
default when missing or malformed, so a damaged save never crashes the
game. Only a missing or invalid name or profession rejects the save.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from weilegend.db.interfaces import SaveData, SaveRepository
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import (
    POTION_THRESHOLD_MAX,
    POTION_THRESHOLD_MIN,
    Character,
    ItemName,
    PotionConfig,
    Profession,
    SkillState,
)
from weilegend.models.content import GameContent
from weilegend.models.equipment import SLOT_ORDER, Equipment, EquipmentSlot, Rarity, StatBonus
from weilegend.services.character import create_character

logger = logging.getLogger(__name__)

SAVE_VERSION = 2
LEGACY_ACCESSORY_SLOT = "accessory"
SET_COLORS = ("crimson", "azure", "jade", "amber")
PROFESSION_VALUES = tuple(p.value for p in Profession)


# =============================================================================
# Field Helpers
# =============================================================================


def _get(source: dict[str, Any], *keys: str) -> Any:
    """First present key among snake_case and legacy camelCase spellings."""
    for key in keys:
        if key in source:
            return source[key]
    return None


def _number(value: Any, fallback: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if not math.isfinite(value):
        return fallback
    return value


def _int(value: Any, fallback: int, low: int | None = None, high: int | None = None) -> int:
    result = math.floor(_number(value, fallback))
    if low is not None:
        result = max(low, result)
    if high is not None:
        result = min(high, result)
    return result


def _bool(value: Any, fallback: bool) -> bool:
    return value if isinstance(value, bool) else fallback


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def normalize_slot(value: Any) -> EquipmentSlot | None:
    """Map a saved slot name to a slot, including the legacy accessory slot."""
    if not isinstance(value, str):
        return None
    if value == LEGACY_ACCESSORY_SLOT:
        return EquipmentSlot.NECKLACE
    try:
        return EquipmentSlot(value)
    except ValueError:
        return None


# =============================================================================
# Hydration
# =============================================================================


def _stat(raw: dict[str, Any], key: str) -> int:
    return _int(raw.get(key), 0, low=0)


def _speed(raw: dict[str, Any]) -> float:
    return max(0.0, float(_number(_get(raw, "attack_speed", "attackSpeed"), 0.0)))


def _hydrate_bonus(value: Any) -> StatBonus:
    raw = _dict(value)
    return StatBonus(
        attack=_stat(raw, "attack"),
        magic=_stat(raw, "magic"),
        tao=_stat(raw, "tao"),
        attack_speed=_speed(raw),
        defense=_stat(raw, "defense"),
        hp=_stat(raw, "hp"),
        mp=_stat(raw, "mp"),
        luck=_stat(raw, "luck"),
    )


def hydrate_equipment(value: Any, slot: EquipmentSlot | None = None) -> Equipment | None:
    """
    Rebuild one saved item.

    Args:
        value: Saved item document
        slot: Force the item into this slot instead of its saved one

    Returns:
        The item, or None when its name, rarity, or slot is unusable
    """
    raw = _dict(value)
    name = raw.get("name")
    if not isinstance(name, str) or not name:
        return None
    try:
        rarity = Rarity(raw.get("rarity"))
    except ValueError:
        return None
    item_slot = slot or normalize_slot(raw.get("slot"))
    if item_slot is None:
        return None

    fields: dict[str, Any] = {
        "name": name,
        "slot": item_slot,
        "rarity": rarity,
        "level_req": _int(_get(raw, "level_req", "levelReq"), 1, low=1),
        "attack": _stat(raw, "attack"),
        "magic": _stat(raw, "magic"),
        "tao": _stat(raw, "tao"),
        "attack_speed": _speed(raw),
        "defense": _stat(raw, "defense"),
        "hp": _stat(raw, "hp"),
        "mp": _stat(raw, "mp"),
        "luck": _stat(raw, "luck"),
        "strengthen": _int(raw.get("strengthen"), 0, low=0),
        "is_elite": _bool(_get(raw, "is_elite", "isElite"), False),
        "elite_bonus": _hydrate_bonus(_get(raw, "elite_bonus", "eliteBonus")),
    }
    if isinstance(raw.get("id"), str) and raw["id"]:
        fields["id"] = raw["id"]
    if raw.get("special") == "paralyze":
        fields["special"] = "paralyze"

    set_id = _get(raw, "set_id", "setId")
    if isinstance(set_id, str) and set_id:
        fields["set_id"] = set_id
        set_name = _get(raw, "set_name", "setName")
        fields["set_name"] = set_name if isinstance(set_name, str) else None
        set_color = _get(raw, "set_color", "setColor")
        fields["set_color"] = set_color if set_color in SET_COLORS else None

    try:
        return Equipment(**fields)
    except ValidationError:
        return None


def _restore_potion_config(value: Any) -> PotionConfig:
    raw = _dict(value)
    default = PotionConfig()
    return PotionConfig(
        auto_hp_enabled=_bool(_get(raw, "auto_hp_enabled", "autoHpEnabled"), default.auto_hp_enabled),
        auto_hp_threshold=_int(
            _get(raw, "auto_hp_threshold", "autoHpThreshold"),
            default.auto_hp_threshold,
            low=POTION_THRESHOLD_MIN,
            high=POTION_THRESHOLD_MAX,
        ),
        auto_mp_enabled=_bool(_get(raw, "auto_mp_enabled", "autoMpEnabled"), default.auto_mp_enabled),
        auto_mp_threshold=_int(
            _get(raw, "auto_mp_threshold", "autoMpThreshold"),
            default.auto_mp_threshold,
            low=POTION_THRESHOLD_MIN,
            high=POTION_THRESHOLD_MAX,
        ),
    )


def restore_character(raw: Any, content: GameContent) -> Character | None:
    """
    Rebuild a character from a save document.

    Args:
        raw: The saved character document, as loaded from storage
        content: Catalogue used to validate skills and derive maxima

    Returns:
        The character, or None when name or profession is unusable
    """
    source = _dict(raw)
    name = source.get("name")
    profession_value = source.get("profession")
    if not isinstance(name, str) or profession_value not in PROFESSION_VALUES:
        logger.warning("Rejected save: missing or invalid name/profession")
        return None

    character = create_character(name, Profession(profession_value), content)
    character.level = _int(source.get("level"), 1, low=1)
    character.exp = _int(source.get("exp"), 0, low=0)
    character.gold = _int(source.get("gold"), character.gold, low=0)
    character.base_luck = _int(_get(source, "base_luck", "baseLuck"), character.base_luck, low=0)

    inventory = _dict(source.get("inventory"))
    for item in ItemName:
        character.inventory[item] = _int(inventory.get(item.value), character.count(item), low=0)

    equipments = _dict(source.get("equipments"))
    if equipments:
        for slot in SLOT_ORDER:
            character.equipments[slot] = hydrate_equipment(equipments.get(slot.value), slot)
        legacy = equipments.get(LEGACY_ACCESSORY_SLOT)
        if legacy is not None and character.equipments[EquipmentSlot.NECKLACE] is None:
            character.equipments[EquipmentSlot.NECKLACE] = hydrate_equipment(
                legacy, EquipmentSlot.NECKLACE
            )

    bag = source.get("bag")
    if isinstance(bag, list):
        character.bag = [item for item in map(hydrate_equipment, bag) if item is not None]

    own_skills = {t.id: t for t in content.profession_skills(character.profession)}
    books = _dict(_get(source, "skill_books", "skillBooks"))
    character.skill_books = {
        skill_id: count
        for skill_id, value in books.items()
        if skill_id in own_skills and (count := _int(value, 0, low=0)) > 0
    }

    for skill_id, value in _dict(source.get("skills")).items():
        template = own_skills.get(skill_id)
        if template is None or character.level < template.unlock_level:
            continue
        state = _dict(value)
        character.skills[skill_id] = SkillState(
            template_id=skill_id,
            level=_int(state.get("level"), 1, low=1),
            training=_int(state.get("training"), 0, low=0),
            auto_use=_bool(_get(state, "auto_use", "autoUse"), True),
        )

    character.potion_config = _restore_potion_config(_get(source, "potion_config", "potionConfig"))

    stats = derive_stats(character, content.sets)
    character.hp = _int(source.get("hp"), stats.max_hp, low=1, high=stats.max_hp)
    character.mp = _int(source.get("mp"), stats.max_mp, low=0, high=stats.max_mp)
    return character


def dump_character(character: Character) -> SaveData:
    """Serialize a character to a JSON-compatible save document."""
    return {"version": SAVE_VERSION, "character": character.model_dump(mode="json")}


# =============================================================================
# Service
# =============================================================================


@dataclass
class SaveService:
    """Session-boundary save and load for one save slot."""

    repository: SaveRepository
    content: GameContent
    key: str = "default"

    def save(self, character: Character) -> None:
        self.repository.save(self.key, dump_character(character))
        logger.info("Saved %s to slot %s", character.name, self.key)

    def load(self) -> Character | None:
        """Load the slot's character; older saves store it at the top level."""
        data = self.repository.load(self.key)
        if data is None:
            return None
        raw = data.get("character", data) if isinstance(data, dict) else None
        character = restore_character(raw, self.content)
        if character is not None:
            logger.info("Loaded %s from slot %s", character.name, self.key)
        return character

    def delete(self) -> None:
        self.repository.delete(self.key)
        logger.info("Deleted slot %s", self.key)
