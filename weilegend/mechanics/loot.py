"""
Equipment Loot Generation.

Mints fresh equipment: a rare paralysis-ring short circuit, then slot,
rarity, optional set membership, slot-shaped stats, and an elite affix.
"""

from __future__ import annotations

from collections.abc import Sequence

from weilegend.mechanics.dice import Dice
from weilegend.models.character import Profession
from weilegend.models.content import SetTemplate
from weilegend.models.equipment import (
    PRIMARY_KEYS,
    SLOT_ORDER,
    Equipment,
    EquipmentSlot,
    Rarity,
    StatBonus,
)

# =============================================================================
# Tuning
# =============================================================================

PARALYSIS_RING_BASE = 0.00016
PARALYSIS_RING_CAP = 0.0012
PARALYSIS_RING_NAME = "麻痹戒指"

# Rarity buckets are tested after subtracting the luck/tier/boss bonus.
EPIC_BELOW = 0.004
RARE_BELOW = 0.031
FINE_BELOW = 0.145

RARITY_MULTIPLIER: dict[Rarity, float] = {
    Rarity.COMMON: 1.00,
    Rarity.FINE: 1.18,
    Rarity.RARE: 1.42,
    Rarity.EPIC: 1.78,
}

SET_BASE_CHANCE: dict[Rarity, float] = {
    Rarity.COMMON: 0.004,
    Rarity.FINE: 0.05,
    Rarity.RARE: 0.09,
    Rarity.EPIC: 0.14,
}
SET_CHANCE_CAP = 0.4

ELITE_CAP = 0.08

SLOT_NAME_POOLS: dict[EquipmentSlot, list[str]] = {
    EquipmentSlot.WEAPON: ["斩马刀", "井中月", "血饮", "龙纹剑", "骨玉权杖"],
    EquipmentSlot.ARMOR: ["战神盔甲", "幽灵战衣", "恶魔长袍", "天魔神甲"],
    EquipmentSlot.HELMET: ["黑铁头盔", "道士头盔", "法神头盔", "圣战头盔"],
    EquipmentSlot.NECKLACE: ["灯笼项链", "幽灵项链", "绿色项链", "恶魔铃铛"],
    EquipmentSlot.LEFT_BRACELET: ["坚固手套", "死神手套", "龙之手镯", "三眼手镯"],
    EquipmentSlot.RIGHT_BRACELET: ["坚固手套", "死神手套", "龙之手镯", "三眼手镯"],
    EquipmentSlot.LEFT_RING: ["力量戒指", "紫碧螺", "泰坦戒指", "骑士戒指"],
    EquipmentSlot.RIGHT_RING: ["力量戒指", "紫碧螺", "泰坦戒指", "骑士戒指"],
    EquipmentSlot.BELT: ["战神腰带", "魔血腰带", "天师腰带", "雷霆腰带"],
    EquipmentSlot.BOOTS: ["战神靴", "疾风靴", "魔血靴", "圣战靴"],
}

RING_SLOTS = (EquipmentSlot.LEFT_RING, EquipmentSlot.RIGHT_RING)
BRACELET_SLOTS = (EquipmentSlot.LEFT_BRACELET, EquipmentSlot.RIGHT_BRACELET)


# =============================================================================
# Rolls
# =============================================================================


def paralysis_ring_chance(tier: int, luck: int, is_boss: bool) -> float:
    """Chance that a drop is the fixed paralysis ring."""
    scale = 1 + tier * 0.35 + max(0, luck) * 0.04
    chance = PARALYSIS_RING_BASE * scale * (2.2 if is_boss else 1.0)
    return min(PARALYSIS_RING_CAP, chance)


def roll_rarity(luck: int, tier: int, is_boss: bool, dice: Dice) -> Rarity:
    """
    Subtractive rarity roll.

    Higher luck, tier, and boss status shift rolls toward rarer buckets.
    """
    bonus = luck * 0.0025 + tier * 0.004 + (0.02 if is_boss else 0.0)
    r = dice.random() - bonus
    if r < EPIC_BELOW:
        return Rarity.EPIC
    if r < RARE_BELOW:
        return Rarity.RARE
    if r < FINE_BELOW:
        return Rarity.FINE
    return Rarity.COMMON


def set_weight(template: SetTemplate, tier: int, is_boss: bool, rarity: Rarity) -> float:
    """Lottery weight of one set; entry sets fade and advanced sets grow with tier."""
    if template.grade == "entry":
        return max(0.2, 3.0 - tier * 0.55)
    return 0.3 + tier * 0.5 + (1.5 if is_boss else 0.0) + rarity.rank * 0.35


def roll_set(
    slot: EquipmentSlot,
    rarity: Rarity,
    tier: int,
    is_boss: bool,
    profession: Profession,
    sets: Sequence[SetTemplate],
    dice: Dice,
) -> SetTemplate | None:
    """Maybe assign the item to a set eligible for this profession and slot."""
    eligible = [t for t in sets if t.allows(profession) and slot in t.slots]
    if not eligible:
        return None
    chance = SET_BASE_CHANCE[rarity] + tier * 0.002 + (0.08 if is_boss else 0.0)
    if not dice.chance(min(SET_CHANCE_CAP, chance)):
        return None
    weights = [set_weight(t, tier, is_boss, rarity) for t in eligible]
    return dice.weighted_choice(eligible, weights)


def elite_chance(luck: int, is_boss: bool, is_set_piece: bool) -> float:
    chance = 0.025 + max(0, luck) * 0.004
    if is_boss:
        chance += 0.02
    if is_set_piece:
        chance += 0.01
    return min(ELITE_CAP, chance)


def roll_elite_bonus(dice: Dice) -> StatBonus:
    """Exactly one random bonus stat from the seven-way table."""
    roll = dice.rand_int(0, 6)
    if roll == 0:
        return StatBonus(attack=dice.rand_int(3, 10))
    if roll == 1:
        return StatBonus(magic=dice.rand_int(3, 10))
    if roll == 2:
        return StatBonus(tao=dice.rand_int(3, 10))
    if roll == 3:
        return StatBonus(attack_speed=dice.rand_int(1, 3) / 100)
    if roll == 4:
        return StatBonus(defense=dice.rand_int(3, 10))
    if roll == 5:
        return StatBonus(hp=dice.rand_int(22, 60))
    return StatBonus(luck=dice.rand_int(1, 2))


# =============================================================================
# Item Construction
# =============================================================================


def _slot_stats(slot: EquipmentSlot, base: int, multiplier: float, dice: Dice) -> tuple[int, dict]:
    """Primary power plus the slot's secondary stats."""
    if slot == EquipmentSlot.WEAPON:
        return base + dice.rand_int(7, 20), {
            "attack_speed": round(dice.rand_int(1, 6) * 0.01 * multiplier, 3),
            "mp": dice.rand_int(0, 12),
            "luck": dice.rand_int(0, 2),
        }
    if slot == EquipmentSlot.ARMOR:
        return 0, {
            "defense": base + dice.rand_int(8, 20),
            "hp": dice.rand_int(30, 80),
            "luck": dice.rand_int(0, 1),
        }
    if slot == EquipmentSlot.HELMET:
        return 0, {
            "defense": int(base * 0.85) + dice.rand_int(5, 15),
            "hp": dice.rand_int(18, 45),
        }
    if slot == EquipmentSlot.NECKLACE:
        return int(base * 0.35) + dice.rand_int(2, 8), {
            "mp": dice.rand_int(15, 40),
            "luck": dice.rand_int(1, 3),
        }
    if slot in BRACELET_SLOTS:
        return int(base * 0.28) + dice.rand_int(1, 7), {
            "defense": int(base * 0.24) + dice.rand_int(1, 5),
            "hp": dice.rand_int(8, 24),
        }
    if slot in RING_SLOTS:
        return int(base * 0.32) + dice.rand_int(2, 9), {
            "mp": dice.rand_int(10, 24),
            "luck": dice.rand_int(0, 2),
        }
    if slot == EquipmentSlot.BELT:
        return 0, {
            "defense": int(base * 0.4) + dice.rand_int(2, 8),
            "hp": dice.rand_int(26, 58),
        }
    # boots
    return 0, {
        "defense": int(base * 0.4) + dice.rand_int(2, 8),
        "hp": dice.rand_int(20, 48),
        "mp": dice.rand_int(8, 18),
    }


def build_item(
    level: int,
    slot: EquipmentSlot,
    rarity: Rarity,
    set_template: SetTemplate | None,
    dice: Dice,
) -> Equipment:
    """
    Build an item's stats for a decided slot, rarity, and set.

    Primary power goes into one of attack/magic/tao chosen uniformly, so
    drops are not tied to the finder's class.
    """
    multiplier = RARITY_MULTIPLIER[rarity]
    base = int((level * 2 + dice.rand_int(2, 12)) * multiplier)
    primary_key = dice.choice(PRIMARY_KEYS)
    primary_value, stats = _slot_stats(slot, base, multiplier, dice)
    if primary_value:
        stats[primary_key] = primary_value

    if set_template is not None:
        set_key = set_template.profession.primary_key if set_template.profession else primary_key
        stats[set_key] = stats.get(set_key, 0) + 3 + level // 5
        name = set_template.piece_names.get(slot) or dice.choice(SLOT_NAME_POOLS[slot])
    else:
        name = dice.choice(SLOT_NAME_POOLS[slot])

    return Equipment(
        name=name,
        slot=slot,
        level_req=max(1, level - 2),
        rarity=rarity,
        set_id=set_template.id if set_template else None,
        set_name=set_template.name if set_template else None,
        set_color=set_template.color if set_template else None,
        **stats,
    )


def make_paralysis_ring(level: int, dice: Dice) -> Equipment:
    """The fixed epic paralysis ring."""
    power = 4 + level // 3
    return Equipment(
        name=PARALYSIS_RING_NAME,
        slot=dice.choice(RING_SLOTS),
        level_req=max(1, level - 2),
        rarity=Rarity.EPIC,
        attack=power,
        magic=power,
        tao=power,
        mp=10,
        luck=1,
        special="paralyze",
    )


def generate_equipment(
    level: int,
    tier: int,
    luck: int,
    is_boss: bool,
    profession: Profession,
    sets: Sequence[SetTemplate],
    dice: Dice,
) -> Equipment:
    """
    Generate a freshly minted equipment drop.

    Args:
        level: Level of the monster or character the drop is scaled to
        tier: Map drop tier
        luck: Finder's luck
        is_boss: Whether the drop comes from a boss
        profession: Finder's profession, used for set eligibility
        sets: Set templates from the content catalogue
        dice: Random source

    Returns:
        A new Equipment with ``strengthen == 0``
    """
    if dice.chance(paralysis_ring_chance(tier, luck, is_boss)):
        return make_paralysis_ring(level, dice)

    slot = dice.choice(SLOT_ORDER)
    rarity = roll_rarity(luck, tier, is_boss, dice)
    set_template = roll_set(slot, rarity, tier, is_boss, profession, sets, dice)
    if set_template is not None and rarity == Rarity.COMMON:
        rarity = Rarity.FINE

    item = build_item(level, slot, rarity, set_template, dice)

    if dice.chance(elite_chance(luck, is_boss, set_template is not None)):
        item.is_elite = True
        item.elite_bonus = roll_elite_bonus(dice)
    return item


def generate_set_piece(
    level: int,
    set_template: SetTemplate,
    slot: EquipmentSlot,
    dice: Dice,
    rarity: Rarity = Rarity.RARE,
) -> Equipment:
    """Build one piece of a specific set, bypassing the drop rolls."""
    return build_item(level, slot, rarity, set_template, dice)
