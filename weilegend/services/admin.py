"""
Admin Shortcuts for Wei Legend.

Testing and debugging commands that grant resources directly. Like the
player commands, each one returns an outcome string.
"""

from __future__ import annotations

import logging

from weilegend.mechanics.dice import Dice
from weilegend.mechanics.loot import generate_equipment, generate_set_piece
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import Character, ItemName, SkillState
from weilegend.models.content import GameContent
from weilegend.models.equipment import Rarity

logger = logging.getLogger(__name__)

SPAWN_TIER = 4
SPAWN_LUCK_BONUS = 2


def add_gold(character: Character, amount: int = 100000) -> str:
    gain = max(1, int(amount))
    character.gold += gain
    logger.info("Admin: %s gold +%d", character.name, gain)
    return f"作弊生效：金币 +{gain}。"


def heal(character: Character, content: GameContent) -> str:
    stats = derive_stats(character, content.sets)
    character.hp = stats.max_hp
    character.mp = stats.max_mp
    return "作弊生效：生命与魔法已补满。"


def add_items(character: Character, amount: int = 20) -> str:
    count = max(1, int(amount))
    for item in ItemName:
        character.add_item(item, count)
    return f"作弊生效：所有道具 +{count}。"


def level_up(character: Character, content: GameContent, levels: int = 1) -> str:
    """Raise the level directly and refill hp/mp. Experience is kept as is."""
    step = max(1, int(levels))
    character.level += step
    stats = derive_stats(character, content.sets)
    character.hp = stats.max_hp
    character.mp = stats.max_mp
    logger.info("Admin: %s level -> %d", character.name, character.level)
    return f"作弊生效：等级提升到 Lv.{character.level}。"


def unlock_all_skills(character: Character, content: GameContent) -> str:
    """
    Learn every skill of the character's profession.

    The level is raised to the highest unlock level if needed, so the
    learned set stays consistent with the level gates.
    """
    templates = content.profession_skills(character.profession)
    need_level = max([t.unlock_level for t in templates], default=character.level)
    character.level = max(character.level, need_level)

    learned = []
    for template in templates:
        if template.id not in character.skills:
            character.skills[template.id] = SkillState(template_id=template.id)
            learned.append(template.name)
    if not learned:
        return "作弊生效：当前已拥有全部职业技能。"
    stats = derive_stats(character, content.sets)
    character.hp = stats.max_hp
    character.mp = stats.max_mp
    return f"作弊生效：已解锁全部职业技能（{'、'.join(learned)}）。"


def spawn_equipment(
    character: Character,
    content: GameContent,
    dice: Dice,
    count: int = 4,
) -> str:
    """Add high-tier random drops to the bag."""
    n = max(1, int(count))
    luck = derive_stats(character, content.sets).luck
    for _ in range(n):
        character.bag.append(
            generate_equipment(
                level=character.level + dice.rand_int(0, 2),
                tier=SPAWN_TIER,
                luck=luck + SPAWN_LUCK_BONUS,
                is_boss=False,
                profession=character.profession,
                sets=content.sets,
                dice=dice,
            )
        )
    return f"作弊生效：背包新增 {n} 件高级装备。"


def spawn_set(
    character: Character,
    content: GameContent,
    dice: Dice,
    set_id: str | None = None,
) -> str:
    """
    Add one piece of a set for every slot it covers.

    Without a set id, the profession's first advanced set is used, then
    its first entry set.
    """
    if set_id is not None:
        template = content.set_template(set_id)
        if template is None:
            return "套装不存在。"
        if not template.allows(character.profession):
            return f"【{template.name}】不适合你的职业。"
    else:
        eligible = [
            t for t in content.sets
            if t.profession == character.profession
        ]
        eligible.sort(key=lambda t: t.grade != "advanced")
        if not eligible:
            return "没有适合你职业的套装。"
        template = eligible[0]

    for slot in template.slots:
        character.bag.append(
            generate_set_piece(character.level, template, slot, dice, rarity=Rarity.RARE)
        )
    return f"作弊生效：背包新增【{template.name}】套装 {len(template.slots)} 件。"
