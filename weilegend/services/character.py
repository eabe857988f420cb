"""
Character Command Service for Wei Legend.

Player-facing commands outside of battle: creation, equipment, the
strengthening forge, the shop, potions, skill books and scrolls, and
selling. Every command returns an outcome string and never raises for
inputs of its declared type; rejected commands leave the character as
they found it.
"""

from __future__ import annotations

import logging

from weilegend.mechanics.dice import Dice
from weilegend.mechanics.rewards import exp_to_next_level
from weilegend.mechanics.sets import evaluate_sets
from weilegend.mechanics.spells import SCROLL_TRAINING_RANGE, add_training, training_need
from weilegend.mechanics.stats import clamp_resources, derive_stats
from weilegend.models.character import (
    POTION_THRESHOLD_MAX,
    POTION_THRESHOLD_MIN,
    Character,
    ItemName,
    Profession,
    SkillState,
)
from weilegend.models.content import GameContent
from weilegend.models.equipment import (
    SLOT_ORDER,
    Equipment,
    EquipmentSlot,
    Rarity,
    format_equipment,
)

logger = logging.getLogger(__name__)

DEFAULT_NAME = "无名侠客"
STARTING_GOLD = 1200
STARTING_LUCK = 1

LUCKY_OIL_CAP = 7
STRENGTHEN_DROP_FROM = 7
STONE_BONUS = 0.12

SALE_BASE: dict[Rarity, int] = {
    Rarity.COMMON: 20,
    Rarity.FINE: 60,
    Rarity.RARE: 160,
    Rarity.EPIC: 420,
}


# =============================================================================
# Creation
# =============================================================================


def create_character(name: str, profession: Profession, content: GameContent) -> Character:
    """
    Create a fresh level-1 character.

    The profession's level-1 skills are learned immediately; everything
    else has to be learned from books.

    Args:
        name: Display name; blank names fall back to a default
        profession: Character class
        content: Catalogue supplying the starter items and skills

    Returns:
        A Character with full hp and mp
    """
    character = Character(
        name=name.strip() or DEFAULT_NAME,
        profession=profession,
        gold=STARTING_GOLD,
        base_luck=STARTING_LUCK,
    )
    for item, count in content.initial_items.items():
        character.inventory[item] = count
    for template in content.profession_skills(profession):
        if template.unlock_level <= character.level:
            character.skills[template.id] = SkillState(template_id=template.id)

    stats = derive_stats(character, content.sets)
    character.hp = stats.max_hp
    character.mp = stats.max_mp
    logger.info("Created %s %s", profession.value, character.name)
    return character


def _parse_slot(slot: EquipmentSlot | str) -> EquipmentSlot | None:
    try:
        return EquipmentSlot(slot)
    except ValueError:
        return None


def _parse_item(name: ItemName | str) -> ItemName | None:
    try:
        return ItemName(name)
    except ValueError:
        return None


# =============================================================================
# Equipment
# =============================================================================


def equip_from_bag(character: Character, index: int, content: GameContent) -> str:
    """Equip the bag item at ``index``, swapping any worn item into the bag."""
    if index < 0 or index >= len(character.bag):
        return "装备编号无效。"
    item = character.bag[index]
    if character.level < item.level_req:
        return f"等级不足，需 Lv.{item.level_req} 才能装备。"
    old = character.equipments.get(item.slot)
    character.equipments[item.slot] = item
    del character.bag[index]
    if old is not None:
        character.bag.append(old)
    clamp_resources(character, content.sets)
    return f"已装备{item.slot.display_name}：{format_equipment(item)}"


def unequip(character: Character, slot: EquipmentSlot | str, content: GameContent) -> str:
    parsed = _parse_slot(slot)
    if parsed is None:
        return "槽位无效。"
    item = character.equipments.get(parsed)
    if item is None:
        return "该槽位没有装备。"
    character.equipments[parsed] = None
    character.bag.append(item)
    clamp_resources(character, content.sets)
    return f"已卸下{parsed.display_name}：{item.display_name}"


def strengthen_cost(character: Character, item: Equipment) -> int:
    return 180 + character.level * 28 + item.strengthen * 160


def strengthen_chance(item: Equipment, with_stone: bool) -> float:
    chance = max(0.24, min(0.92, 0.92 - item.strengthen * 0.09))
    if with_stone:
        chance = min(0.96, chance + STONE_BONUS)
    return chance


def strengthen(
    character: Character,
    slot: EquipmentSlot | str,
    content: GameContent,
    dice: Dice,
    prefer_stone: bool = True,
) -> str:
    """
    Try to raise a worn item's strengthen level by one.

    Gold is spent whether or not the attempt succeeds. A stone is used
    when preferred and available. Failing at +7 or higher drops the
    item one level.
    """
    parsed = _parse_slot(slot)
    if parsed is None:
        return "槽位无效。"
    item = character.equipments.get(parsed)
    if item is None:
        return "该槽位没有装备。"
    cost = strengthen_cost(character, item)
    if character.gold < cost:
        return f"金币不足，强化需要 {cost}。"

    used_stone = prefer_stone and character.count(ItemName.STRENGTHEN_STONE) > 0
    if used_stone:
        character.add_item(ItemName.STRENGTHEN_STONE, -1)
    chance = strengthen_chance(item, used_stone)
    character.gold -= cost
    stone_text = "，已消耗强化石。" if used_stone else "。"
    percent = int(chance * 100)

    if dice.chance(chance):
        item.strengthen += 1
        result = f"强化成功（成功率 {percent}%）！{item.name} 现为 +{item.strengthen}{stone_text}"
    elif item.strengthen >= STRENGTHEN_DROP_FROM:
        item.strengthen -= 1
        result = f"强化失败（成功率 {percent}%），装备回退到 +{item.strengthen}{stone_text}"
    else:
        result = f"强化失败（成功率 {percent}%），装备等级未变化{stone_text}"
    clamp_resources(character, content.sets)
    return result


def use_lucky_oil(character: Character, dice: Dice) -> str:
    """Try to add one luck to the equipped weapon."""
    if character.count(ItemName.LUCKY_OIL) <= 0:
        return "你没有幸运油。"
    weapon = character.equipments.get(EquipmentSlot.WEAPON)
    if weapon is None:
        return "请先装备武器。"
    luck = int(weapon.stat("luck"))
    if luck >= LUCKY_OIL_CAP:
        return "武器幸运已达到安全上限。"

    character.add_item(ItemName.LUCKY_OIL, -1)
    chance = max(0.22, min(0.62, 0.62 - luck * 0.07))
    if dice.chance(chance):
        weapon.luck += 1
        return f"幸运油生效！武器幸运 +1，当前幸运 {int(weapon.stat('luck'))}。"
    return "幸运油挥发了，没有产生效果。"


# =============================================================================
# Shop & Potions
# =============================================================================


def buy_shop_item(
    character: Character,
    name: ItemName | str,
    count: int,
    content: GameContent,
) -> str:
    item_name = _parse_item(name)
    entry = content.shop_item(item_name) if item_name else None
    if entry is None:
        return "商品不存在。"
    quantity = max(1, int(count))
    total = entry.price * quantity
    if character.gold < total:
        return "金币不足。"
    character.gold -= total
    character.add_item(entry.name, quantity)
    return f"购买成功：{entry.name.value} x{quantity}，花费 {total} 金币。"


def use_potion(character: Character, potion: ItemName | str, content: GameContent) -> str:
    """Drink a potion outside of battle."""
    item = _parse_item(potion)
    if item not in (ItemName.HP_POTION, ItemName.MP_POTION):
        return "只能直接使用金创药或魔法药。"
    if character.count(item) <= 0:
        return f"{item.value} 不足。"

    stats = derive_stats(character, content.sets)
    if item == ItemName.HP_POTION:
        if character.hp >= stats.max_hp:
            return "当前生命已满。"
        character.add_item(item, -1)
        amount = int(stats.max_hp * 0.35) + 70
        character.hp = min(stats.max_hp, character.hp + amount)
        return f"你使用了金创药，恢复 {amount} 点生命。"

    if character.mp >= stats.max_mp:
        return "当前魔法已满。"
    character.add_item(item, -1)
    amount = int(stats.max_mp * 0.35) + 60
    character.mp = min(stats.max_mp, character.mp + amount)
    return f"你使用了魔法药，恢复 {amount} 点魔法。"


def _clamp_threshold(value: int) -> int:
    return max(POTION_THRESHOLD_MIN, min(POTION_THRESHOLD_MAX, int(value)))


def update_potion_config(
    character: Character,
    auto_hp_enabled: bool | None = None,
    auto_hp_threshold: int | None = None,
    auto_mp_enabled: bool | None = None,
    auto_mp_threshold: int | None = None,
) -> str:
    """Patch the auto-potion settings; omitted fields are left unchanged."""
    config = character.potion_config
    if auto_hp_enabled is not None:
        config.auto_hp_enabled = auto_hp_enabled
    if auto_mp_enabled is not None:
        config.auto_mp_enabled = auto_mp_enabled
    if auto_hp_threshold is not None:
        config.auto_hp_threshold = _clamp_threshold(auto_hp_threshold)
    if auto_mp_threshold is not None:
        config.auto_mp_threshold = _clamp_threshold(auto_mp_threshold)
    return "自动药水配置已更新。"


# =============================================================================
# Skills
# =============================================================================


def toggle_skill_auto(character: Character, skill_id: str, content: GameContent) -> str:
    state = character.skills.get(skill_id)
    template = content.skill(skill_id)
    if state is None or template is None:
        return "该技能尚未学习。"
    state.auto_use = not state.auto_use
    return f"{template.name} 已切换为{'自动释放' if state.auto_use else '手动释放'}。"


def learn_skill_by_book(character: Character, skill_id: str, content: GameContent) -> str:
    """Consume one skill book to learn its skill at level 1."""
    template = content.skill(skill_id)
    if template is None or template.profession != character.profession:
        return "该技能不属于你的职业。"
    if skill_id in character.skills:
        return f"你已经学会了【{template.name}】。"
    if character.skill_books.get(skill_id, 0) <= 0:
        return f"你没有《{template.book_name}》。"
    if character.level < template.unlock_level:
        return f"等级不足，需 Lv.{template.unlock_level} 才能学习【{template.name}】。"

    character.skill_books[skill_id] -= 1
    if character.skill_books[skill_id] <= 0:
        del character.skill_books[skill_id]
    character.skills[skill_id] = SkillState(template_id=skill_id)
    return f"你研读《{template.book_name}》，学会了【{template.name}】。"


def train_skill_by_scroll(
    character: Character,
    skill_id: str,
    content: GameContent,
    dice: Dice,
) -> str:
    if character.count(ItemName.TRAINING_SCROLL) <= 0:
        return "你没有修炼卷轴。"
    state = character.skills.get(skill_id)
    template = content.skill(skill_id)
    if state is None or template is None:
        return "该技能尚未学习。"
    character.add_item(ItemName.TRAINING_SCROLL, -1)
    gain = dice.rand_int(*SCROLL_TRAINING_RANGE)
    logs = add_training(state, gain, content.skills)
    message = f"{template.name} 获得修炼值 {gain}。"
    return f"{message}{' '.join(logs)}" if logs else message


# =============================================================================
# Selling & Recommendations
# =============================================================================


def sale_price(item: Equipment) -> int:
    """Gold paid by the shop for one item."""
    price = SALE_BASE[item.rarity] + item.level_req * 6 + item.strengthen * 40
    if item.set_id:
        price += 80
    if item.special:
        price += 600
    if item.is_elite:
        price = int(price * 1.5)
    return price


def sell_equipment(character: Character, index: int) -> str:
    if index < 0 or index >= len(character.bag):
        return "装备编号无效。"
    item = character.bag.pop(index)
    price = sale_price(item)
    character.gold += price
    return f"已出售 {item.display_name}，获得 {price} 金币。"


def _sell_where(character: Character, keep: set[int]) -> tuple[int, int]:
    sold = 0
    earned = 0
    remaining = []
    for index, item in enumerate(character.bag):
        if index in keep:
            remaining.append(item)
            continue
        sold += 1
        earned += sale_price(item)
    character.bag = remaining
    character.gold += earned
    return sold, earned


def sell_all_equipment(character: Character) -> str:
    if not character.bag:
        return "背包里没有可出售的装备。"
    sold, earned = _sell_where(character, set())
    return f"已出售 {sold} 件装备，获得 {earned} 金币。"


def score_equipment(item: Equipment, profession: Profession) -> float:
    """Class-weighted gear score used to recommend upgrades."""
    attack = item.stat("attack")
    magic = item.stat("magic")
    tao = item.stat("tao")
    speed = item.stat("attack_speed")
    defense = item.stat("defense")
    hp = item.stat("hp")
    mp = item.stat("mp")
    luck = item.stat("luck")

    if profession == Profession.WARRIOR:
        score = attack * 1.7 + speed * 220 + defense * 0.75 + hp * 0.16 + luck * 2.2
    elif profession == Profession.MAGE:
        score = magic * 1.75 + speed * 190 + mp * 0.2 + defense * 0.58 + luck * 2
    else:
        score = tao * 1.75 + speed * 190 + hp * 0.14 + mp * 0.14 + defense * 0.62 + luck * 2

    if item.special == "paralyze":
        score += 70 if profession == Profession.WARRIOR else 42
    if item.set_id:
        score += 10
    score += item.strengthen * 4
    return round(score, 1)


def recommended_bag_indices(character: Character) -> set[int]:
    """Bag positions holding the best wearable upgrade for their slot."""
    best: dict[EquipmentSlot, tuple[float, int | None]] = {}
    for slot in SLOT_ORDER:
        worn = character.equipments.get(slot)
        if worn is not None:
            best[slot] = (score_equipment(worn, character.profession), None)

    for index, item in enumerate(character.bag):
        if character.level < item.level_req:
            continue
        score = score_equipment(item, character.profession)
        current = best.get(item.slot)
        if current is None or score > current[0] + 0.1:
            best[item.slot] = (score, index)
    return {index for _, index in best.values() if index is not None}


def sell_non_recommended_equipment(character: Character) -> str:
    keep = recommended_bag_indices(character)
    if len(keep) == len(character.bag):
        return "背包里没有可出售的装备。"
    sold, earned = _sell_where(character, keep)
    return f"已出售 {sold} 件非推荐装备，获得 {earned} 金币。"


# =============================================================================
# Projections
# =============================================================================


def describe_stats(character: Character, content: GameContent) -> list[str]:
    """Status panel lines for display."""
    stats = derive_stats(character, content.sets)
    return [
        f"{character.name}（{character.profession.value}） Lv.{character.level}",
        f"经验 {character.exp}/{exp_to_next_level(character.level)}  金币 {character.gold}",
        f"生命 {character.hp}/{stats.max_hp}  魔法 {character.mp}/{stats.max_mp}",
        f"攻击 {stats.attack}  魔法 {stats.magic}  道术 {stats.tao}  防御 {stats.defense}",
        (
            f"攻速 {stats.attack_speed:.2f}  暴击 {stats.crit_rate * 100:.0f}%  "
            f"吸血 {stats.lifesteal * 100:.0f}%  麻痹 {stats.paralyze_chance * 100:.0f}%  "
            f"幸运 {stats.luck}"
        ),
    ]


def set_status_lines(character: Character, content: GameContent) -> list[str]:
    rows = evaluate_sets(character, content.sets).rows
    return [row.describe() for row in rows]


def skill_lines(character: Character, content: GameContent) -> list[str]:
    """One line per profession skill: learned state, or what it takes to learn."""
    lines = []
    for template in content.profession_skills(character.profession):
        state = character.skills.get(template.id)
        if state is None:
            books = character.skill_books.get(template.id, 0)
            lines.append(
                f"{template.id} 【{template.name}】未学习 需 Lv.{template.unlock_level} 秘籍 {books}"
            )
            continue
        auto = "自动" if state.auto_use else "手动"
        lines.append(
            f"{template.id} 【{template.name}】Lv.{state.level} "
            f"修炼 {state.training}/{training_need(state.level)} {auto}"
        )
    return lines
