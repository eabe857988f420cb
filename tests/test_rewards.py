"""Tests for experience, gold, level-ups, and drop trials."""

from __future__ import annotations

from weilegend.content import DEFAULT_CONTENT
from weilegend.mechanics.dice import Dice
from weilegend.mechanics.rewards import (
    apply_drops,
    book_drop_chance,
    consumable_drop_chance,
    equipment_drop_chance,
    exp_to_next_level,
    grant_experience,
    roll_drops,
    roll_exp,
    roll_gold,
)
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import ItemName, Profession
from weilegend.models.content import MonsterTemplate
from weilegend.services.character import create_character


class FixedDice(Dice):
    """Always rolls the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(seed=0)
        self.value = value

    def random(self) -> float:
        return self.value


MONSTER = MonsterTemplate(
    id="deer", name="鹿", level=3, hp=110, attack=14, defense=4, exp=100, gold=50, skill_text="顶"
)


def _warrior():
    return create_character("测试", Profession.WARRIOR, DEFAULT_CONTENT)


class TestExperience:
    """Tests for the level-up loop."""

    def test_threshold(self):
        assert exp_to_next_level(1) == 115
        assert exp_to_next_level(10) == 2590

    def test_exact_threshold_levels_once(self):
        character = _warrior()
        character.hp = 1
        character.mp = 0
        logs = grant_experience(character, exp_to_next_level(1), DEFAULT_CONTENT)
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        assert character.level == 2
        assert character.exp == 0
        assert character.hp == stats.max_hp
        assert character.mp == stats.max_mp
        assert logs == ["角色升级至 Lv.2，生命与魔法完全恢复，战力显著提升。"]

    def test_multiple_level_ups(self):
        character = _warrior()
        logs = grant_experience(character, 115 + 190 + 7, DEFAULT_CONTENT)
        assert character.level == 3
        assert character.exp == 7
        assert len(logs) == 2

    def test_below_threshold(self):
        character = _warrior()
        assert grant_experience(character, 114, DEFAULT_CONTENT) == []
        assert character.level == 1
        assert character.exp == 114


class TestRolls:
    """Tests for the exp and gold multipliers."""

    def test_low_and_high_rolls(self):
        assert roll_exp(MONSTER, 1.0, FixedDice(0.0)) == 78
        assert roll_gold(MONSTER, 1.0, FixedDice(0.0)) == 36
        assert roll_exp(MONSTER, 1.0, FixedDice(0.999999)) == 104
        assert roll_gold(MONSTER, 1.0, FixedDice(0.999999)) == 51

    def test_reward_rate_scales(self):
        assert roll_exp(MONSTER, 0.5, FixedDice(0.0)) == 39

    def test_reward_rate_is_clamped(self):
        assert roll_exp(MONSTER, 3.0, FixedDice(0.0)) == 78
        assert roll_gold(MONSTER, -1.0, FixedDice(0.0)) == 1


class TestDropChances:
    """Tests for the drop probability formulas."""

    def test_equipment(self):
        assert equipment_drop_chance(0, 1, False) == 0.08 + 0.01
        assert equipment_drop_chance(100, 5, True) == 0.6
        assert equipment_drop_chance(-50, 0, False) == 0.08

    def test_consumable(self):
        assert consumable_drop_chance(False) == 0.14
        assert consumable_drop_chance(True) == 0.14 + 0.1

    def test_book(self):
        assert book_drop_chance(0, 0, False) == 0.02
        assert book_drop_chance(100, 10, True) == 0.3


class TestRollDrops:
    """Tests for the independent drop trials."""

    def test_all_trials_can_succeed(self):
        character = _warrior()
        drops = roll_drops(character, MONSTER, 1, 0, 1.0, DEFAULT_CONTENT, FixedDice(0.0))
        assert len(drops.equipment) == 1
        assert drops.items == {ItemName.HP_POTION: 1}
        assert drops.books == ["warrior_attack_slash"]
        assert len(drops.descriptions) == 3
        assert drops.descriptions[0].startswith("掉落装备：")
        assert drops.descriptions[1] == "掉落物品：金创药 x1"
        assert drops.descriptions[2] == "掉落技能书：攻杀剑术秘籍"

    def test_no_drops(self):
        drops = roll_drops(_warrior(), MONSTER, 1, 0, 1.0, DEFAULT_CONTENT, FixedDice(0.99))
        assert drops.descriptions == []

    def test_zero_drop_rate(self):
        drops = roll_drops(_warrior(), MONSTER, 5, 50, 0.0, DEFAULT_CONTENT, FixedDice(0.0))
        assert drops.equipment == []
        assert drops.items == {}
        assert drops.books == []

    def test_drops_not_applied_until_requested(self):
        character = _warrior()
        potions = character.count(ItemName.HP_POTION)
        drops = roll_drops(character, MONSTER, 1, 0, 1.0, DEFAULT_CONTENT, FixedDice(0.0))
        assert character.bag == []
        apply_drops(character, drops)
        assert len(character.bag) == 1
        assert character.count(ItemName.HP_POTION) == potions + 1
        assert character.skill_books == {"warrior_attack_slash": 1}

    def test_drop_level_follows_monster(self):
        monster = MONSTER.model_copy(update={"level": 20})
        drops = roll_drops(_warrior(), monster, 1, 0, 1.0, DEFAULT_CONTENT, FixedDice(0.0))
        assert drops.equipment[0].level_req == 18
