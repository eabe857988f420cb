"""Tests for equipment models and effective-stat rules."""

from __future__ import annotations

import pytest

from weilegend.models.equipment import (
    SLOT_ORDER,
    Equipment,
    EquipmentSlot,
    Rarity,
    StatBonus,
    format_equipment,
)


def _weapon(**kwargs) -> Equipment:
    defaults = {"name": "斩马刀", "slot": EquipmentSlot.WEAPON}
    defaults.update(kwargs)
    return Equipment(**defaults)


class TestStatBonus:
    """Tests for StatBonus blocks."""

    def test_empty(self):
        assert StatBonus().is_empty()
        assert not StatBonus(luck=1).is_empty()

    def test_plus_is_fieldwise(self):
        total = StatBonus(attack=3, hp=10).plus(StatBonus(attack=2, lifesteal=0.05))
        assert total.attack == 5
        assert total.hp == 10
        assert total.lifesteal == pytest.approx(0.05)

    def test_describe(self):
        assert StatBonus().describe() == "无"
        text = StatBonus(attack=6, attack_speed=0.08).describe()
        assert "攻击+6" in text
        assert "攻速+8%" in text


class TestEffectiveStats:
    """Tests for Equipment.stat."""

    def test_strengthen_scales_base(self):
        item = _weapon(attack=100, strengthen=5)
        assert item.stat("attack") == 160

    def test_strengthen_floors(self):
        item = _weapon(attack=13, strengthen=1)
        assert item.stat("attack") == 14

    def test_elite_bonus_is_not_strengthened(self):
        item = _weapon(
            attack=100, strengthen=5, is_elite=True, elite_bonus=StatBonus(attack=7)
        )
        assert item.stat("attack") == 167

    def test_luck_ignores_strengthen(self):
        item = _weapon(luck=2, strengthen=6, elite_bonus=StatBonus(luck=1))
        assert item.stat("luck") == 3

    def test_attack_speed_needs_base_speed(self):
        assert _weapon(attack_speed=0.03, strengthen=4).stat("attack_speed") == pytest.approx(0.05)
        assert _weapon(attack_speed=0.0, strengthen=4).stat("attack_speed") == 0.0

    def test_effective_bonus(self):
        bonus = _weapon(attack=10, mp=5, strengthen=2).effective_bonus()
        assert bonus.attack == 12
        assert bonus.mp == 6

    def test_ids_are_unique(self):
        assert _weapon().id != _weapon().id

    def test_strengthen_never_negative(self):
        with pytest.raises(ValueError):
            _weapon(strengthen=-1)


class TestDisplay:
    """Tests for names and formatted descriptions."""

    def test_display_name_marks_elite(self):
        assert _weapon().display_name == "斩马刀"
        assert _weapon(is_elite=True).display_name == "斩马刀·极品"

    def test_format_equipment(self):
        item = _weapon(
            attack=20,
            rarity=Rarity.RARE,
            strengthen=1,
            set_id="berserker",
            set_name="狂战",
            set_color="crimson",
        )
        text = format_equipment(item)
        assert text.startswith("【狂战】斩马刀 [稀有] +1")
        assert "攻22" in text

    def test_format_marks_paralysis(self):
        ring = Equipment(name="麻痹戒指", slot=EquipmentSlot.LEFT_RING, special="paralyze")
        assert "〔麻痹〕" in format_equipment(ring)

    def test_slot_order_and_names(self):
        assert len(SLOT_ORDER) == 10
        assert SLOT_ORDER[0] == EquipmentSlot.HELMET
        assert EquipmentSlot.WEAPON.display_name == "武器"

    def test_rarity_rank(self):
        assert Rarity.COMMON.rank == 0
        assert Rarity.EPIC.rank == 3
