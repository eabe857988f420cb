"""Tests for derived stat aggregation and set-bonus evaluation."""

from __future__ import annotations

import pytest

from weilegend.content import DEFAULT_CONTENT
from weilegend.mechanics.sets import count_set_pieces, evaluate_sets
from weilegend.mechanics.stats import clamp_resources, derive_stats
from weilegend.models.character import Character, Profession
from weilegend.models.equipment import Equipment, EquipmentSlot

SETS = DEFAULT_CONTENT.sets

BERSERKER_SLOTS = [
    EquipmentSlot.WEAPON,
    EquipmentSlot.ARMOR,
    EquipmentSlot.HELMET,
    EquipmentSlot.BELT,
    EquipmentSlot.BOOTS,
]


def _character(profession: Profession = Profession.WARRIOR, level: int = 1) -> Character:
    return Character(name="测试", profession=profession, level=level, base_luck=1)


def _piece(set_id: str, slot: EquipmentSlot, **stats) -> Equipment:
    return Equipment(name=f"{set_id}-{slot.value}", slot=slot, set_id=set_id, **stats)


class TestDeriveStats:
    """Tests for derive_stats."""

    def test_warrior_base_stats(self):
        stats = derive_stats(_character(), SETS)
        assert stats.attack == 22
        assert stats.defense == 10
        assert stats.max_hp == 260
        assert stats.max_mp == 90
        assert stats.attack_speed == 1.0
        assert stats.luck == 1
        assert stats.primary(Profession.WARRIOR) == 22

    def test_level_growth(self):
        stats = derive_stats(_character(Profession.MAGE, level=11), SETS)
        assert stats.magic == 22 + 10 * 5
        assert stats.max_mp == 220 + 10 * 22

    def test_is_pure(self):
        character = _character()
        character.equipments[EquipmentSlot.WEAPON] = Equipment(
            name="斩马刀", slot=EquipmentSlot.WEAPON, attack=30, strengthen=3
        )
        before = character.model_dump()
        first = derive_stats(character, SETS)
        second = derive_stats(character, SETS)
        assert first == second
        assert character.model_dump() == before

    def test_equipment_adds_effective_stats(self):
        character = _character()
        character.equipments[EquipmentSlot.WEAPON] = Equipment(
            name="斩马刀", slot=EquipmentSlot.WEAPON, attack=100, strengthen=5
        )
        assert derive_stats(character, SETS).attack == 22 + 160

    def test_attack_speed_is_clamped(self):
        character = _character()
        character.equipments[EquipmentSlot.WEAPON] = Equipment(
            name="疾风", slot=EquipmentSlot.WEAPON, attack_speed=5.0
        )
        assert derive_stats(character, SETS).attack_speed == pytest.approx(1.82)

    def test_paralysis_chance_is_clamped(self):
        character = _character()
        for slot in (EquipmentSlot.LEFT_RING, EquipmentSlot.RIGHT_RING):
            character.equipments[slot] = Equipment(name="麻痹戒指", slot=slot, special="paralyze")
        assert derive_stats(character, SETS).paralyze_chance == pytest.approx(0.20)

    def test_maxima_never_drop_below_floor(self):
        character = _character()
        character.equipments[EquipmentSlot.ARMOR] = Equipment(
            name="诅咒铠甲", slot=EquipmentSlot.ARMOR, hp=-100_000, mp=-100_000
        )
        stats = derive_stats(character, SETS)
        assert stats.max_hp == 1
        assert stats.max_mp == 0

    def test_single_paralysis_ring(self):
        character = _character()
        character.equipments[EquipmentSlot.LEFT_RING] = Equipment(
            name="麻痹戒指", slot=EquipmentSlot.LEFT_RING, special="paralyze"
        )
        assert derive_stats(character, SETS).paralyze_chance == pytest.approx(0.12)


class TestClampResources:
    """Tests for clamp_resources."""

    def test_clamps_to_new_maxima(self):
        character = _character()
        character.hp = 9999
        character.mp = 9999
        stats = clamp_resources(character, SETS)
        assert character.hp == stats.max_hp
        assert character.mp == stats.max_mp

    def test_keeps_values_in_range(self):
        character = _character()
        character.hp = 100
        character.mp = 0
        clamp_resources(character, SETS)
        assert character.hp == 100
        assert character.mp == 0


class TestEvaluateSets:
    """Tests for set-bonus evaluation."""

    def test_no_sets(self):
        evaluation = evaluate_sets(_character(), SETS)
        assert evaluation.effects.is_empty()
        assert evaluation.rows == []

    def test_two_pieces_activate_first_tier(self):
        character = _character()
        for slot in BERSERKER_SLOTS[:2]:
            character.equipments[slot] = _piece("berserker", slot)
        evaluation = evaluate_sets(character, SETS)
        assert evaluation.effects.attack == 6
        assert evaluation.effects.hp == 0
        row = evaluation.rows[0]
        assert row.set_id == "berserker"
        assert row.worn == 2
        assert row.max_pieces == 5
        assert [tier.active for tier in row.tiers] == [True, False, False]
        assert row.describe().startswith("【狂战】2/5")

    def test_activation_is_monotonic(self):
        character = _character()
        previous: set[int] = set()
        for slot in BERSERKER_SLOTS:
            character.equipments[slot] = _piece("berserker", slot)
            row = evaluate_sets(character, SETS).rows[0]
            active = {tier.pieces for tier in row.tiers if tier.active}
            assert previous <= active
            previous = active
        assert previous == {2, 3, 5}

    def test_full_set_feeds_derived_stats(self):
        character = _character()
        for slot in BERSERKER_SLOTS:
            character.equipments[slot] = _piece("berserker", slot)
        stats = derive_stats(character, SETS)
        assert stats.attack == 22 + 6
        assert stats.max_hp == 260 + 80
        assert stats.attack_speed == pytest.approx(1.08)
        assert stats.crit_rate == pytest.approx(0.05)
        assert stats.lifesteal == pytest.approx(0.04)

    def test_mixed_sets_stack(self):
        character = _character()
        character.equipments[EquipmentSlot.WEAPON] = _piece("berserker", EquipmentSlot.WEAPON)
        character.equipments[EquipmentSlot.ARMOR] = _piece("berserker", EquipmentSlot.ARMOR)
        character.equipments[EquipmentSlot.LEFT_RING] = _piece("meteor", EquipmentSlot.LEFT_RING)
        character.equipments[EquipmentSlot.RIGHT_RING] = _piece("meteor", EquipmentSlot.RIGHT_RING)
        evaluation = evaluate_sets(character, SETS)
        assert evaluation.effects.attack == 6
        assert evaluation.effects.luck == 1
        assert {row.set_id for row in evaluation.rows} == {"berserker", "meteor"}

    def test_profession_restriction(self):
        character = _character(Profession.MAGE)
        for slot in BERSERKER_SLOTS:
            character.equipments[slot] = _piece("berserker", slot)
        evaluation = evaluate_sets(character, SETS)
        assert evaluation.effects.is_empty()
        assert evaluation.rows == []

    def test_bag_pieces_do_not_count(self):
        character = _character()
        character.bag = [_piece("berserker", slot) for slot in BERSERKER_SLOTS]
        assert count_set_pieces(character) == {}
        assert evaluate_sets(character, SETS).effects.is_empty()
