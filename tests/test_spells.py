"""Tests for the skill system: training, priority, and casting."""

from __future__ import annotations

import pytest

from weilegend.content import DEFAULT_CONTENT
from weilegend.mechanics.dice import Dice
from weilegend.mechanics.spells import (
    CAST_TRAINING_RANGE,
    add_training,
    battlefield_insight,
    perform_skill,
    pick_skill_priority,
    reduce_cooldowns,
    reset_cooldowns,
    skill_damage,
    skill_score,
    training_need,
)
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import Character, Profession, SkillState
from weilegend.models.fighter import Fighter, Poisoned, Shielded, Summoned

SKILLS = DEFAULT_CONTENT.skills


class FixedDice(Dice):
    """Always rolls the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(seed=0)
        self.value = value

    def random(self) -> float:
        return self.value


def _character(profession: Profession, *skill_ids: str, level: int = 1) -> Character:
    character = Character(name="测试", profession=profession, level=level, base_luck=1)
    for skill_id in skill_ids:
        character.skills[skill_id] = SkillState(template_id=skill_id)
    return character


def _fighters(hp: int = 100, max_hp: int = 100, mp: int = 500) -> tuple[Fighter, Fighter]:
    actor = Fighter(name="测试", hp=hp, max_hp=max_hp, mp=mp, max_mp=500)
    target = Fighter(name="稻草人", hp=1000, max_hp=1000, defense=0)
    return actor, target


class TestTraining:
    """Tests for training and skill levels."""

    def test_training_need(self):
        assert training_need(1) == 110
        assert training_need(3) == 190

    def test_partial_training(self):
        state = SkillState(template_id="mage_fireball")
        assert add_training(state, 50, SKILLS) == []
        assert state.level == 1
        assert state.training == 50

    def test_multiple_levels_in_one_call(self):
        state = SkillState(template_id="mage_fireball")
        logs = add_training(state, 110 + 150 + 5, SKILLS)
        assert state.level == 3
        assert state.training == 5
        assert logs == ["技能【火球术】提升到 Lv.2。", "技能【火球术】提升到 Lv.3。"]

    def test_negative_amount_is_ignored(self):
        state = SkillState(template_id="mage_fireball", training=10)
        add_training(state, -50, SKILLS)
        assert state.training == 10


class TestCooldowns:
    """Tests for cooldown bookkeeping."""

    def test_reset_and_reduce(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash", "warrior_charge")
        character.skills["warrior_attack_slash"].cooldown_left = 1
        character.skills["warrior_charge"].cooldown_left = 3
        reduce_cooldowns(character)
        assert character.skills["warrior_attack_slash"].cooldown_left == 0
        assert character.skills["warrior_charge"].cooldown_left == 2
        reset_cooldowns(character)
        assert all(s.cooldown_left == 0 for s in character.skills.values())


class TestPickSkillPriority:
    """Tests for the auto-cast priority picker."""

    def test_filters_unavailable_skills(self):
        character = _character(
            Profession.WARRIOR, "warrior_attack_slash", "warrior_charge", "warrior_half_moon"
        )
        character.skills["warrior_charge"].cooldown_left = 2
        character.skills["warrior_half_moon"].auto_use = False
        actor, target = _fighters(mp=10)
        picked = pick_skill_priority(character, actor, target, SKILLS)
        assert [s.template_id for s in picked] == ["warrior_attack_slash"]

    def test_insufficient_mana(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash")
        actor, target = _fighters(mp=5)
        assert pick_skill_priority(character, actor, target, SKILLS) == []

    def test_score_ranking(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash", "warrior_fire_sword")
        actor, target = _fighters()
        picked = pick_skill_priority(character, actor, target, SKILLS)
        assert picked[0].template_id == "warrior_fire_sword"

    def test_skill_score(self):
        state = SkillState(template_id="warrior_charge", level=2)
        assert skill_score(state, SKILLS["warrior_charge"]) == pytest.approx(30 + 12 - 14 * 0.06)

    def test_mage_shields_when_hurt(self):
        character = _character(Profession.MAGE, "mage_fireball", "mage_shield", "mage_blizzard")
        actor, target = _fighters(hp=80)
        assert pick_skill_priority(character, actor, target, SKILLS)[0].template_id == "mage_shield"

    def test_mage_shield_override_needs_unshielded_and_hurt(self):
        character = _character(Profession.MAGE, "mage_fireball", "mage_shield", "mage_blizzard")
        actor, target = _fighters(hp=80)
        actor.apply(Shielded(rounds_left=2, power=40))
        assert pick_skill_priority(character, actor, target, SKILLS)[0].template_id == "mage_blizzard"
        healthy, target = _fighters(hp=95)
        assert pick_skill_priority(character, healthy, target, SKILLS)[0].template_id == "mage_blizzard"

    def test_taoist_override_order(self):
        character = _character(
            Profession.TAOIST, "taoist_talisman", "taoist_heal", "taoist_poison", "taoist_pet"
        )
        actor, target = _fighters(hp=40)
        assert pick_skill_priority(character, actor, target, SKILLS)[0].template_id == "taoist_heal"

        actor.hp = 90
        assert pick_skill_priority(character, actor, target, SKILLS)[0].template_id == "taoist_poison"

        target.apply(Poisoned(rounds_left=3, damage_per_tick=10))
        assert pick_skill_priority(character, actor, target, SKILLS)[0].template_id == "taoist_pet"

        actor.apply(Summoned(rounds_left=3, damage_per_tick=10))
        ranked = [s.template_id for s in pick_skill_priority(character, actor, target, SKILLS)]
        assert ranked == ["taoist_heal", "taoist_pet", "taoist_talisman", "taoist_poison"]


class TestPerformSkill:
    """Tests for casting each skill kind."""

    def test_attack_skill(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash")
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters(mp=50)
        state = character.skills["warrior_attack_slash"]
        cast = perform_skill(character, stats, actor, target, state, SKILLS, FixedDice(0.99))
        assert cast.damage == 49
        assert not cast.critical
        assert target.hp == 1000 - 49
        assert actor.mp == 44
        assert state.cooldown_left == 1
        assert CAST_TRAINING_RANGE[0] <= state.training <= CAST_TRAINING_RANGE[1]
        assert "49" in cast.logs[0]

    def test_attack_skill_crit(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash")
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters()
        state = character.skills["warrior_attack_slash"]
        cast = perform_skill(character, stats, actor, target, state, SKILLS, FixedDice(0.0))
        assert cast.critical
        assert cast.damage == int(49 * 1.3)

    def test_skill_damage_minimum(self):
        state = SkillState(template_id="mage_fireball")
        assert skill_damage(SKILLS["mage_fireball"], state, 0, 10_000) == 1

    def test_thunder_can_shock(self):
        character = _character(Profession.MAGE, "mage_thunder", level=17)
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters()
        cast = perform_skill(
            character, stats, actor, target, character.skills["mage_thunder"], SKILLS, FixedDice(0.0)
        )
        assert target.shocked
        assert len(cast.logs) >= 2

    def test_shield(self):
        character = _character(Profession.MAGE, "mage_shield")
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters()
        perform_skill(
            character, stats, actor, target, character.skills["mage_shield"], SKILLS, FixedDice(0.5)
        )
        shield = actor.effect(Shielded)
        assert shield is not None
        assert shield.rounds_left == 4
        assert shield.power == 40 + 7 + 11

    def test_poison(self):
        character = _character(Profession.TAOIST, "taoist_poison")
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters()
        perform_skill(
            character, stats, actor, target, character.skills["taoist_poison"], SKILLS, FixedDice(0.5)
        )
        poison = target.effect(Poisoned)
        assert poison is not None
        assert poison.rounds_left == 5
        assert poison.damage_per_tick == 8 + 5 + 4

    def test_heal(self):
        character = _character(Profession.TAOIST, "taoist_heal")
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters(hp=10, max_hp=500)
        perform_skill(
            character, stats, actor, target, character.skills["taoist_heal"], SKILLS, FixedDice(0.5)
        )
        assert actor.hp == 10 + 40 + 11 + 10

    def test_summon(self):
        character = _character(Profession.TAOIST, "taoist_pet")
        stats = derive_stats(character, DEFAULT_CONTENT.sets)
        actor, target = _fighters()
        perform_skill(
            character, stats, actor, target, character.skills["taoist_pet"], SKILLS, FixedDice(0.5)
        )
        summon = actor.effect(Summoned)
        assert summon is not None
        assert summon.rounds_left == 6
        assert summon.damage_per_tick == 20 + 4 + 5


class TestBattlefieldInsight:
    """Tests for post-battle training."""

    def test_two_picks(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash", "warrior_charge")
        logs = battlefield_insight(character, SKILLS, Dice(seed=1))
        assert sum(1 for line in logs if line.startswith("实战领悟")) == 2
        total = sum(s.training for s in character.skills.values())
        assert 4 <= total <= 12

    def test_single_skill(self):
        character = _character(Profession.WARRIOR, "warrior_attack_slash")
        logs = battlefield_insight(character, SKILLS, Dice(seed=1))
        assert len(logs) == 1

    def test_no_skills(self):
        character = _character(Profession.WARRIOR)
        assert battlefield_insight(character, SKILLS, Dice(seed=1)) == []
