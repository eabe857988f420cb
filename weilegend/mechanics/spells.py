"""
Skill System.

Training and leveling of learned skills, the auto-cast priority picker,
and the per-kind cast resolution used by the battle engine.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from pydantic import BaseModel, Field

from weilegend.mechanics.dice import Dice
from weilegend.mechanics.stats import DerivedStats
from weilegend.models.character import Character, Profession, SkillState
from weilegend.models.content import SkillKind, SkillTemplate
from weilegend.models.fighter import Fighter, Poisoned, Shielded, Summoned

CAST_TRAINING_RANGE = (6, 12)
SCROLL_TRAINING_RANGE = (45, 70)
INSIGHT_TRAINING_RANGE = (2, 6)

MAGE_SHIELD_BELOW = 0.88
TAOIST_HEAL_BELOW = 0.45


def training_need(level: int) -> int:
    """Training points needed to advance from ``level``."""
    return 70 + level * 40


def add_training(
    state: SkillState,
    amount: int,
    templates: Mapping[str, SkillTemplate],
) -> list[str]:
    """
    Add training points, leveling up as many times as they allow.

    Returns:
        One log line per level gained.
    """
    logs: list[str] = []
    state.training += max(0, amount)
    while state.training >= training_need(state.level):
        state.training -= training_need(state.level)
        state.level += 1
        template = templates.get(state.template_id)
        name = template.name if template else state.template_id
        logs.append(f"技能【{name}】提升到 Lv.{state.level}。")
    return logs


def reset_cooldowns(character: Character) -> None:
    for state in character.skills.values():
        state.cooldown_left = 0


def reduce_cooldowns(character: Character) -> None:
    for state in character.skills.values():
        if state.cooldown_left > 0:
            state.cooldown_left -= 1


# =============================================================================
# Priority Picker
# =============================================================================


def skill_score(state: SkillState, template: SkillTemplate) -> float:
    """Power-per-cost heuristic used when no tactical override applies."""
    return template.base_power + state.level * 6 - template.mana_cost * 0.06


def _promote(chosen: SkillState, available: list[SkillState]) -> list[SkillState]:
    return [chosen, *(state for state in available if state is not chosen)]


def pick_skill_priority(
    character: Character,
    actor: Fighter,
    target: Fighter,
    templates: Mapping[str, SkillTemplate],
) -> list[SkillState]:
    """
    Order the castable skills by tactical priority.

    Only auto-enabled, off-cooldown, affordable skills are considered. The
    caller casts the first entry; the rest of the order is informational.
    """
    available = [
        state
        for state in character.skills.values()
        if (template := templates.get(state.template_id)) is not None
        and state.auto_use
        and state.cooldown_left == 0
        and actor.mp >= template.mana_cost
    ]
    if not available:
        return []

    def first_of(kind: SkillKind) -> SkillState | None:
        for state in available:
            if templates[state.template_id].kind == kind:
                return state
        return None

    if character.profession == Profession.MAGE:
        shield = first_of(SkillKind.SHIELD)
        if shield and not actor.has(Shielded) and actor.hp_ratio < MAGE_SHIELD_BELOW:
            return _promote(shield, available)

    if character.profession == Profession.TAOIST:
        heal = first_of(SkillKind.HEAL)
        if heal and actor.hp_ratio < TAOIST_HEAL_BELOW:
            return _promote(heal, available)
        poison = first_of(SkillKind.POISON)
        if poison and not target.has(Poisoned):
            return _promote(poison, available)
        summon = first_of(SkillKind.SUMMON)
        if summon and not actor.has(Summoned):
            return _promote(summon, available)

    return sorted(
        available,
        key=lambda state: skill_score(state, templates[state.template_id]),
        reverse=True,
    )


# =============================================================================
# Casting
# =============================================================================


class SkillCast(BaseModel):
    """Outcome of one cast."""

    logs: list[str] = Field(default_factory=list)
    damage: int = Field(default=0, description="Direct damage dealt, attack kind only")
    critical: bool = False


def skill_damage(
    template: SkillTemplate,
    state: SkillState,
    primary: int,
    target_defense: int,
) -> int:
    raw = template.base_power + state.level * 10 + primary * template.scaling - target_defense * 0.45
    return max(1, math.floor(raw))


def perform_skill(
    character: Character,
    stats: DerivedStats,
    actor: Fighter,
    target: Fighter,
    state: SkillState,
    templates: Mapping[str, SkillTemplate],
    dice: Dice,
) -> SkillCast:
    """
    Cast a skill: pay mana, start its cooldown, and apply its effect.

    Every successful cast grants 6-12 training points to the skill.
    """
    template = templates.get(state.template_id)
    if template is None:
        return SkillCast(logs=["技能释放失败。"])

    actor.mp -= template.mana_cost
    state.cooldown_left = template.cooldown
    primary = stats.primary(character.profession)
    cast = SkillCast()

    if template.kind == SkillKind.ATTACK:
        damage = skill_damage(template, state, primary, target.defense)
        profile = template.strike
        critical = False
        if profile is not None:
            rate = profile.crit_rate(stats.luck, stats.attack_speed, stats.crit_rate)
            if dice.chance(rate):
                critical = True
                damage = int(damage * profile.crit_multiplier)
        target.take_damage(damage)
        cast.damage = damage
        cast.critical = critical
        if profile is not None:
            cast.logs.append(profile.describe(template.name, damage, critical))
            if profile.shock_chance and dice.chance(profile.shock_chance):
                target.shocked = True
                if profile.shock_text:
                    cast.logs.append(profile.shock_text)
        else:
            cast.logs.append(f"【{template.name}】命中目标，造成 {damage} 点伤害。")

    elif template.kind == SkillKind.SHIELD:
        rounds = template.duration + state.level // 3
        power = template.base_power + state.level * 7 + int(stats.magic * template.scaling)
        actor.apply(Shielded(rounds_left=rounds, power=power))
        cast.logs.append(template.cast_text.format(name=template.name, rounds=rounds, amount=power))

    elif template.kind == SkillKind.POISON:
        rounds = template.duration + state.level // 3
        tick = template.base_power + int(stats.tao * template.scaling) + state.level * 4
        target.apply(Poisoned(rounds_left=rounds, damage_per_tick=tick))
        cast.logs.append(template.cast_text.format(name=template.name, rounds=rounds, amount=tick))

    elif template.kind == SkillKind.HEAL:
        amount = template.base_power + int(stats.tao * template.scaling) + state.level * 10
        actor.heal(amount)
        cast.logs.append(template.cast_text.format(name=template.name, rounds=0, amount=amount))

    elif template.kind == SkillKind.SUMMON:
        rounds = template.duration + state.level // 2
        tick = template.base_power + int(stats.tao * template.scaling) + state.level * 5
        actor.apply(Summoned(rounds_left=rounds, damage_per_tick=tick))
        cast.logs.append(template.cast_text.format(name=template.name, rounds=rounds, amount=tick))

    cast.logs.extend(add_training(state, dice.rand_int(*CAST_TRAINING_RANGE), templates))
    return cast


def battlefield_insight(
    character: Character,
    templates: Mapping[str, SkillTemplate],
    dice: Dice,
) -> list[str]:
    """Post-battle training: two picks among learned skills, 2-6 points each."""
    logs: list[str] = []
    learned = list(character.skills.values())
    if not learned:
        return logs
    for _ in range(min(2, len(learned))):
        state = dice.choice(learned)
        gain = dice.rand_int(*INSIGHT_TRAINING_RANGE)
        template = templates.get(state.template_id)
        name = template.name if template else state.template_id
        logs.append(f"实战领悟：{name} 熟练度 +{gain}。")
        logs.extend(add_training(state, gain, templates))
    return logs
