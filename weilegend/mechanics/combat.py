"""
Combat Actions.

The individual actions of a battle round: potions, damage-over-time
ticks, the normal attack, on-hit riders, and the monster's attack.
The round loop itself lives in the battle engine.
"""

from __future__ import annotations

import math

from weilegend.mechanics.dice import Dice
from weilegend.mechanics.stats import DerivedStats
from weilegend.models.character import Character, ItemName, Profession
from weilegend.models.content import MonsterTemplate
from weilegend.models.fighter import Fighter, Paralyzed, Poisoned, Shielded, Summoned

NORMAL_ATTACK_COEFFICIENT: dict[Profession, float] = {
    Profession.WARRIOR: 1.0,
    Profession.MAGE: 0.72,
    Profession.TAOIST: 0.84,
}

SHOCK_MULTIPLIER = 1.2
NORMAL_CRIT_MULTIPLIER = 1.7
EXTRA_SWING_CAP = 0.20
EXTRA_SWING_RATIO = 0.45
SUMMON_LIFESTEAL_SHARE = 0.5
PARALYSIS_ROUNDS = 1


# =============================================================================
# Fighter Construction
# =============================================================================


def player_fighter(character: Character, stats: DerivedStats) -> Fighter:
    """Snapshot the character into a fighter for one battle."""
    return Fighter(
        name=character.name,
        hp=max(1, min(character.hp, stats.max_hp)),
        mp=max(0, min(character.mp, stats.max_mp)),
        max_hp=stats.max_hp,
        max_mp=stats.max_mp,
        attack=stats.attack,
        magic=stats.magic,
        tao=stats.tao,
        attack_speed=stats.attack_speed,
        defense=stats.defense,
    )


def monster_fighter(monster: MonsterTemplate) -> Fighter:
    return Fighter(
        name=monster.name,
        hp=monster.hp,
        max_hp=monster.hp,
        attack=monster.attack,
        defense=monster.defense,
    )


# =============================================================================
# Potions
# =============================================================================


def hp_potion_amount(max_hp: int) -> int:
    return int(max_hp * 0.35) + 70


def mp_potion_amount(max_mp: int) -> int:
    return int(max_mp * 0.35) + 60


def use_potion_in_battle(character: Character, actor: Fighter, potion: ItemName) -> str | None:
    """
    Drink one potion mid-battle.

    Returns:
        Narration, or None when out of stock or the resource is already full.
    """
    if character.count(potion) <= 0:
        return None
    if potion == ItemName.HP_POTION:
        if actor.hp >= actor.max_hp:
            return None
        character.add_item(potion, -1)
        amount = hp_potion_amount(actor.max_hp)
        actor.heal(amount)
        return f"你迅速拍碎一瓶金创药，暖流涌遍全身，恢复 {amount} 点生命。"
    if potion == ItemName.MP_POTION:
        if actor.mp >= actor.max_mp:
            return None
        character.add_item(potion, -1)
        amount = mp_potion_amount(actor.max_mp)
        actor.restore_mp(amount)
        return f"你灌下一口魔法药，精神一振，恢复 {amount} 点魔法。"
    return None


def auto_potions(character: Character, actor: Fighter) -> list[str]:
    """Apply the character's auto-potion thresholds, hp first."""
    logs: list[str] = []
    config = character.potion_config
    if config.auto_hp_enabled and actor.hp / max(1, actor.max_hp) * 100 <= config.auto_hp_threshold:
        if line := use_potion_in_battle(character, actor, ItemName.HP_POTION):
            logs.append(line)
    if config.auto_mp_enabled and actor.mp / max(1, actor.max_mp) * 100 <= config.auto_mp_threshold:
        if line := use_potion_in_battle(character, actor, ItemName.MP_POTION):
            logs.append(line)
    return logs


# =============================================================================
# Damage Over Time
# =============================================================================


def poison_tick(target: Fighter) -> str | None:
    """Apply one poison tick to the target and count it down."""
    poison = target.effect(Poisoned)
    if poison is None:
        return None
    target.take_damage(poison.damage_per_tick)
    target.tick(Poisoned)
    return f"毒素发作，{target.name} 受到 {poison.damage_per_tick} 点持续伤害。"


def summon_tick(
    actor: Fighter,
    target: Fighter,
    stats: DerivedStats,
    dice: Dice,
) -> list[str]:
    """The summoned pet attacks, with half the caster's lifesteal."""
    summon = actor.effect(Summoned)
    if summon is None or not target.alive:
        return []
    damage = summon.damage_per_tick + dice.rand_int(-4, 8)
    damage = max(1, damage - int(target.defense * 0.18))
    target.take_damage(damage)
    actor.tick(Summoned)
    logs = [f"神兽凌空扑击，利爪撕开血痕，再造成 {damage} 点伤害。"]
    healed = actor.heal(int(damage * stats.lifesteal * SUMMON_LIFESTEAL_SHARE))
    if healed > 0:
        logs.append(f"神兽反哺灵力，你恢复 {healed} 点生命。")
    return logs


# =============================================================================
# Player Attacks
# =============================================================================


def normal_crit_rate(stats: DerivedStats) -> float:
    return max(0.08, min(0.5, 0.08 + stats.luck * 0.015 + stats.crit_rate))


def extra_swing_chance(attack_speed: float) -> float:
    return max(0.0, min(EXTRA_SWING_CAP, (attack_speed - 1.0) * 0.25))


def normal_attack(
    profession: Profession,
    stats: DerivedStats,
    actor: Fighter,
    target: Fighter,
    dice: Dice,
) -> tuple[int, list[str]]:
    """
    Plain weapon attack, used when no skill is castable.

    Returns:
        (total damage dealt, narration lines)
    """
    primary = stats.primary(profession)
    raw = (
        primary * NORMAL_ATTACK_COEFFICIENT[profession]
        + dice.rand_int(0, 7)
        + actor.attack_speed * 8
        - target.defense * 0.5
    )
    damage = max(1, math.floor(raw))
    if target.shocked:
        damage = int(damage * SHOCK_MULTIPLIER)
        target.shocked = False

    logs: list[str] = []
    if dice.chance(normal_crit_rate(stats)):
        damage = int(damage * NORMAL_CRIT_MULTIPLIER)
        logs.append(f"你抓住破绽劈出暴击，刀锋带起火花，造成 {damage} 点伤害。")
    else:
        logs.append(f"你打出一记平砍，造成 {damage} 点伤害。")
    target.take_damage(damage)
    total = damage

    if target.alive and dice.chance(extra_swing_chance(actor.attack_speed)):
        follow = max(1, int(damage * EXTRA_SWING_RATIO))
        target.take_damage(follow)
        total += follow
        logs.append(f"身法迅捷，你顺势追加一击，再造成 {follow} 点伤害。")
    return total, logs


def on_hit_effects(
    stats: DerivedStats,
    actor: Fighter,
    target: Fighter,
    damage: int,
    dice: Dice,
) -> list[str]:
    """Paralysis proc and lifesteal after direct damage."""
    logs: list[str] = []
    if damage <= 0:
        return logs
    if (
        target.alive
        and stats.paralyze_chance > 0
        and not target.has(Paralyzed)
        and dice.chance(stats.paralyze_chance)
    ):
        target.apply(Paralyzed(rounds_left=PARALYSIS_ROUNDS))
        logs.append(f"麻痹戒指闪过一道电光，{target.name} 全身僵直！")
    healed = actor.heal(int(damage * stats.lifesteal))
    if healed > 0:
        logs.append(f"你吸取敌人精血，恢复 {healed} 点生命。")
    return logs


# =============================================================================
# Monster Attack
# =============================================================================


def monster_attack(monster: Fighter, player: Fighter, text: str, dice: Dice) -> str:
    """The monster's flavor attack, softened by an active shield."""
    if monster.has(Paralyzed):
        return f"{monster.name} 被麻痹，无法行动。"
    damage = max(1, math.floor(monster.attack + dice.rand_int(-4, 10) - player.defense * 0.48))
    shield = player.effect(Shielded)
    if shield is not None:
        reduced = int(damage * shield.reduction)
        damage -= reduced
        player.take_damage(damage)
        return f"{text} 但魔法盾扭曲冲击，吸收 {reduced} 点伤害，你仍承受 {damage} 点。"
    player.take_damage(damage)
    return f"{text} 你受到 {damage} 点伤害。"
