"""
Battle Engine for Wei Legend.

Runs one automatic battle to resolution: the round loop, the
victory/defeat bookkeeping, and the final write-back to the character.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from weilegend.engine.models import BattleOptions, BattleResult, EngineConfig
from weilegend.mechanics.combat import (
    auto_potions,
    monster_attack,
    monster_fighter,
    normal_attack,
    on_hit_effects,
    player_fighter,
    poison_tick,
    summon_tick,
)
from weilegend.mechanics.dice import Dice
from weilegend.mechanics.rewards import (
    apply_drops,
    grant_experience,
    roll_drops,
    roll_exp,
    roll_gold,
)
from weilegend.mechanics.spells import (
    battlefield_insight,
    perform_skill,
    pick_skill_priority,
    reduce_cooldowns,
    reset_cooldowns,
)
from weilegend.mechanics.stats import clamp_resources, derive_stats
from weilegend.models.character import Character
from weilegend.models.content import GameContent, MapArea, MonsterTemplate
from weilegend.models.fighter import Fighter, Paralyzed, Shielded

logger = logging.getLogger(__name__)

DEFEAT_GOLD_PENALTY = 0.08
DEFEAT_HP_RATIO = 0.40
DEFEAT_MP_RATIO = 0.35


@dataclass
class BattleEngine:
    """
    Automatic battle resolver.

    The engine holds no per-battle state; a single instance can serve any
    number of characters as long as callers never run two battles against
    the same character at once.
    """

    content: GameContent
    dice: Dice = field(default_factory=Dice)
    config: EngineConfig = field(default_factory=EngineConfig)

    def pick_monster(self, area: MapArea) -> MonsterTemplate:
        """Pick an opponent, with a small chance of meeting the area's boss."""
        if area.bosses and self.dice.chance(self.config.boss_encounter_chance):
            return self.dice.choice(area.bosses)
        return self.dice.choice(area.monsters)

    def run(
        self,
        character: Character,
        area: MapArea,
        monster: MonsterTemplate,
        verbose: bool = False,
        options: BattleOptions | None = None,
    ) -> BattleResult:
        """
        Fight one battle and write the outcome back to the character.

        The battle runs against a working copy. The character is only
        touched once, after the battle has fully resolved.

        Args:
            character: The player's character, mutated on return
            area: Map the battle takes place in, for its drop tier
            monster: The opponent
            verbose: Add a status header line at the start of every round
            options: Reward and drop throttles; defaults to full rates

        Returns:
            BattleResult with narration, exp/gold deltas, and drops
        """
        options = options or BattleOptions()
        working = character.model_copy(deep=True)
        sets = self.content.sets

        reset_cooldowns(working)
        stats = derive_stats(working, sets)
        actor = player_fighter(working, stats)
        target = monster_fighter(monster)
        round_cap = self.config.round_cap(monster.is_boss)
        logs: list[str] = []
        rounds = 0

        while actor.alive and target.alive and rounds < round_cap:
            rounds += 1
            if verbose:
                logs.append(self._round_header(rounds, actor, target))

            logs.extend(auto_potions(working, actor))

            if line := poison_tick(target):
                logs.append(line)
            if not target.alive:
                break

            priority = pick_skill_priority(working, actor, target, self.content.skills)
            if priority:
                cast = perform_skill(
                    working, stats, actor, target, priority[0], self.content.skills, self.dice
                )
                logs.extend(cast.logs)
                damage = cast.damage
            else:
                damage, lines = normal_attack(working.profession, stats, actor, target, self.dice)
                logs.extend(lines)
            logs.extend(on_hit_effects(stats, actor, target, damage, self.dice))

            logs.extend(summon_tick(actor, target, stats, self.dice))
            if not target.alive:
                break

            logs.append(monster_attack(target, actor, monster.skill_text, self.dice))

            reduce_cooldowns(working)
            actor.tick(Shielded)
            target.tick(Paralyzed)

        win = actor.alive and not target.alive
        working.hp = max(0, min(actor.hp, stats.max_hp))
        working.mp = max(0, min(actor.mp, stats.max_mp))

        if win:
            result = self._victory(working, area, monster, options, logs, rounds)
        else:
            if actor.alive:
                logs.append(f"鏖战 {rounds} 回合仍未分出胜负，你体力不支，只得退走。")
            result = self._defeat(working, logs, rounds)

        clamp_resources(working, sets)
        self._write_back(character, working)
        logger.debug(
            "Battle %s vs %s: win=%s rounds=%d exp=%d gold=%d",
            character.name,
            monster.name,
            result.win,
            result.rounds,
            result.exp,
            result.gold,
        )
        return result

    def _victory(
        self,
        working: Character,
        area: MapArea,
        monster: MonsterTemplate,
        options: BattleOptions,
        logs: list[str],
        rounds: int,
    ) -> BattleResult:
        exp = roll_exp(monster, options.reward_rate, self.dice)
        gold = roll_gold(monster, options.reward_rate, self.dice)
        logs.append(f"你击败了 {monster.name}！")
        logs.append(f"获得经验 {exp}，金币 {gold}。")
        working.gold += gold
        logs.extend(grant_experience(working, exp, self.content))
        logs.extend(battlefield_insight(working, self.content.skills, self.dice))

        luck = derive_stats(working, self.content.sets).luck
        drops = roll_drops(
            working, monster, area.drop_tier, luck, options.drop_rate, self.content, self.dice
        )
        apply_drops(working, drops)
        logs.extend(drops.descriptions)
        return BattleResult(
            win=True, logs=logs, exp=exp, gold=gold, drops=drops.descriptions, rounds=rounds
        )

    def _defeat(self, working: Character, logs: list[str], rounds: int) -> BattleResult:
        penalty = int(working.gold * DEFEAT_GOLD_PENALTY)
        working.gold = max(0, working.gold - penalty)
        stats = derive_stats(working, self.content.sets)
        working.hp = int(stats.max_hp * DEFEAT_HP_RATIO)
        working.mp = int(stats.max_mp * DEFEAT_MP_RATIO)
        logs.append(f"你被击败，遗失金币 {penalty}，勉强撤离战场。")
        return BattleResult(win=False, logs=logs, exp=0, gold=-penalty, rounds=rounds)

    @staticmethod
    def _round_header(round_no: int, actor: Fighter, target: Fighter) -> str:
        return (
            f"[第{round_no}回合] 你 HP {actor.hp}/{actor.max_hp} MP {actor.mp}/{actor.max_mp}"
            f" | {target.name} HP {target.hp}/{target.max_hp}"
        )

    @staticmethod
    def _write_back(character: Character, working: Character) -> None:
        for name in Character.model_fields:
            setattr(character, name, getattr(working, name))
