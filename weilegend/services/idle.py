"""
Idle Hunting for Wei Legend.

Schedules automatic battles in simulated minutes. Each minute is filled
with back-to-back battles of 12-24 simulated seconds; minutes replayed
while the player was away pay out at the configured offline rate. A
lost battle ends the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

from weilegend.engine.battle import BattleEngine
from weilegend.engine.models import BattleOptions
from weilegend.mechanics.stats import derive_stats
from weilegend.models.character import Character
from weilegend.models.content import GameContent

logger = logging.getLogger(__name__)

MINUTE_SECONDS = 60
BATTLE_SECONDS_RANGE = (12, 24)
MAX_IDLE_MINUTES = 720
MAX_LOG_LINES = 1800

WIN_HP_REGEN = 0.12
WIN_MP_REGEN = 0.15


class IdleSession(BaseModel):
    """A running idle-hunting session."""

    map_id: str
    total_minutes: int = Field(ge=1, le=MAX_IDLE_MINUTES)
    done_minutes: int = Field(default=0, ge=0)
    running: bool = True


class IdleSummary(BaseModel):
    """Totals accumulated over a session."""

    total_minutes: int
    processed_minutes: int = 0
    offline_minutes: int = 0
    wins: int = 0
    fails: int = 0
    exp: int = 0
    gold: int = 0
    drops: list[str] = Field(default_factory=list)
    logs: list[str] = Field(default_factory=list)

    def describe(self) -> str:
        return (
            f"挂机统计：{self.processed_minutes}/{self.total_minutes} 分钟，"
            f"胜利 {self.wins} 场，失败 {self.fails} 场，"
            f"经验 {self.exp}，金币 {self.gold}，掉落 {len(self.drops)} 件。"
        )


def start_idle(
    character: Character,
    map_id: str,
    minutes: int,
    content: GameContent,
) -> tuple[IdleSession | None, str]:
    """
    Open an idle session on a map.

    Minutes are clamped to 1-720. The character must meet the map's
    level requirement.

    Returns:
        (session or None when rejected, outcome message)
    """
    area = content.map_area(map_id)
    if area is None:
        return None, "地图不存在。"
    if character.level < area.min_level:
        return None, f"等级不足，需 Lv.{area.min_level} 才能进入{area.name}。"
    total = max(1, min(MAX_IDLE_MINUTES, int(minutes)))
    session = IdleSession(map_id=area.id, total_minutes=total)
    logger.info("Idle session started: %s on %s for %d minutes", character.name, area.id, total)
    return session, f"开始挂机：地图【{area.name}】，计划 {total} 分钟。"


@dataclass
class IdleRunner:
    """
    Drives one idle session against the battle engine.

    Callers must process minutes one at a time; the runner and the
    character it fights with are not safe for concurrent use.
    """

    engine: BattleEngine
    session: IdleSession | None = None
    summary: IdleSummary | None = None
    notice: str = ""
    minute_logs: list[str] = field(default_factory=list)

    @property
    def running(self) -> bool:
        return self.session is not None and self.session.running

    def start(self, character: Character, map_id: str, minutes: int) -> str:
        if self.running:
            return "挂机进行中，请先停止当前挂机。"
        session, message = start_idle(character, map_id, minutes, self.engine.content)
        if session is not None:
            self.session = session
            self.summary = IdleSummary(total_minutes=session.total_minutes)
        self.notice = message
        return message

    def stop(self) -> str:
        if not self.running:
            return "当前没有进行中的挂机。"
        self._finish("挂机已手动停止。")
        return self.notice

    def process_minute(self, character: Character, offline: bool = False) -> bool:
        """
        Play one simulated minute.

        Args:
            character: The hunting character, mutated by each battle
            offline: Replay at the offline reward and drop rate

        Returns:
            True while the session should keep running
        """
        if not self.running or self.session is None or self.summary is None:
            return False
        session = self.session
        summary = self.summary
        content = self.engine.content

        area = content.map_area(session.map_id)
        if area is None:
            self._finish("挂机地图不存在，已自动停止。")
            return False
        if character.level < area.min_level:
            self._finish(f"挂机停止：等级不足，需 Lv.{area.min_level} 才能进入{area.name}。")
            return False

        rate = self.engine.config.offline_rate if offline else 1.0
        options = BattleOptions(reward_rate=rate, drop_rate=rate)
        minute_no = session.done_minutes + 1
        if offline:
            title = f"[离线挂机·第{minute_no}分钟·收益{int(rate * 100)}%·按战斗耗时推进]"
        else:
            title = f"[挂机·第{minute_no}分钟·按战斗耗时推进]"
        logs = [title]

        failed = False
        battles = 0
        spent = 0
        while spent < MINUTE_SECONDS:
            if battles > 0 and spent + BATTLE_SECONDS_RANGE[0] > MINUTE_SECONDS:
                break
            battles += 1
            seconds = min(
                self.engine.dice.rand_int(*BATTLE_SECONDS_RANGE), MINUTE_SECONDS - spent
            )
            spent += seconds

            monster = self.engine.pick_monster(area)
            result = self.engine.run(character, area, monster, verbose=True, options=options)
            boss_tag = "[Boss]" if monster.is_boss else ""
            logs.append(
                f"第{battles}战（耗时{seconds}秒）：你在【{area.name}】遭遇{boss_tag}【{monster.name}】。"
            )
            logs.extend(result.logs)

            summary.exp += result.exp
            summary.gold += result.gold
            summary.drops.extend(result.drops)
            if not result.win:
                summary.fails += 1
                failed = True
                break
            summary.wins += 1
            self._regenerate(character, content)

        logs.append(f"本分钟战斗耗时 {MINUTE_SECONDS} 秒，完成 {battles} 战。")
        self.minute_logs = logs
        summary.logs = (summary.logs + logs)[-MAX_LOG_LINES:]
        summary.processed_minutes += 1
        if offline:
            summary.offline_minutes += 1
        session.done_minutes += 1

        if failed:
            self._finish("挂机中途失败，已自动停止。")
            return False
        if session.done_minutes >= session.total_minutes:
            self._finish(
                f"挂机结束：胜利 {summary.wins} 场，经验 {summary.exp}，金币 {summary.gold}。"
            )
            return False
        self.notice = f"挂机进行中：{session.done_minutes}/{session.total_minutes} 分钟（按战斗耗时推进）"
        return True

    def catch_up(self, character: Character, elapsed_minutes: int) -> int:
        """
        Replay minutes that passed while the player was away.

        Returns:
            Number of offline minutes processed
        """
        if not self.running or self.session is None:
            return 0
        pending = max(
            0, min(self.session.total_minutes - self.session.done_minutes, elapsed_minutes)
        )
        processed = 0
        for _ in range(pending):
            processed += 1
            if not self.process_minute(character, offline=True):
                break
        if processed:
            logger.info("Replayed %d offline idle minutes for %s", processed, character.name)
        return processed

    @staticmethod
    def _regenerate(character: Character, content: GameContent) -> None:
        stats = derive_stats(character, content.sets)
        character.hp = min(stats.max_hp, character.hp + int(stats.max_hp * WIN_HP_REGEN))
        character.mp = min(stats.max_mp, character.mp + int(stats.max_mp * WIN_MP_REGEN))

    def _finish(self, message: str) -> None:
        if self.session is not None:
            self.session.running = False
        self.notice = message
        if self.summary is not None:
            logger.info("Idle session ended: %s", self.summary.describe())
