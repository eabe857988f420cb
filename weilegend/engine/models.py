"""
Engine Data Models for Wei Legend.

Defines the data structures around one battle:
- EngineConfig: Tunable limits and session settings
- BattleOptions: Per-battle throttles supplied by the caller
- BattleResult: What happened, for the caller to display
"""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "WEILEGEND_"
ENV_VARS = {
    "max_rounds": "MAX_ROUNDS",
    "boss_max_rounds": "BOSS_MAX_ROUNDS",
    "boss_encounter_chance": "BOSS_CHANCE",
    "offline_rate": "OFFLINE_RATE",
    "save_path": "SAVE_PATH",
    "log_level": "LOG_LEVEL",
}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig(BaseModel):
    """Engine configuration."""

    # Battle limits
    max_rounds: int = Field(default=45, ge=1)
    boss_max_rounds: int = Field(default=70, ge=1)
    boss_encounter_chance: float = Field(default=0.06, ge=0.0, le=1.0)

    # Idle play
    offline_rate: float = Field(default=0.75, ge=0.0, le=1.0)

    # Session
    save_path: str | None = None
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> EngineConfig:
        """
        Build a config from ``WEILEGEND_*`` environment variables.

        Unset variables keep their defaults. A malformed value is logged and
        ignored rather than aborting startup.
        """
        env = os.environ if environ is None else environ
        config = cls()
        for name, suffix in ENV_VARS.items():
            raw = env.get(ENV_PREFIX + suffix)
            if raw is None or raw.strip() == "":
                continue
            try:
                config = cls.model_validate({**config.model_dump(), name: raw.strip()})
            except ValidationError:
                logger.warning("Ignoring malformed %s%s=%r", ENV_PREFIX, suffix, raw)
        return config

    def round_cap(self, is_boss: bool) -> int:
        return self.boss_max_rounds if is_boss else self.max_rounds


class BattleOptions(BaseModel):
    """Throttles applied by unattended callers, each clamped to [0, 1]."""

    reward_rate: float = 1.0
    drop_rate: float = 1.0

    @field_validator("reward_rate", "drop_rate")
    @classmethod
    def clamp_rate(cls, value: float) -> float:
        return max(0.0, min(1.0, value))


class BattleResult(BaseModel):
    """Outcome of one battle."""

    win: bool
    logs: list[str] = Field(default_factory=list, description="Narration, in order")
    exp: int = Field(default=0, description="Experience gained")
    gold: int = Field(default=0, description="Gold gained, negative on defeat")
    drops: list[str] = Field(default_factory=list, description="Drop descriptions")
    rounds: int = Field(default=0, ge=0)
