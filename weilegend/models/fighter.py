"""
Fighter and Status Effect Models for Wei Legend.

Battle-scoped combat state. A Fighter is created at battle start and
discarded at battle end; only hp/mp flow back to the Character.
"""

from __future__ import annotations

from typing import Annotated, Literal, TypeVar, Union

from pydantic import BaseModel, Field

SHIELD_MIN_REDUCTION = 0.22
SHIELD_MAX_REDUCTION = 0.65
SHIELD_POWER_DIVISOR = 240


# =============================================================================
# Status Effects
# =============================================================================


class _TimedEffect(BaseModel):
    rounds_left: int = Field(ge=0, description="Rounds remaining")

    def tick(self) -> bool:
        """
        Advance the effect by one round.

        Returns:
            True if the effect has expired, False otherwise.
        """
        self.rounds_left = max(0, self.rounds_left - 1)
        return self.rounds_left <= 0


class Poisoned(_TimedEffect):
    """Damage over time on the afflicted fighter."""

    kind: Literal["poisoned"] = "poisoned"
    damage_per_tick: int = Field(ge=0)


class Shielded(_TimedEffect):
    """Reduces incoming damage while active."""

    kind: Literal["shielded"] = "shielded"
    power: int = Field(ge=0)

    @property
    def reduction(self) -> float:
        """Fraction of incoming damage absorbed."""
        rate = SHIELD_MIN_REDUCTION + self.power / SHIELD_POWER_DIVISOR
        return max(SHIELD_MIN_REDUCTION, min(SHIELD_MAX_REDUCTION, rate))


class Summoned(_TimedEffect):
    """A pet attacking the opponent every round."""

    kind: Literal["summoned"] = "summoned"
    damage_per_tick: int = Field(ge=0)


class Paralyzed(_TimedEffect):
    """Skips the afflicted fighter's action."""

    kind: Literal["paralyzed"] = "paralyzed"


StatusEffect = Annotated[
    Union[Poisoned, Shielded, Summoned, Paralyzed],
    Field(discriminator="kind"),
]

E = TypeVar("E", Poisoned, Shielded, Summoned, Paralyzed)


# =============================================================================
# Fighter
# =============================================================================


class Fighter(BaseModel):
    """One side of a battle."""

    name: str
    hp: int
    mp: int = 0
    max_hp: int = Field(ge=1)
    max_mp: int = Field(default=0, ge=0)
    attack: int = 0
    magic: int = 0
    tao: int = 0
    attack_speed: float = 1.0
    defense: int = 0
    shocked: bool = Field(
        default=False, description="Next normal attack against this fighter hits harder"
    )
    effects: list[StatusEffect] = Field(default_factory=list)

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def hp_ratio(self) -> float:
        return self.hp / max(1, self.max_hp)

    def effect(self, effect_type: type[E]) -> E | None:
        """The active effect of a type, if any."""
        for effect in self.effects:
            if isinstance(effect, effect_type) and effect.rounds_left > 0:
                return effect
        return None

    def has(self, effect_type: type[E]) -> bool:
        return self.effect(effect_type) is not None

    def apply(self, effect: Poisoned | Shielded | Summoned | Paralyzed) -> None:
        """Add an effect, replacing any existing effect of the same kind."""
        self.effects = [e for e in self.effects if e.kind != effect.kind]
        self.effects.append(effect)

    def tick(self, *effect_types: type) -> list[str]:
        """
        Advance the given effect kinds by one round, dropping expired ones.

        Returns:
            Kinds that expired this tick.
        """
        expired = []
        for effect in list(self.effects):
            if isinstance(effect, effect_types) and effect.tick():
                self.effects.remove(effect)
                expired.append(effect.kind)
        return expired

    def take_damage(self, amount: int) -> int:
        self.hp -= amount
        return amount

    def heal(self, amount: int) -> int:
        """Heal up to max hp. Returns hp actually restored."""
        before = self.hp
        self.hp = min(self.max_hp, self.hp + max(0, amount))
        return self.hp - before

    def restore_mp(self, amount: int) -> int:
        before = self.mp
        self.mp = min(self.max_mp, self.mp + max(0, amount))
        return self.mp - before
