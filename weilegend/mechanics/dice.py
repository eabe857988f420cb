"""
Random Source for Wei Legend.

Every mechanic that needs randomness takes a Dice instance instead of
calling the random module directly, so tests can seed or script rolls.
"""

from __future__ import annotations

import random
import re
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class DiceResult(BaseModel):
    """Result of a dice roll."""

    notation: str = Field(description="Original dice notation")
    rolls: list[int] = Field(description="Individual die results")
    modifier: int = Field(default=0, description="Any +/- modifier")
    total: int = Field(description="Final result")


class Dice:
    """
    Injectable random source.

    Wraps a ``random.Random`` instance. Pass a seed for reproducible
    battles, or subclass and override ``random`` to script exact rolls.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def rand_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        if high < low:
            low, high = high, low
        return int(self.random() * (high - low + 1)) + low

    def rand_float(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return self.random() * (high - low) + low

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.rand_int(0, len(items) - 1)]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """
        Pick one element with probability proportional to its weight.

        Args:
            items: Candidates
            weights: Non-negative weights, one per candidate

        Returns:
            The chosen candidate
        """
        if not items or len(items) != len(weights):
            raise ValueError("Items and weights must be non-empty and the same length")
        total = sum(max(0.0, w) for w in weights)
        if total <= 0:
            return self.choice(items)
        roll = self.random() * total
        for item, weight in zip(items, weights):
            roll -= max(0.0, weight)
            if roll < 0:
                return item
        return items[-1]

    def roll(self, notation: str) -> DiceResult:
        """
        Roll dice using NdX or NdX+M notation.

        Examples:
            >>> Dice(seed=1).roll("1d2").total in (1, 2)
            True
        """
        notation = notation.lower().strip()
        match = re.match(r"^(\d+)d(\d+)([+-]\d+)?$", notation)
        if not match:
            raise ValueError(f"Invalid dice notation: {notation}")

        num_dice = int(match.group(1))
        die_size = int(match.group(2))
        modifier = int(match.group(3)) if match.group(3) else 0

        if num_dice < 1 or die_size < 1:
            raise ValueError("Number of dice and die size must be positive")

        rolls = [self.rand_int(1, die_size) for _ in range(num_dice)]
        return DiceResult(
            notation=notation,
            rolls=rolls,
            modifier=modifier,
            total=sum(rolls) + modifier,
        )
