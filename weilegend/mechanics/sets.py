"""
Set-Bonus Evaluation.

Counts worn set pieces and sums the bonuses of every active tier.
Bonuses are recomputed on demand and never stored on the character.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from pydantic import BaseModel, Field

from weilegend.models.character import Character
from weilegend.models.content import SetTemplate
from weilegend.models.equipment import SetColor, StatBonus


class SetTierStatus(BaseModel):
    """Display state of one tier."""

    pieces: int
    label: str
    bonus: str
    active: bool


class SetStatusRow(BaseModel):
    """Display row for one worn set."""

    set_id: str
    name: str
    color: SetColor
    worn: int
    max_pieces: int
    tiers: list[SetTierStatus] = Field(default_factory=list)

    def describe(self) -> str:
        tier_text = " / ".join(
            f"{'✔' if tier.active else '✘'}{tier.pieces}件:{tier.bonus}" for tier in self.tiers
        )
        return f"【{self.name}】{self.worn}/{self.max_pieces} {tier_text}"


class SetEvaluation(BaseModel):
    """Aggregate set effects plus per-set display rows."""

    effects: StatBonus = Field(default_factory=StatBonus)
    rows: list[SetStatusRow] = Field(default_factory=list)


def count_set_pieces(character: Character) -> Counter[str]:
    """Number of equipped pieces per set id."""
    return Counter(item.set_id for item in character.equipped() if item.set_id)


def evaluate_sets(character: Character, sets: Sequence[SetTemplate]) -> SetEvaluation:
    """
    Evaluate the active set bonuses for a character.

    Args:
        character: Character whose equipped items are counted
        sets: Set templates from the content catalogue

    Returns:
        SetEvaluation with the summed effects and one row per worn set
    """
    worn_counts = count_set_pieces(character)
    effects = StatBonus()
    rows: list[SetStatusRow] = []

    for template in sets:
        if not template.allows(character.profession):
            continue
        worn = worn_counts.get(template.id, 0)
        tiers: list[SetTierStatus] = []
        for tier in sorted(template.tiers, key=lambda t: t.pieces):
            active = worn >= tier.pieces
            if active:
                effects = effects.plus(tier.bonus)
            tiers.append(
                SetTierStatus(
                    pieces=tier.pieces,
                    label=tier.label,
                    bonus=tier.bonus.describe(),
                    active=active,
                )
            )
        if worn > 0:
            rows.append(
                SetStatusRow(
                    set_id=template.id,
                    name=template.name,
                    color=template.color,
                    worn=worn,
                    max_pieces=template.max_pieces,
                    tiers=tiers,
                )
            )

    effects.attack_speed = round(effects.attack_speed, 2)
    return SetEvaluation(effects=effects, rows=rows)
