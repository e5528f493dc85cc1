"""Bonus tier ladder lookup."""

from __future__ import annotations

from typing import Sequence

from ..common.numbers import clamp, round_half_up
from ..core.settings import DEFAULT_BONUS_TIERS, BonusTier
from .model import TierResult


def map_tier(total_score: float, tiers: Sequence[BonusTier] = DEFAULT_BONUS_TIERS) -> TierResult:
    """Map a composite score onto its tier and interpolated bonus percentage.

    The ladder's integer ranges leave gaps such as (30, 31); a fractional score
    belongs to the highest tier whose ``min_score`` it reaches, and its position
    inside that tier is capped at the top of the range.
    """
    score = clamp(float(total_score), 0.0, 100.0)
    ordered = sorted(tiers, key=lambda t: t.min_score)

    chosen = None
    for tier in ordered:
        if score >= tier.min_score:
            chosen = tier
    if chosen is None:
        lowest = ordered[0]
        return TierResult(lowest.min_bonus, lowest.label, lowest.color)

    score_range = chosen.max_score - chosen.min_score
    position = min(1.0, (score - chosen.min_score) / score_range) if score_range > 0 else 0.0
    bonus = round_half_up(chosen.min_bonus + position * (chosen.max_bonus - chosen.min_bonus))
    return TierResult(int(bonus), chosen.label, chosen.color)
