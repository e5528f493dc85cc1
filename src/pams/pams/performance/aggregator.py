from __future__ import annotations

from typing import Iterable

from ..common.numbers import round2
from .model import ParameterScore


def weighted_score(normalized_score: float, weight: float) -> float:
    return round2(normalized_score * weight / 100)


def aggregate(scores: Iterable[ParameterScore]) -> float:
    """Weight-renormalized average of the normalized scores.

    Weights need not sum to 100; with no weight at all the total is 0.
    """
    total_weight = 0.0
    total = 0.0
    for s in scores:
        total_weight += s.weight
        total += s.normalized_score * s.weight
    if total_weight <= 0:
        return 0.0
    return round2(total / total_weight)
