import pytest

from src.pams.pams.core.settings import DEFAULT_BONUS_TIERS, BonusTier
from src.pams.pams.performance.tiers import map_tier

LABELS = {t.label for t in DEFAULT_BONUS_TIERS}


@pytest.mark.parametrize(
    "score, tier, bonus",
    [
        (0, "Minimum", 25),
        (30, "Minimum", 25),
        (31, "Below Average", 26),
        (50, "Below Average", 75),
        (51, "Average", 76),
        (90, "Excellent", 161),
        (98, "Exceptional", 201),
        (100, "Exceptional", 225),
    ],
)
def test_tier_boundaries(score, tier, bonus):
    result = map_tier(score)

    assert result.tier == tier
    assert result.bonus_percentage == bonus


def test_every_integer_score_maps_to_a_tier():
    for score in range(0, 101):
        assert map_tier(score).tier in LABELS


def test_scores_are_clamped():
    assert map_tier(-12).bonus_percentage == 25
    assert map_tier(140).bonus_percentage == 225


def test_fraction_between_ranges_stays_in_lower_tier():
    result = map_tier(30.5)

    assert result.tier == "Minimum"
    assert result.bonus_percentage == 25


def test_color_comes_from_tier():
    assert map_tier(90).tier_color == "#06b6d4"


def test_single_point_tier_uses_min_bonus():
    tiers = (
        BonusTier(0, 49, 0, 50, "Low", "#000"),
        BonusTier(50, 50, 100, 120, "Exact", "#111"),
        BonusTier(51, 100, 121, 200, "High", "#222"),
    )

    assert map_tier(50, tiers).bonus_percentage == 100
