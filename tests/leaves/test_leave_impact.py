from datetime import date

import pytest

from src.pams.pams.core.exceptions import ValidationError
from src.pams.pams.core.settings import EngineSettings
from src.pams.pams.leaves.impact import assess_leave

TODAY = date(2026, 2, 10)  # Tuesday


def test_exactly_seven_days_ahead_is_advance_and_free():
    impact = assess_leave(date(2026, 2, 17), date(2026, 2, 17), today=TODAY)

    assert impact.days_in_advance == 7
    assert impact.is_advance
    assert not impact.is_emergency
    assert impact.scoring_impact == 0


def test_six_days_ahead_three_working_days_costs_two():
    impact = assess_leave(date(2026, 2, 16), date(2026, 2, 18), today=TODAY)

    assert impact.duration_days == 3
    assert impact.is_emergency
    assert impact.scoring_impact == -2.0


def test_six_days_ahead_single_day_costs_one():
    impact = assess_leave(date(2026, 2, 16), date(2026, 2, 16), today=TODAY)

    assert impact.is_emergency
    assert impact.scoring_impact == -1.0


def test_two_day_emergency_is_still_short():
    impact = assess_leave(date(2026, 2, 11), date(2026, 2, 12), today=TODAY)

    assert impact.duration_days == 2
    assert impact.scoring_impact == -1.0


def test_weekends_are_not_counted():
    # Fri..Mon
    impact = assess_leave(date(2026, 2, 20), date(2026, 2, 23), today=TODAY)

    assert impact.duration_days == 2


def test_weekend_only_range_is_rejected():
    with pytest.raises(ValidationError, match="working day"):
        assess_leave(date(2026, 2, 14), date(2026, 2, 15), today=TODAY)


def test_end_before_start_is_rejected():
    with pytest.raises(ValidationError, match="End date"):
        assess_leave(date(2026, 2, 18), date(2026, 2, 16), today=TODAY)


def test_notice_period_is_configurable():
    settings = EngineSettings(advance_notice_days=3)

    impact = assess_leave(date(2026, 2, 13), date(2026, 2, 13), today=TODAY, settings=settings)

    assert impact.is_advance
