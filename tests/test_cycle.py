"""
Tests for cycle day, phase and prediction calculations.
"""
import pytest
from datetime import date, timedelta

from src.models.phase import CyclePhase
from src.models.user import UserProfile
from src.services.cycle import (
    cycle_day,
    cycle_phase,
    predict_next_period,
    days_until_next_period,
    calculate_streak,
    get_cycle_status
)

def test_cycle_day_counts_start_as_day_one():
    """Test the period start is day 1 and days count up from there."""
    start = date(2024, 1, 1)
    assert cycle_day(start, date(2024, 1, 1)) == 1
    assert cycle_day(start, date(2024, 1, 15)) == 15
    assert cycle_day(start, date(2024, 2, 10)) == 41  # no upper bound

def test_cycle_day_future_start_is_not_positive():
    """Test a start date in the future is left unguarded."""
    assert cycle_day(date(2024, 1, 10), date(2024, 1, 8)) == -1

@pytest.mark.parametrize("day,expected", [
    (1, CyclePhase.MENSTRUAL),
    (5, CyclePhase.MENSTRUAL),
    (6, CyclePhase.FOLLICULAR),
    (13, CyclePhase.FOLLICULAR),
    (14, CyclePhase.OVULATION),
    (15, CyclePhase.OVULATION),
    (16, CyclePhase.LUTEAL),
    (28, CyclePhase.LUTEAL),
    (29, CyclePhase.EXPECTED_PERIOD),
])
def test_cycle_phase_boundaries(day, expected):
    """Test fixed phase ranges for a 28 day cycle."""
    assert cycle_phase(day, 28) == expected

def test_cycle_phase_uses_cycle_length_for_luteal_end():
    """Test the luteal phase stretches to the user's cycle length."""
    assert cycle_phase(33, 35) == CyclePhase.LUTEAL
    assert cycle_phase(36, 35) == CyclePhase.EXPECTED_PERIOD
    assert cycle_phase(23, 21) == CyclePhase.EXPECTED_PERIOD

def test_cycle_phase_short_cycle_keeps_early_phases():
    """Test early phases win over a cycle length shorter than 15 days."""
    assert cycle_phase(14, 10) == CyclePhase.OVULATION

def test_predict_next_period():
    assert predict_next_period(date(2024, 1, 1), 28) == date(2024, 1, 29)
    assert predict_next_period(date(2024, 1, 1), 35) == date(2024, 2, 5)

def test_days_until_next_period_counts_down():
    """Test remaining days equal the cycle length on the start day and drop by one daily."""
    start = date(2024, 1, 1)
    assert days_until_next_period(start, 28, start) == 28

    previous = None
    for offset in range(40):
        remaining = days_until_next_period(start, 28, start + timedelta(days=offset))
        if previous is not None:
            assert remaining == previous - 1
        previous = remaining

def test_days_until_next_period_negative_when_overdue():
    assert days_until_next_period(date(2024, 1, 1), 28, date(2024, 2, 1)) == -3

def test_calculate_streak_consecutive_days():
    """Test streak counts back from today until the first gap."""
    today = date(2024, 3, 10)
    dates = [date(2024, 3, 10), date(2024, 3, 9), date(2024, 3, 8), date(2024, 3, 6)]
    assert calculate_streak(dates, today) == 3

def test_calculate_streak_ignores_order_and_duplicates():
    today = date(2024, 3, 10)
    dates = [date(2024, 3, 9), date(2024, 3, 10), date(2024, 3, 10), date(2024, 3, 8)]
    assert calculate_streak(dates, today) == 3

def test_calculate_streak_without_todays_log_is_zero():
    """Test a streak must include today."""
    today = date(2024, 3, 10)
    assert calculate_streak([date(2024, 3, 9), date(2024, 3, 8)], today) == 0
    assert calculate_streak([], today) == 0

def test_get_cycle_status(sample_profile):
    """Test the dashboard snapshot combines all cycle calculations."""
    today = date(2024, 3, 14)
    status = get_cycle_status(sample_profile, [date(2024, 3, 14), date(2024, 3, 13)], today)

    assert status.cycle_day == 14
    assert status.phase == CyclePhase.OVULATION
    assert status.next_period_date == date(2024, 3, 29)
    assert status.days_until_next_period == 15
    assert status.cycle_length == 28
    assert status.progress_percent == 46.4
    assert status.streak == 2
    assert not status.is_overdue

def test_get_cycle_status_caps_progress_when_overdue(sample_profile):
    status = get_cycle_status(sample_profile, [], date(2024, 4, 5))

    assert status.phase == CyclePhase.EXPECTED_PERIOD
    assert status.days_until_next_period == -7
    assert status.progress_percent == 100.0
    assert status.is_overdue

def test_get_cycle_status_without_period_start():
    """Test cycle fields are empty when no period start is known."""
    profile = UserProfile(uid="user-1", average_cycle_length=30)
    status = get_cycle_status(profile, [date(2024, 3, 14)], date(2024, 3, 14))

    assert status.cycle_day is None
    assert status.phase is None
    assert status.next_period_date is None
    assert status.cycle_length == 30
    assert status.streak == 1

def test_cycle_status_response_uses_camel_case(sample_profile):
    body = get_cycle_status(sample_profile, [], date(2024, 3, 1)).to_response()

    assert body["cycleDay"] == 1
    assert body["phase"] == "Menstrual"
    assert body["nextPeriodDate"] == "2024-03-29"
    assert body["daysUntilNextPeriod"] == 28
