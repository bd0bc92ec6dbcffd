"""
Service module for menstrual cycle calculations and predictions.

This module maps a last period start date and an average cycle length to the
current cycle day, phase and next-period prediction shown on the dashboard,
and computes the daily logging streak.

Typical usage:
    day = cycle_day(profile.last_period_start)
    phase = cycle_phase(day, profile.average_cycle_length)
    remaining = days_until_next_period(profile.last_period_start, profile.average_cycle_length)
"""
from typing import Iterable, Optional
from datetime import date, timedelta

from src.models.phase import CyclePhase, CycleStatus
from src.models.user import UserProfile, DEFAULT_CYCLE_LENGTH
from src.services.constants import PHASE_BOUNDARIES

def cycle_day(last_period_start: date, today: Optional[date] = None) -> int:
    """
    Calculate the day of the cycle, with the period start as day 1.
    
    Args:
        last_period_start: First day of the most recent period
        today: Date to calculate for, defaults to current date
        
    Returns:
        Whole days since the period start plus one. There is no upper bound,
        and a start date in the future yields zero or a negative number.
        
    Example:
        >>> cycle_day(date(2024, 1, 1), date(2024, 1, 1))
        1
        >>> cycle_day(date(2024, 1, 1), date(2024, 1, 15))
        15
    """
    if today is None:
        today = date.today()
    return (today - last_period_start).days + 1

def cycle_phase(day: int, cycle_length: int = DEFAULT_CYCLE_LENGTH) -> CyclePhase:
    """
    Classify a cycle day into a phase using fixed day ranges.
    
    Days 1-5 are menstrual, 6-13 follicular, 14-15 ovulation, and luteal up
    to the cycle length. Anything later is an expected (late) period.
    
    Args:
        day: Cycle day (1-based)
        cycle_length: Average cycle length in days
        
    Returns:
        CyclePhase for the given day
    """
    for last_day, phase in PHASE_BOUNDARIES:
        if day <= last_day:
            return phase
    if day <= cycle_length:
        return CyclePhase.LUTEAL
    return CyclePhase.EXPECTED_PERIOD

def predict_next_period(last_period_start: date, cycle_length: int = DEFAULT_CYCLE_LENGTH) -> date:
    """Predict the start of the next period."""
    return last_period_start + timedelta(days=cycle_length)

def days_until_next_period(
    last_period_start: date,
    cycle_length: int = DEFAULT_CYCLE_LENGTH,
    today: Optional[date] = None
) -> int:
    """
    Calculate days remaining until the predicted next period.
    
    Args:
        last_period_start: First day of the most recent period
        cycle_length: Average cycle length in days
        today: Date to calculate from, defaults to current date
        
    Returns:
        Days until the predicted start; 0 means today and a negative value
        means the period is that many days late.
    """
    if today is None:
        today = date.today()
    return (predict_next_period(last_period_start, cycle_length) - today).days

def calculate_streak(log_dates: Iterable[date], today: Optional[date] = None) -> int:
    """
    Count consecutive logged days ending today.
    
    Walks the distinct log dates from most recent backward, expecting
    today, yesterday, and so on, and stops at the first date that does not
    match. A user who has not logged today has a streak of 0.
    
    Args:
        log_dates: Dates of the user's logs, in any order
        today: Reference date, defaults to current date
        
    Returns:
        Length of the current logging streak in days
        
    Example:
        >>> today = date(2024, 3, 10)
        >>> calculate_streak([date(2024, 3, 10), date(2024, 3, 9), date(2024, 3, 7)], today)
        2
    """
    if today is None:
        today = date.today()

    streak = 0
    for offset, logged in enumerate(sorted(set(log_dates), reverse=True)):
        if logged != today - timedelta(days=offset):
            break
        streak += 1
    return streak

def get_cycle_status(
    profile: UserProfile,
    log_dates: Iterable[date] = (),
    today: Optional[date] = None
) -> CycleStatus:
    """
    Build the dashboard cycle snapshot for a user.
    
    Args:
        profile: User profile with cycle preferences
        log_dates: Dates of the user's recent logs, for the streak
        today: Reference date, defaults to current date
        
    Returns:
        CycleStatus; cycle fields are None when no period start is known
    """
    if today is None:
        today = date.today()

    cycle_length = profile.average_cycle_length or DEFAULT_CYCLE_LENGTH
    streak = calculate_streak(log_dates, today)

    if profile.last_period_start is None:
        return CycleStatus(cycle_length=cycle_length, streak=streak)

    day = cycle_day(profile.last_period_start, today)
    remaining = days_until_next_period(profile.last_period_start, cycle_length, today)

    return CycleStatus(
        cycle_length=cycle_length,
        cycle_day=day,
        phase=cycle_phase(day, cycle_length),
        next_period_date=predict_next_period(profile.last_period_start, cycle_length),
        days_until_next_period=remaining,
        progress_percent=min(100.0, round((cycle_length - remaining) / cycle_length * 100, 1)),
        streak=streak
    )
