"""
Cycle phase model definitions.
"""
from enum import Enum
from datetime import date
from typing import Optional

from src.models.base import CamelModel


class CyclePhase(str, Enum):
    """
    Phase labels shown on the dashboard.

    EXPECTED_PERIOD covers every day past the average cycle length.
    """
    MENSTRUAL = "Menstrual"
    FOLLICULAR = "Follicular"
    OVULATION = "Ovulation"
    LUTEAL = "Luteal"
    EXPECTED_PERIOD = "Expected Period"


class CycleStatus(CamelModel):
    """
    Dashboard snapshot of the user's current cycle.

    Cycle fields are None when no last period start is known.
    """
    cycle_length: int
    cycle_day: Optional[int] = None
    phase: Optional[CyclePhase] = None
    next_period_date: Optional[date] = None
    days_until_next_period: Optional[int] = None
    progress_percent: Optional[float] = None
    streak: int = 0

    @property
    def is_overdue(self) -> bool:
        """Check if the predicted period start has passed."""
        return self.days_until_next_period is not None and self.days_until_next_period < 0
