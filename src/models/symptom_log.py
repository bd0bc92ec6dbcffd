"""
Symptom log model definition for daily tracking entries.
"""
import datetime as dt
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import Field, field_validator

from src.models.base import CamelModel, date_only


class FlowLevel(str, Enum):
    """Menstrual flow intensity."""
    NONE = "none"
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class Mood(str, Enum):
    """Self-reported mood, best to worst."""
    GREAT = "great"
    GOOD = "good"
    NEUTRAL = "neutral"
    BAD = "bad"
    TERRIBLE = "terrible"


class EnergyLevel(str, Enum):
    """Self-reported energy level."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


POOR_MOODS = (Mood.BAD, Mood.TERRIBLE)


class SymptomLog(CamelModel):
    """
    Represents one day of symptom tracking for a user.

    The web client posts ISO datetimes (``2024-03-01T05:00:00.000Z``) for
    the log date; only the calendar date is kept.
    """
    id: Optional[str] = None
    user_id: Optional[str] = None
    date: date
    flow_level: FlowLevel
    pain_level: int = Field(..., ge=0, le=10)
    mood: Mood
    energy_level: EnergyLevel
    sleep_hours: float = Field(..., ge=0, le=24)
    notes: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def truncate_datetime(cls, value):
        """Accept full ISO datetimes and keep only the date part."""
        return date_only(value)

    @field_validator("symptoms", mode="before")
    @classmethod
    def default_symptoms(cls, value):
        return value or []

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class SymptomLogUpdate(CamelModel):
    """
    Edit form payload for an existing log. Only fields that were sent are
    applied; the merged log is validated as a whole.
    """
    date: Optional[dt.date] = None
    flow_level: Optional[FlowLevel] = None
    pain_level: Optional[int] = None
    mood: Optional[Mood] = None
    energy_level: Optional[EnergyLevel] = None
    sleep_hours: Optional[float] = None
    notes: Optional[str] = None
    symptoms: Optional[List[str]] = None

    @field_validator("date", mode="before")
    @classmethod
    def truncate_datetime(cls, value):
        return date_only(value)
