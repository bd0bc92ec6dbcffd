"""
User profile model definitions.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import Field, field_validator, model_validator

from src.models.base import CamelModel, date_only

DEFAULT_CYCLE_LENGTH = 28


class AgeRange(str, Enum):
    """Age brackets offered during onboarding."""
    AGE_18_24 = "18-24"
    AGE_25_34 = "25-34"
    AGE_35_44 = "35-44"
    AGE_45_PLUS = "45+"


class Language(str, Enum):
    """Supported interface languages."""
    ENGLISH = "en"
    SPANISH = "es"
    HINDI = "hi"
    PORTUGUESE = "pt"
    FRENCH = "fr"


class UserProfile(CamelModel):
    """
    Represents a user's identity and tracking preferences.
    """
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    age_range: Optional[AgeRange] = None
    conditions: List[str] = Field(default_factory=list)
    language: Language = Language.ENGLISH
    onboarding_complete: bool = False
    average_cycle_length: int = Field(DEFAULT_CYCLE_LENGTH, gt=0, le=90)
    last_period_start: Optional[date] = None
    created_at: Optional[datetime] = None

    @field_validator("last_period_start", mode="before")
    @classmethod
    def normalize_last_period(cls, value):
        return date_only(value)


class ProfileUpdate(CamelModel):
    """
    Settings form payload. Only fields that were sent are applied.

    Fields stored with a default on the profile cannot be cleared with null.
    """
    display_name: Optional[str] = None
    language: Optional[Language] = None
    average_cycle_length: Optional[int] = Field(None, gt=0, le=90)
    last_period_start: Optional[date] = None
    age_range: Optional[AgeRange] = None
    conditions: Optional[List[str]] = None

    @field_validator("last_period_start", mode="before")
    @classmethod
    def normalize_last_period(cls, value):
        return date_only(value)

    @field_validator("language", "average_cycle_length", "conditions", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Value cannot be null")
        return value


class OnboardingData(CamelModel):
    """
    Onboarding wizard payload.

    Both the terms and the medical disclaimer must be accepted.
    """
    age_range: AgeRange
    conditions: List[str] = Field(default_factory=list)
    language: Language = Language.ENGLISH
    accepted_terms: bool
    accepted_medical_disclaimer: bool

    @model_validator(mode="after")
    def check_acceptance(self) -> "OnboardingData":
        if not (self.accepted_terms and self.accepted_medical_disclaimer):
            raise ValueError("Terms and medical disclaimer must be accepted")
        return self


class ReportProfile(CamelModel):
    """
    Subset of the profile sent along with a health report request.
    """
    display_name: Optional[str] = None
    age_range: Optional[str] = None
    conditions: List[str] = Field(default_factory=list)
    average_cycle_length: Optional[int] = None
    last_period_start: Optional[str] = None

    @field_validator("conditions", mode="before")
    @classmethod
    def default_conditions(cls, value):
        return value or []
