"""
Risk flag and analysis result models.
"""
from enum import Enum
from typing import List, Optional

from src.models.base import CamelModel


class RiskType(str, Enum):
    """Category of a heuristic risk flag."""
    ANEMIA = "anemia"
    PCOS = "pcos"
    ENDOMETRIOSIS = "endometriosis"
    URGENT = "urgent"
    GENERAL = "general"


class Severity(str, Enum):
    """Severity of a risk flag, also used for the overall risk level."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskFlag(CamelModel):
    """
    Advisory notice derived from aggregate symptom statistics.

    Flags are computed on demand and never stored on their own.
    """
    type: RiskType
    severity: Severity
    description: str
    recommendation: Optional[str] = None


class AnalysisResult(CamelModel):
    """Response body of the log analysis endpoint."""
    overall_risk: Severity
    risk_flags: List[RiskFlag]
    summary: str
    recommendations: List[str]
