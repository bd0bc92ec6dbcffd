"""
Health report model definitions.

The report is produced either by the LLM (validated here) or by the
deterministic fallback. Fields are plain strings rather than closed
enumerations because LLM output is only loosely constrained by the prompt.
"""
from typing import Any, Dict, List, Optional
from pydantic import ConfigDict, Field

from src.models.base import CamelModel


class LogStatistics(CamelModel):
    """
    Aggregate statistics over a window of symptom logs.

    Means are kept unrounded; display code rounds to one decimal.
    """
    total_logs: int
    avg_pain: float
    avg_sleep: float
    heavy_flow_days: int
    low_energy_days: int
    poor_mood_days: int
    high_pain_days: int
    flow_days: int
    top_symptoms: List[str]
    symptom_counts: Dict[str, int]
    mood_counts: Dict[str, int]
    flow_counts: Dict[str, int]
    energy_counts: Dict[str, int]


class SymptomFrequency(CamelModel):
    symptom: str
    count: int
    percentage: float


class CycleInsights(CamelModel):
    overall_pattern: str = ""
    average_pain_level: float = 0.0
    flow_pattern_description: str = ""
    cycle_regularity: str = "insufficient_data"


class SymptomAnalysis(CamelModel):
    most_frequent_symptoms: List[SymptomFrequency] = Field(default_factory=list)
    pain_trend: str = "stable"
    mood_pattern: str = ""
    sleep_quality: str = ""
    energy_pattern: str = ""
    notable_correlations: List[str] = Field(default_factory=list)


class RiskAssessment(CamelModel):
    condition: str
    risk_level: str
    confidence: str
    indicators: List[str] = Field(default_factory=list)
    recommendation: Optional[str] = None


class PatientInfo(CamelModel):
    name: str
    age_range: Optional[str] = None
    conditions: List[str] = Field(default_factory=list)
    average_cycle_length: int


class HealthReportData(CamelModel):
    """
    Doctor-friendly health report.

    Unknown keys returned by the LLM are preserved.
    """
    model_config = ConfigDict(extra="allow")

    executive_summary: str
    cycle_insights: CycleInsights = Field(default_factory=CycleInsights)
    symptom_analysis: SymptomAnalysis = Field(default_factory=SymptomAnalysis)
    risk_assessment: List[RiskAssessment] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    questions_for_doctor: List[str] = Field(default_factory=list)
    lifestyle_tips: List[str] = Field(default_factory=list)
    urgent_flags: List[str] = Field(default_factory=list)
    generated_at: Optional[str] = None
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    total_logs_analyzed: int = 0
    patient_info: Optional[PatientInfo] = None
    statistics: Optional[LogStatistics] = None


class SavedReport(CamelModel):
    """Stored summary of a generated report, as listed in report history."""
    report_id: str
    generated_at: str
    period_start: Optional[str] = None
    period_end: Optional[str] = None
    executive_summary: str
    total_logs_analyzed: int = 0
    risk_assessment: List[Dict[str, Any]] = Field(default_factory=list)
