"""
Heuristic risk flag evaluation over symptom log statistics.

The rules are fixed thresholds over aggregate counts, kept stable for
compatibility with existing clients. They are advisory notices, not a
validated clinical model.

Typical usage:
    stats = calculate_log_statistics(logs)
    flags = evaluate_risk_flags(stats, profile.average_cycle_length)
    result = analyze_logs(logs, profile.average_cycle_length)
"""
from typing import List, Optional

from aws_lambda_powertools import Logger
from src.models.symptom_log import SymptomLog
from src.models.risk import RiskFlag, RiskType, Severity, AnalysisResult
from src.models.report import LogStatistics
from src.models.user import DEFAULT_CYCLE_LENGTH
from src.services.statistics import calculate_log_statistics
from src.services.constants import (
    HEAVY_FLOW_DAYS_THRESHOLD,
    LOW_ENERGY_DAYS_THRESHOLD,
    LONG_CYCLE_THRESHOLD,
    HIGH_PAIN_DAYS_THRESHOLD,
    AVERAGE_PAIN_THRESHOLD,
    POOR_MOOD_RATIO,
    RISK_FLAG_DETAILS,
    RISK_FLAG_ADVICE,
    ANALYSIS_NOT_ENOUGH_DATA,
    ANALYSIS_SUMMARIES,
    ANALYSIS_CLEAR_RECOMMENDATION,
    ANALYSIS_GENERAL_RECOMMENDATIONS
)

logger = Logger()

def has_anemia_indicators(stats: LogStatistics) -> bool:
    """Heavy flow combined with persistent low energy."""
    return (
        stats.heavy_flow_days >= HEAVY_FLOW_DAYS_THRESHOLD
        and stats.low_energy_days >= LOW_ENERGY_DAYS_THRESHOLD
    )

def has_long_cycles(average_cycle_length: Optional[int]) -> bool:
    """Average cycle longer than 35 days."""
    return average_cycle_length is not None and average_cycle_length > LONG_CYCLE_THRESHOLD

def has_severe_pain_pattern(stats: LogStatistics) -> bool:
    """Repeated high-pain days or a high average pain level."""
    return (
        stats.high_pain_days >= HIGH_PAIN_DAYS_THRESHOLD
        or stats.avg_pain >= AVERAGE_PAIN_THRESHOLD
    )

def has_frequent_low_mood(stats: LogStatistics) -> bool:
    """Bad or terrible mood on at least half of the logged days."""
    return stats.total_logs > 0 and stats.poor_mood_days >= stats.total_logs * POOR_MOOD_RATIO

def triggered_risk_types(
    stats: LogStatistics,
    average_cycle_length: Optional[int] = DEFAULT_CYCLE_LENGTH
) -> List[RiskType]:
    """
    List the risk categories whose rules match, in evaluation order.
    
    Args:
        stats: Aggregate statistics for the log window
        average_cycle_length: User's average cycle length in days
        
    Returns:
        Matching risk types
    """
    triggered = []
    if has_anemia_indicators(stats):
        triggered.append(RiskType.ANEMIA)
    if has_long_cycles(average_cycle_length):
        triggered.append(RiskType.PCOS)
    if has_severe_pain_pattern(stats):
        triggered.append(RiskType.ENDOMETRIOSIS)
    if has_frequent_low_mood(stats):
        triggered.append(RiskType.GENERAL)
    return triggered

def evaluate_risk_flags(
    stats: LogStatistics,
    average_cycle_length: Optional[int] = DEFAULT_CYCLE_LENGTH
) -> List[RiskFlag]:
    """
    Evaluate the heuristic risk rules against log statistics.
    
    Args:
        stats: Aggregate statistics for the log window
        average_cycle_length: User's average cycle length in days
        
    Returns:
        RiskFlag for every rule that matched
        
    Example:
        >>> flags = evaluate_risk_flags(stats, average_cycle_length=40)
        >>> [flag.type.value for flag in flags]
        ['pcos']
    """
    return [
        RiskFlag(type=risk_type, **RISK_FLAG_DETAILS[risk_type])
        for risk_type in triggered_risk_types(stats, average_cycle_length)
    ]

def overall_risk(flags: List[RiskFlag]) -> Severity:
    """Highest severity among the flags, low when there are none."""
    if any(flag.severity == Severity.HIGH for flag in flags):
        return Severity.HIGH
    if any(flag.severity == Severity.MEDIUM for flag in flags):
        return Severity.MEDIUM
    return Severity.LOW

def analyze_logs(
    logs: List[SymptomLog],
    average_cycle_length: Optional[int] = DEFAULT_CYCLE_LENGTH
) -> AnalysisResult:
    """
    Analyze symptom logs for concerning patterns.
    
    Args:
        logs: Recent symptom logs
        average_cycle_length: User's average cycle length in days
        
    Returns:
        AnalysisResult with overall risk, flags, a summary sentence and
        lifestyle recommendations
    """
    if not logs:
        return AnalysisResult(
            overall_risk=Severity.LOW,
            risk_flags=[],
            **ANALYSIS_NOT_ENOUGH_DATA
        )

    stats = calculate_log_statistics(logs)
    flags = evaluate_risk_flags(stats, average_cycle_length)
    risk = overall_risk(flags)

    recommendations = [
        RISK_FLAG_ADVICE[flag.type] for flag in flags if flag.type in RISK_FLAG_ADVICE
    ]

    if not flags:
        summary = ANALYSIS_SUMMARIES["clear"]
        recommendations.append(ANALYSIS_CLEAR_RECOMMENDATION)
    elif risk == Severity.HIGH:
        summary = ANALYSIS_SUMMARIES[Severity.HIGH]
    else:
        summary = ANALYSIS_SUMMARIES["monitor"]

    if not recommendations:
        recommendations.extend(ANALYSIS_GENERAL_RECOMMENDATIONS)

    logger.info("Analyzed symptom logs", extra={
        "log_count": len(logs),
        "risk_flags": [flag.type.value for flag in flags],
        "overall_risk": risk.value
    })

    return AnalysisResult(
        overall_risk=risk,
        risk_flags=flags,
        summary=summary,
        recommendations=recommendations
    )
