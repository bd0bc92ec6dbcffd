"""
Statistics calculation service for symptom log data.

This module reduces a window of daily symptom logs into the aggregate
counts and averages used by log analysis and health reports.
"""
from collections import Counter
from typing import List
from statistics import mean
from aws_lambda_powertools import Logger
from src.models.symptom_log import SymptomLog, FlowLevel, EnergyLevel, POOR_MOODS
from src.models.report import LogStatistics
from src.services.constants import HIGH_PAIN_LEVEL, TOP_SYMPTOM_COUNT

logger = Logger()

def count_symptoms(logs: List[SymptomLog]) -> Counter:
    """
    Count how often each symptom tag appears across logs.
    
    Args:
        logs: Symptom logs to analyze
        
    Returns:
        Counter of symptom tag to number of logs mentioning it, in
        first-seen order
    """
    counts = Counter()
    for log in logs:
        counts.update(log.symptoms)
    return counts

def top_symptoms(symptom_counts: Counter, limit: int = TOP_SYMPTOM_COUNT) -> List[str]:
    """Most frequent symptom tags; ties keep first-seen order."""
    return [symptom for symptom, _ in symptom_counts.most_common(limit)]

def calculate_log_statistics(logs: List[SymptomLog]) -> LogStatistics:
    """
    Calculate aggregate statistics for a set of symptom logs.
    
    Args:
        logs: Symptom logs in any order
        
    Returns:
        LogStatistics with unrounded means (0 for an empty window) and
        per-category day counts
    """
    symptom_counts = count_symptoms(logs)

    stats = LogStatistics(
        total_logs=len(logs),
        avg_pain=mean(log.pain_level for log in logs) if logs else 0.0,
        avg_sleep=mean(log.sleep_hours for log in logs) if logs else 0.0,
        heavy_flow_days=sum(1 for log in logs if log.flow_level == FlowLevel.HEAVY),
        low_energy_days=sum(1 for log in logs if log.energy_level == EnergyLevel.LOW),
        poor_mood_days=sum(1 for log in logs if log.mood in POOR_MOODS),
        high_pain_days=sum(1 for log in logs if log.pain_level >= HIGH_PAIN_LEVEL),
        flow_days=sum(1 for log in logs if log.flow_level != FlowLevel.NONE),
        top_symptoms=top_symptoms(symptom_counts),
        symptom_counts=dict(symptom_counts),
        mood_counts=dict(Counter(log.mood.value for log in logs)),
        flow_counts=dict(Counter(log.flow_level.value for log in logs)),
        energy_counts=dict(Counter(log.energy_level.value for log in logs))
    )

    logger.info("Calculated log statistics", extra={
        "total_logs": stats.total_logs,
        "heavy_flow_days": stats.heavy_flow_days,
        "low_energy_days": stats.low_energy_days,
        "poor_mood_days": stats.poor_mood_days,
        "high_pain_days": stats.high_pain_days
    })
    return stats
