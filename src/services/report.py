"""
Health report generation service.

A report is requested from the language model with the symptom logs and the
calculated statistics as context. Whenever the model is unavailable or its
answer cannot be parsed, a deterministic report built from the same
statistics is returned instead, so callers always get a complete report.

Typical usage:
    report = generate_health_report(logs, profile, get_llm_client())
"""
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError
from aws_lambda_powertools import Logger
from src.models.base import utc_now
from src.models.symptom_log import SymptomLog
from src.models.user import ReportProfile, DEFAULT_CYCLE_LENGTH
from src.models.risk import RiskType
from src.models.report import (
    LogStatistics,
    HealthReportData,
    CycleInsights,
    SymptomAnalysis,
    SymptomFrequency,
    RiskAssessment,
    PatientInfo
)
from src.services.exceptions import LLMError
from src.services.statistics import calculate_log_statistics
from src.services.risk import triggered_risk_types
from src.services.constants import (
    REPORT_PROMPT,
    REPORT_CONTEXT_LOG_LIMIT,
    REPORT_RISK_ASSESSMENTS,
    REPORT_LIFESTYLE_TIPS,
    REPORT_FALLBACK_RECOMMENDATIONS,
    REPORT_DOCTOR_QUESTIONS,
    RECOMMENDED_SLEEP_HOURS,
    PAIN_DISCUSSION_THRESHOLD,
    PAIN_QUESTION_THRESHOLD,
    HEAVY_FLOW_DAYS_THRESHOLD,
    URGENT_PAIN_THRESHOLD,
    URGENT_PAIN_FLAG,
    REGULARITY_MIN_LOGS,
    TOP_SYMPTOM_COUNT
)
from src.utils.llm import LLMClient, extract_json

logger = Logger()

REPORT_TEMPERATURE = 0.3
REPORT_MAX_TOKENS = 2048

def _format_log(log: SymptomLog) -> str:
    return "\n".join([
        f"Date: {log.date.isoformat()}",
        f"- Flow: {log.flow_level.value}",
        f"- Pain Level: {log.pain_level}/10",
        f"- Mood: {log.mood.value}",
        f"- Energy: {log.energy_level.value}",
        f"- Sleep: {log.sleep_hours:g} hours",
        f"- Symptoms: {', '.join(log.symptoms) or 'None'}",
    ])

def build_report_context(
    logs: List[SymptomLog],
    profile: ReportProfile,
    stats: LogStatistics
) -> str:
    """
    Build the data section of the report prompt.
    
    Args:
        logs: Symptom logs, newest first
        profile: Profile fields sent with the request
        stats: Statistics calculated from the same logs
        
    Returns:
        Plain text with a profile block, at most ten log entries and the
        calculated statistics
    """
    lines = [
        "USER PROFILE:",
        f"- Name: {profile.display_name or 'Patient'}",
        f"- Age Range: {profile.age_range or 'Not specified'}",
        f"- Known Conditions: {', '.join(profile.conditions) or 'None reported'}",
        f"- Average Cycle Length: {profile.average_cycle_length or DEFAULT_CYCLE_LENGTH} days",
        "",
        f"SYMPTOM LOGS ({len(logs)} entries):",
    ]
    for log in logs[:REPORT_CONTEXT_LOG_LIMIT]:
        lines.append(_format_log(log))
        lines.append("")
    if len(logs) > REPORT_CONTEXT_LOG_LIMIT:
        lines.append(f"... and {len(logs) - REPORT_CONTEXT_LOG_LIMIT} more entries")
        lines.append("")

    lines.extend([
        "CALCULATED STATISTICS:",
        f"- Total Logs: {stats.total_logs}",
        f"- Average Pain: {stats.avg_pain:.1f}/10",
        f"- Heavy Flow Days: {stats.heavy_flow_days}",
        f"- Average Sleep: {stats.avg_sleep:.1f} hours",
        f"- Low Energy Days: {stats.low_energy_days}",
        f"- Poor Mood Days: {stats.poor_mood_days}",
        f"- Most Common Symptoms: {', '.join(stats.top_symptoms) or 'None recorded'}",
    ])
    return "\n".join(lines)

def _risk_assessments(stats: LogStatistics, profile: ReportProfile) -> List[RiskAssessment]:
    assessments = []
    for risk_type in triggered_risk_types(stats, profile.average_cycle_length):
        assessment = RiskAssessment(**REPORT_RISK_ASSESSMENTS[risk_type])
        if risk_type == RiskType.ENDOMETRIOSIS:
            assessment.indicators.append(f"Average pain level: {stats.avg_pain:.1f}/10")
        assessments.append(assessment)
    return assessments

def _symptom_frequencies(stats: LogStatistics) -> List[SymptomFrequency]:
    ranked = sorted(stats.symptom_counts.items(), key=lambda item: item[1], reverse=True)
    return [
        SymptomFrequency(
            symptom=symptom,
            count=count,
            percentage=round(count / stats.total_logs * 100)
        )
        for symptom, count in ranked[:TOP_SYMPTOM_COUNT]
    ]

def generate_fallback_report(
    logs: List[SymptomLog],
    profile: ReportProfile,
    stats: LogStatistics,
    now: Optional[datetime] = None
) -> HealthReportData:
    """
    Build a report from the statistics alone, without the language model.
    
    Args:
        logs: Symptom logs the statistics were calculated from
        profile: Profile fields sent with the request
        stats: Calculated statistics
        now: Generation time, defaults to the current UTC time
        
    Returns:
        Complete HealthReportData including metadata
    """
    assessments = _risk_assessments(stats, profile)
    concern = (
        "Some patterns warrant discussion with a healthcare provider."
        if assessments else
        "No significant concerns identified in the recorded data."
    )

    recommendations = [
        REPORT_FALLBACK_RECOMMENDATIONS["tracking"],
        REPORT_FALLBACK_RECOMMENDATIONS[
            "sleep_low" if stats.avg_sleep < RECOMMENDED_SLEEP_HOURS else "sleep_ok"
        ],
        REPORT_FALLBACK_RECOMMENDATIONS[
            "pain_high" if stats.avg_pain > PAIN_DISCUSSION_THRESHOLD else "pain_ok"
        ],
        REPORT_FALLBACK_RECOMMENDATIONS["hydration"],
        REPORT_FALLBACK_RECOMMENDATIONS["exercise"],
    ]

    questions = [REPORT_DOCTOR_QUESTIONS["normal_range"]]
    if stats.heavy_flow_days >= HEAVY_FLOW_DAYS_THRESHOLD:
        questions.append(REPORT_DOCTOR_QUESTIONS["heavy_flow"])
    if stats.avg_pain >= PAIN_QUESTION_THRESHOLD:
        questions.append(REPORT_DOCTOR_QUESTIONS["pain"])
    questions.append(REPORT_DOCTOR_QUESTIONS["lifestyle"])

    report = HealthReportData(
        executive_summary=(
            f"Health report based on {stats.total_logs} symptom logs. "
            f"Average pain level is {stats.avg_pain:.1f}/10 with "
            f"{stats.heavy_flow_days} heavy flow days recorded. {concern}"
        ),
        cycle_insights=CycleInsights(
            overall_pattern=f"Based on {stats.total_logs} logs over the reporting period",
            average_pain_level=stats.avg_pain,
            flow_pattern_description=(
                f"{stats.flow_days} days with menstrual flow recorded, "
                f"{stats.heavy_flow_days} classified as heavy"
            ),
            cycle_regularity=(
                "insufficient_data" if stats.total_logs < REGULARITY_MIN_LOGS
                else "requires_more_analysis"
            )
        ),
        symptom_analysis=SymptomAnalysis(
            most_frequent_symptoms=_symptom_frequencies(stats),
            pain_trend="stable",
            mood_pattern=f"{stats.poor_mood_days} days with low mood out of {stats.total_logs} logged",
            sleep_quality=f"Average {stats.avg_sleep:.1f} hours per night",
            energy_pattern=f"{stats.low_energy_days} low energy days recorded",
            notable_correlations=[]
        ),
        risk_assessment=assessments,
        recommendations=recommendations,
        questions_for_doctor=questions,
        lifestyle_tips=list(REPORT_LIFESTYLE_TIPS),
        urgent_flags=[URGENT_PAIN_FLAG] if stats.avg_pain >= URGENT_PAIN_THRESHOLD else []
    )
    return finalize_report(report, logs, profile, stats, now)

def finalize_report(
    report: HealthReportData,
    logs: List[SymptomLog],
    profile: ReportProfile,
    stats: LogStatistics,
    now: Optional[datetime] = None
) -> HealthReportData:
    """
    Stamp generation metadata onto a report.
    
    The reporting period runs from the earliest to the latest log date,
    whatever order the logs arrived in.
    """
    if now is None:
        now = utc_now()
    dates = [log.date for log in logs]

    report.generated_at = now.isoformat()
    report.period_start = min(dates).isoformat() if dates else None
    report.period_end = max(dates).isoformat() if dates else None
    report.total_logs_analyzed = len(logs)
    report.patient_info = PatientInfo(
        name=profile.display_name or "Patient",
        age_range=profile.age_range,
        conditions=profile.conditions,
        average_cycle_length=profile.average_cycle_length or DEFAULT_CYCLE_LENGTH
    )
    report.statistics = stats
    return report

def generate_health_report(
    logs: List[SymptomLog],
    profile: ReportProfile,
    llm: Optional[LLMClient],
    now: Optional[datetime] = None
) -> HealthReportData:
    """
    Generate a doctor-friendly health report.
    
    Args:
        logs: Symptom logs to report on, newest first; must not be empty
        profile: Profile fields sent with the request
        llm: Language model client, or None to skip the model
        now: Generation time, defaults to the current UTC time
        
    Returns:
        The model's report when it produced a valid one, the fallback
        report otherwise
        
    Example:
        >>> report = generate_health_report(logs, ReportProfile(), llm=None)
        >>> report.cycle_insights.cycle_regularity
        'insufficient_data'
    """
    stats = calculate_log_statistics(logs)

    if llm is None or not llm.is_configured():
        logger.info("Language model not configured, returning fallback report")
        return generate_fallback_report(logs, profile, stats, now)

    try:
        text = llm.generate(
            build_report_context(logs, profile, stats),
            system_prompt=llm.report_prompt or REPORT_PROMPT,
            temperature=REPORT_TEMPERATURE,
            max_tokens=REPORT_MAX_TOKENS
        )
        report = HealthReportData.model_validate(extract_json(text))
    except (LLMError, ValidationError) as e:
        logger.warning("AI report generation failed, using fallback report", extra={
            "error": str(e),
            "error_type": e.__class__.__name__,
            "log_count": len(logs)
        })
        return generate_fallback_report(logs, profile, stats, now)

    logger.info("Generated AI health report", extra={
        "provider": llm.name,
        "log_count": len(logs),
        "risk_count": len(report.risk_assessment)
    })
    return finalize_report(report, logs, profile, stats, now)
