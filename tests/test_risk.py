"""
Tests for heuristic risk flags and log analysis.
"""
from datetime import date, timedelta

from src.models.risk import RiskFlag, RiskType, Severity
from src.services.risk import analyze_logs, evaluate_risk_flags, overall_risk
from src.services.statistics import calculate_log_statistics
from tests.factories import make_log

def _days(count, **kwargs):
    return [make_log(date(2024, 3, 1) + timedelta(days=i), **kwargs) for i in range(count)]

def _flag_types(logs, average_cycle_length=28):
    stats = calculate_log_statistics(logs)
    return [flag.type for flag in evaluate_risk_flags(stats, average_cycle_length)]

def test_anemia_flag_at_threshold():
    """Test exactly three heavy and three low energy days trigger the anemia flag."""
    logs = _days(3, flow_level="heavy", energy_level="low") + _days(4)
    assert RiskType.ANEMIA in _flag_types(logs)

def test_anemia_flag_below_threshold():
    """Test two heavy days with three low energy days do not trigger it."""
    logs = (
        _days(2, flow_level="heavy", energy_level="low")
        + _days(1, energy_level="low")
        + _days(4)
    )
    assert RiskType.ANEMIA not in _flag_types(logs)

def test_anemia_flag_is_medium(heavy_fatigue_logs):
    flags = evaluate_risk_flags(calculate_log_statistics(heavy_fatigue_logs), 28)

    assert len(flags) == 1
    assert flags[0].type == RiskType.ANEMIA
    assert flags[0].severity == Severity.MEDIUM

def test_long_cycle_flag():
    """Test an average cycle longer than 35 days flags a possible hormonal imbalance."""
    flags = evaluate_risk_flags(calculate_log_statistics(_days(5)), 40)

    assert [flag.type for flag in flags] == [RiskType.PCOS]
    assert "hormonal imbalance" in flags[0].description
    assert RiskType.PCOS not in _flag_types(_days(5), 35)

def test_severe_pain_flag():
    assert RiskType.ENDOMETRIOSIS in _flag_types(_days(3, pain_level=7) + _days(4, pain_level=1))
    assert RiskType.ENDOMETRIOSIS in _flag_types(_days(2, pain_level=7))  # average >= 7
    assert RiskType.ENDOMETRIOSIS not in _flag_types(_days(2, pain_level=8) + _days(3, pain_level=1))

def test_low_mood_flag_is_low_severity():
    logs = _days(2, mood="bad") + _days(2, mood="good")
    flags = evaluate_risk_flags(calculate_log_statistics(logs), 28)

    assert [flag.type for flag in flags] == [RiskType.GENERAL]
    assert flags[0].severity == Severity.LOW

def test_no_flags_for_calm_logs(week_of_logs):
    assert _flag_types(week_of_logs) == []

def test_overall_risk_takes_highest_severity():
    def flag(severity):
        return RiskFlag(type=RiskType.GENERAL, severity=severity, description="test")

    assert overall_risk([]) == Severity.LOW
    assert overall_risk([flag(Severity.LOW)]) == Severity.LOW
    assert overall_risk([flag(Severity.LOW), flag(Severity.MEDIUM)]) == Severity.MEDIUM
    assert overall_risk([flag(Severity.MEDIUM), flag(Severity.HIGH)]) == Severity.HIGH

def test_analyze_logs_empty():
    """Test empty logs give the not-enough-data result."""
    result = analyze_logs([])

    assert result.overall_risk == Severity.LOW
    assert result.risk_flags == []
    assert result.summary.startswith("Not enough data")
    assert result.recommendations == ["Continue logging your symptoms daily for better insights."]

def test_analyze_logs_clear(week_of_logs):
    result = analyze_logs(week_of_logs)

    assert result.overall_risk == Severity.LOW
    assert result.summary == "Your recent logs look good! No concerning patterns detected."
    assert result.recommendations == ["Keep up your consistent logging habits"]

def test_analyze_logs_with_flags(heavy_fatigue_logs):
    result = analyze_logs(heavy_fatigue_logs, 28)

    assert result.overall_risk == Severity.MEDIUM
    assert result.summary.startswith("A few patterns worth monitoring")
    assert result.recommendations == ["Increase iron-rich foods like spinach, red meat, and legumes"]

def test_analyze_logs_pcos_only_uses_general_recommendations():
    """Test a flag without lifestyle advice falls back to the general recommendations."""
    result = analyze_logs(_days(3), 40)

    assert [flag.type for flag in result.risk_flags] == [RiskType.PCOS]
    assert result.recommendations == [
        "Stay hydrated and maintain regular sleep patterns",
        "Continue tracking your symptoms for better insights",
    ]

def test_analysis_response_shape(heavy_fatigue_logs):
    body = analyze_logs(heavy_fatigue_logs).to_response()

    assert set(body) == {"overallRisk", "riskFlags", "summary", "recommendations"}
    assert body["riskFlags"][0]["type"] == "anemia"
