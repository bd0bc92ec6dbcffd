"""
Tests for request and domain model validation.
"""
import pytest
from datetime import date
from pydantic import ValidationError

from src.models.chat import ChatMessage, ChatRequest, ChatRole
from src.models.symptom_log import SymptomLog, FlowLevel
from src.models.user import OnboardingData, UserProfile, ReportProfile

LOG_PAYLOAD = {
    "date": "2024-03-01T05:00:00.000Z",
    "flowLevel": "heavy",
    "painLevel": 6,
    "mood": "bad",
    "energyLevel": "low",
    "sleepHours": 6.5,
    "symptoms": ["cramps", "fatigue"],
    "notes": "   "
}

def test_symptom_log_from_client_payload():
    """Test camelCase payloads parse and ISO datetimes keep only the date."""
    log = SymptomLog.model_validate(LOG_PAYLOAD)

    assert log.date == date(2024, 3, 1)
    assert log.flow_level == FlowLevel.HEAVY
    assert log.sleep_hours == 6.5
    assert log.notes is None

def test_symptom_log_accepts_snake_case():
    log = SymptomLog.model_validate({
        "date": "2024-03-01",
        "flow_level": "none",
        "pain_level": 0,
        "mood": "great",
        "energy_level": "high",
        "sleep_hours": 9,
        "symptoms": None
    })
    assert log.symptoms == []

@pytest.mark.parametrize("field,value", [
    ("painLevel", 11),
    ("painLevel", -1),
    ("sleepHours", 25),
    ("flowLevel", "extreme"),
    ("mood", "ecstatic"),
    ("energyLevel", "none"),
])
def test_symptom_log_rejects_out_of_range_values(field, value):
    with pytest.raises(ValidationError):
        SymptomLog.model_validate({**LOG_PAYLOAD, field: value})

def test_symptom_log_response_is_camel_case():
    body = SymptomLog.model_validate(LOG_PAYLOAD).to_response()

    assert body["date"] == "2024-03-01"
    assert body["flowLevel"] == "heavy"
    assert "flow_level" not in body

def test_profile_defaults():
    profile = UserProfile(uid="user-1", last_period_start="2024-02-20T00:00:00Z")

    assert profile.average_cycle_length == 28
    assert profile.language.value == "en"
    assert profile.last_period_start == date(2024, 2, 20)

def test_onboarding_requires_acceptance():
    payload = {"ageRange": "18-24", "acceptedTerms": True, "acceptedMedicalDisclaimer": False}

    with pytest.raises(ValidationError):
        OnboardingData.model_validate(payload)

    data = OnboardingData.model_validate({**payload, "acceptedMedicalDisclaimer": True})
    assert data.conditions == []

def test_chat_roles_are_coerced():
    """Test every role other than user is treated as the assistant."""
    assert ChatMessage(role="model", content="hi").role == ChatRole.ASSISTANT
    assert ChatMessage(role="user", content="hi").role == ChatRole.USER

def test_chat_request_ignores_non_list_history():
    request = ChatRequest.model_validate({"message": "hi", "history": "nope"})
    assert request.history == []

def test_report_profile_null_conditions():
    assert ReportProfile.model_validate({"conditions": None}).conditions == []
