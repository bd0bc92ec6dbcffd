"""
Pytest configuration and shared fixtures.
"""
import json
import pytest
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from src.models.symptom_log import SymptomLog
from src.models.user import UserProfile, ReportProfile
from src.utils.clients import reset_clients
from tests.factories import make_log

@dataclass
class FakeLambdaContext:
    function_name: str = "ovira-api-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:ovira-api-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"
    function_version: str = "$LATEST"

@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Minimal Lambda context accepted by the powertools decorators."""
    return FakeLambdaContext()

@pytest.fixture(autouse=True)
def fresh_clients(monkeypatch):
    """Start every test without cached clients or a Gemini key."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("LLM_PROVIDER", raising=False)
    reset_clients()
    yield
    reset_clients()

@pytest.fixture
def log_factory():
    """Factory fixture for symptom logs."""
    return make_log

@pytest.fixture
def week_of_logs() -> List[SymptomLog]:
    """Seven consecutive days of calm logs, newest first."""
    return [
        make_log(date(2024, 3, 7) - timedelta(days=i), symptoms=["bloating"] if i % 2 else [])
        for i in range(7)
    ]

@pytest.fixture
def heavy_fatigue_logs() -> List[SymptomLog]:
    """Seven days of heavy flow and low energy."""
    return [
        make_log(date(2024, 3, 7) - timedelta(days=i), flow_level="heavy", energy_level="low")
        for i in range(7)
    ]

@pytest.fixture
def sample_profile() -> UserProfile:
    """A profile with a known last period start."""
    return UserProfile(
        uid="user-123",
        email="test@example.com",
        display_name="Test User",
        average_cycle_length=28,
        last_period_start=date(2024, 3, 1)
    )

@pytest.fixture
def report_profile() -> ReportProfile:
    return ReportProfile(
        display_name="Test User",
        age_range="25-34",
        conditions=["PCOS"],
        average_cycle_length=28
    )

@pytest.fixture
def api_event():
    """Factory for API Gateway proxy events."""
    def _event(
        method: str = "POST",
        path: str = "/api/chat",
        body: Any = None,
        user_id: Optional[str] = None,
        query: Optional[Dict[str, str]] = None,
        path_params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        event = {
            "httpMethod": method,
            "path": path,
            "headers": {"Content-Type": "application/json"},
            "queryStringParameters": query,
            "pathParameters": path_params,
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
            "requestContext": {"requestId": "c6af9ac6-7b61-11e6-9a41-93e8deadbeef"}
        }
        if user_id:
            event["requestContext"]["authorizer"] = {
                "claims": {"sub": user_id, "email": f"{user_id}@example.com"}
            }
        return event
    return _event
