"""
Tests for the GeminiClient class.
"""
import json
import pytest
import requests
import responses

from src.services.exceptions import LLMUnavailableError
from src.utils.llm.gemini import GeminiClient, SYSTEM_ACKNOWLEDGEMENT, clean_api_key

BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

def model_url(model: str) -> str:
    return f"{BASE_URL}/models/{model}:generateContent"

def text_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}

@pytest.fixture
def gemini_client():
    """Create a GeminiClient instance for testing."""
    return GeminiClient(api_key="test_key", models=["gemini-1.5-flash", "gemini-pro"])

def test_clean_api_key():
    """Test whitespace and quotes copied into the key are removed."""
    assert clean_api_key('  "abc123"\n') == "abc123"
    assert clean_api_key("'abc123'") == "abc123"
    assert clean_api_key(None) == ""

def test_configuration_from_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", " 'env_key' ")
    monkeypatch.setenv("GEMINI_MODELS", "model-a, model-b,")
    monkeypatch.setenv("GEMINI_API_URL", "https://example.test/v1/")

    client = GeminiClient()

    assert client.is_configured()
    assert client.api_key == "env_key"
    assert client.models == ["model-a", "model-b"]
    assert client.base_url == "https://example.test/v1"

def test_not_configured_without_key():
    client = GeminiClient()

    assert not client.is_configured()
    with pytest.raises(LLMUnavailableError):
        client.generate("hello")

def test_default_models():
    assert GeminiClient(api_key="k").models == ["gemini-1.5-flash", "gemini-pro", "gemini-1.0-pro"]

@responses.activate
def test_generate_single_shot(gemini_client):
    """Test a prompt without history is sent as one message with two parts."""
    responses.add(responses.POST, model_url("gemini-1.5-flash"), json=text_response("report"), status=200)

    result = gemini_client.generate("data", system_prompt="instructions", temperature=0.3, max_tokens=2048)

    assert result == "report"
    assert len(responses.calls) == 1
    request = responses.calls[0].request
    assert "key=test_key" in request.url
    payload = json.loads(request.body)
    assert payload["contents"] == [{"parts": [{"text": "instructions"}, {"text": "data"}]}]
    assert payload["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 2048}

@responses.activate
def test_generate_conversation(gemini_client):
    """Test a conversation opens with the instructions and an acknowledgement."""
    responses.add(responses.POST, model_url("gemini-1.5-flash"), json=text_response("answer"), status=200)

    gemini_client.generate(
        "question",
        system_prompt="be kind",
        history=[{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
    )

    contents = json.loads(responses.calls[0].request.body)["contents"]
    assert contents == [
        {"role": "user", "parts": [{"text": "You are Ovira AI. Please follow these instructions: be kind"}]},
        {"role": "model", "parts": [{"text": SYSTEM_ACKNOWLEDGEMENT}]},
        {"role": "user", "parts": [{"text": "hi"}]},
        {"role": "model", "parts": [{"text": "hello"}]},
        {"role": "user", "parts": [{"text": "question"}]},
    ]
    assert SYSTEM_ACKNOWLEDGEMENT == (
        "I understand. I am Ovira AI, a compassionate women's health assistant. How can I help you today?"
    )

@responses.activate
def test_generate_fails_over_to_next_model(gemini_client):
    """Test an error status moves on to the next model."""
    responses.add(
        responses.POST,
        model_url("gemini-1.5-flash"),
        json={"error": {"code": 404, "message": "model not found"}},
        status=404
    )
    responses.add(responses.POST, model_url("gemini-pro"), json=text_response("from pro"), status=200)

    assert gemini_client.generate("hello", history=[]) == "from pro"
    assert len(responses.calls) == 2

@responses.activate
def test_generate_skips_response_without_text(gemini_client):
    responses.add(responses.POST, model_url("gemini-1.5-flash"), json={"candidates": []}, status=200)
    responses.add(responses.POST, model_url("gemini-pro"), json=text_response("ok"), status=200)

    assert gemini_client.generate("hello") == "ok"

@responses.activate
def test_generate_skips_transport_errors(gemini_client):
    responses.add(
        responses.POST,
        model_url("gemini-1.5-flash"),
        body=requests.exceptions.ConnectionError("connection reset")
    )
    responses.add(responses.POST, model_url("gemini-pro"), json=text_response("ok"), status=200)

    assert gemini_client.generate("hello") == "ok"

@responses.activate
def test_generate_all_models_fail(gemini_client):
    responses.add(responses.POST, model_url("gemini-1.5-flash"), json={"error": {}}, status=500)
    responses.add(responses.POST, model_url("gemini-pro"), json={"error": {}}, status=429)

    with pytest.raises(LLMUnavailableError):
        gemini_client.generate("hello")
    assert len(responses.calls) == 2
