"""
Google Gemini REST API client.
"""
import os
from typing import Any, Dict, List, Optional
import requests

from aws_lambda_powertools import Logger
from src.services.exceptions import LLMUnavailableError
from .base import LLMClient, Turn

logger = Logger()

DEFAULT_API_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODELS = "gemini-1.5-flash,gemini-pro,gemini-1.0-pro"
DEFAULT_TIMEOUT = 30
SYSTEM_PREAMBLE = "You are Ovira AI. Please follow these instructions: "
SYSTEM_ACKNOWLEDGEMENT = (
    "I understand. I am Ovira AI, a compassionate women's health assistant. "
    "How can I help you today?"
)


def clean_api_key(api_key: Optional[str]) -> str:
    """Strip whitespace and stray quotes copied into the environment value."""
    return (api_key or "").strip().replace('"', "").replace("'", "")


class GeminiClient(LLMClient):
    """Client for the Gemini generateContent endpoint."""

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        models: Optional[List[str]] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.api_key = clean_api_key(api_key if api_key is not None else os.environ.get("GEMINI_API_KEY"))
        if models is None:
            models = [m.strip() for m in os.environ.get("GEMINI_MODELS", DEFAULT_MODELS).split(",") if m.strip()]
        self.models = models
        self.base_url = (base_url or os.environ.get("GEMINI_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.timeout = timeout or float(os.environ.get("GEMINI_TIMEOUT", DEFAULT_TIMEOUT))

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_contents(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[Turn]] = None
    ) -> List[Dict[str, Any]]:
        """
        Build the ``contents`` array for a request.
        
        Conversations carry the system prompt as an opening user turn
        answered by a model acknowledgement, since not every model in the
        chain accepts a system instruction. Single-shot requests send the
        system prompt and the prompt as two parts of one message.
        
        Args:
            prompt: Current user message or task prompt
            system_prompt: Optional instructions
            history: Prior turns, or None for a single-shot request
            
        Returns:
            List of Gemini content objects
        """
        if history is None:
            parts = [{"text": system_prompt}] if system_prompt else []
            parts.append({"text": prompt})
            return [{"parts": parts}]

        contents = []
        if system_prompt:
            contents.extend([
                {"role": "user", "parts": [{"text": SYSTEM_PREAMBLE + system_prompt}]},
                {"role": "model", "parts": [{"text": SYSTEM_ACKNOWLEDGEMENT}]}
            ])
        for turn in history:
            contents.append({
                "role": "user" if turn.get("role") == "user" else "model",
                "parts": [{"text": turn.get("content", "")}]
            })
        contents.append({"role": "user", "parts": [{"text": prompt}]})
        return contents

    def _call_model(self, model: str, payload: Dict[str, Any]) -> Optional[str]:
        """
        Call a single model.
        
        Returns:
            Generated text, or None when the model failed or returned no text
        """
        url = f"{self.base_url}/models/{model}:generateContent"
        try:
            response = requests.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Gemini request failed", extra={"model": model, "error": str(e)})
            return None

        if not response.ok:
            logger.warning("Gemini model returned an error", extra={
                "model": model,
                "status_code": response.status_code,
                "response": response.text[:200]
            })
            return None

        try:
            data = response.json()
            return data["candidates"][0]["content"]["parts"][0]["text"] or None
        except (ValueError, KeyError, IndexError, TypeError):
            logger.warning("Gemini response contained no text", extra={
                "model": model,
                "response": response.text[:200]
            })
            return None

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[Turn]] = None,
        temperature: float = 0.7,
        max_tokens: int = 1024
    ) -> str:
        if not self.is_configured():
            raise LLMUnavailableError("GEMINI_API_KEY is not configured")

        payload = {
            "contents": self.build_contents(prompt, system_prompt, history),
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens
            }
        }

        for model in self.models:
            logger.debug("Trying Gemini model", extra={"model": model})
            text = self._call_model(model, payload)
            if text:
                logger.info("Gemini model succeeded", extra={"model": model})
                return text

        raise LLMUnavailableError(f"All Gemini models failed: {', '.join(self.models)}")
