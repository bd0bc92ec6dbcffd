"""
Language model client package.
"""
from .base import LLMClient
from .gemini import GeminiClient
from .bedrock import BedrockClient
from .parsers import extract_json
from .guardrails import apply_guardrails, contains_prohibited_terms, sanitize_response

__all__ = [
    "LLMClient",
    "GeminiClient",
    "BedrockClient",
    "extract_json",
    "apply_guardrails",
    "contains_prohibited_terms",
    "sanitize_response"
]
