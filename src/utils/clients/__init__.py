"""
Centralized client initialization module.

This module provides lazy-loaded shared clients for the application.
"""
import os
from aws_lambda_powertools import Logger
from src.utils.dynamo import get_dynamo
from src.utils.llm import LLMClient, GeminiClient, BedrockClient

logger = Logger()

LLM_PROVIDERS = {
    "gemini": GeminiClient,
    "bedrock": BedrockClient
}

# Initialize shared clients (lazy loading)
_llm = None

def get_llm_client() -> LLMClient:
    """
    Get or create the language model client.
    
    The provider is a deployment choice made with ``LLM_PROVIDER``
    (``gemini`` by default, or ``bedrock``).
    
    Raises:
        ValueError: If LLM_PROVIDER names an unknown provider
    """
    global _llm
    if _llm is None:
        provider = os.environ.get("LLM_PROVIDER", "gemini").strip().lower()
        try:
            client_class = LLM_PROVIDERS[provider]
        except KeyError:
            raise ValueError(f"Unknown LLM_PROVIDER '{provider}', expected one of {sorted(LLM_PROVIDERS)}")
        _llm = client_class()
        logger.info("Initialized LLM client", extra={"provider": provider})
    return _llm

def reset_clients() -> None:
    """Drop cached clients so the next call re-reads the environment."""
    global _llm
    _llm = None

__all__ = ["get_dynamo", "get_llm_client", "reset_clients"]
