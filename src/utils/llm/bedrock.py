"""
Amazon Bedrock runtime client.
"""
import os
import json
from typing import Any, Dict, List, Optional
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from aws_lambda_powertools import Logger
from src.services.constants import BEDROCK_REPORT_PROMPT, BEDROCK_CHAT_PROMPT
from src.services.exceptions import LLMUnavailableError
from .base import LLMClient, Turn
from .guardrails import apply_guardrails

logger = Logger()

DEFAULT_MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"
DEFAULT_FALLBACK_MODEL_ID = "amazon.titan-text-express-v1"
DEFAULT_REGION = "us-east-1"
ANTHROPIC_VERSION = "bedrock-2023-05-31"
DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful, empathetic women's health assistant. Provide educational "
    "information only. Never diagnose or prescribe treatment."
)


class BedrockClient(LLMClient):
    """
    Client for Bedrock hosted models.

    Tries an Anthropic Claude messages model first and falls back to an
    Amazon Titan text model with a flattened prompt. Output from both goes
    through the medical language guardrails.
    """

    name = "bedrock"
    report_prompt = BEDROCK_REPORT_PROMPT
    chat_prompt = BEDROCK_CHAT_PROMPT

    def __init__(
        self,
        client=None,
        model_id: Optional[str] = None,
        fallback_model_id: Optional[str] = None,
        region: Optional[str] = None
    ):
        self.region = region or os.environ.get("BEDROCK_REGION", DEFAULT_REGION)
        self.model_id = model_id or os.environ.get("BEDROCK_MODEL_ID", DEFAULT_MODEL_ID)
        self.fallback_model_id = fallback_model_id or os.environ.get(
            "BEDROCK_FALLBACK_MODEL_ID", DEFAULT_FALLBACK_MODEL_ID
        )
        self._client = client

    @property
    def client(self):
        """Get or create the bedrock-runtime client lazily."""
        if self._client is None:
            self._client = boto3.client("bedrock-runtime", region_name=self.region)
        return self._client

    def is_configured(self) -> bool:
        if self._client is not None:
            return True
        return boto3.Session().get_credentials() is not None

    def _invoke(self, model_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self.client.invoke_model(
            modelId=model_id,
            contentType="application/json",
            accept="application/json",
            body=json.dumps(body)
        )
        return json.loads(response["body"].read())

    def invoke_claude(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[Turn]] = None,
        temperature: float = 0.7,
        max_tokens: int = 1024
    ) -> str:
        """
        Invoke the primary Claude model.
        
        Raises:
            ClientError, BotoCoreError: On Bedrock failures
            ValueError: If the response contains no text
        """
        messages = [
            {"role": "user" if turn.get("role") == "user" else "assistant", "content": turn.get("content", "")}
            for turn in (history or [])
        ]
        messages.append({"role": "user", "content": prompt})

        result = self._invoke(self.model_id, {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "system": system_prompt or DEFAULT_SYSTEM_PROMPT,
            "messages": messages
        })
        content = result.get("content") or [{}]
        text = content[0].get("text", "")
        if not text:
            raise ValueError("Claude response contained no text")
        return apply_guardrails(text)

    def invoke_titan(
        self,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1024
    ) -> str:
        """
        Invoke the fallback Titan model with a plain text prompt.
        
        Raises:
            ClientError, BotoCoreError: On Bedrock failures
            ValueError: If the response contains no text
        """
        result = self._invoke(self.fallback_model_id, {
            "inputText": prompt,
            "textGenerationConfig": {
                "maxTokenCount": max_tokens,
                "temperature": temperature,
                "topP": 0.9
            }
        })
        results = result.get("results") or [{}]
        text = results[0].get("outputText", "")
        if not text:
            raise ValueError("Titan response contained no text")
        return apply_guardrails(text)

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[Turn]] = None,
        temperature: float = 0.7,
        max_tokens: int = 1024
    ) -> str:
        try:
            return self.invoke_claude(prompt, system_prompt, history, temperature, max_tokens)
        except (ClientError, BotoCoreError, ValueError) as e:
            logger.warning("Claude invocation failed, trying fallback model", extra={
                "model_id": self.model_id,
                "error": str(e)
            })

        full_prompt = f"{system_prompt}\n\nUser: {prompt}\nAssistant:" if system_prompt else prompt
        try:
            return self.invoke_titan(full_prompt, temperature, max_tokens)
        except (ClientError, BotoCoreError, ValueError) as e:
            logger.error("Fallback model invocation failed", extra={
                "model_id": self.fallback_model_id,
                "error": str(e)
            })
            raise LLMUnavailableError("AI service unavailable. Please try again later.") from e
