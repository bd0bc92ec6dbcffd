"""
Chat request models.
"""
from enum import Enum
from typing import List, Optional
from pydantic import ConfigDict, Field, field_validator

from src.models.base import CamelModel


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(CamelModel):
    """A single turn of conversation history."""
    role: ChatRole
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def coerce_role(cls, value):
        # Anything that is not the user is the assistant ("model", "ai", ...)
        return ChatRole.USER if value == ChatRole.USER.value else ChatRole.ASSISTANT


class UserContext(CamelModel):
    """Optional profile hints used to personalize the system prompt."""
    age_range: Optional[str] = None
    conditions: List[str] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def default_conditions(cls, value):
        return value or []


class ChatRequest(CamelModel):
    """
    Chat endpoint payload. The message is passed on exactly as typed; only a
    missing or empty message is rejected.
    """
    model_config = ConfigDict(str_strip_whitespace=False)

    message: Optional[str] = None
    history: List[ChatMessage] = Field(default_factory=list)
    user_context: Optional[UserContext] = None

    @field_validator("history", mode="before")
    @classmethod
    def default_history(cls, value):
        return value if isinstance(value, list) else []
