"""
Common interface for hosted language model clients.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

# Conversation turn as sent by the web client: {"role": "user" | "assistant", "content": str}
Turn = Dict[str, str]


class LLMClient(ABC):
    """
    Base class for text generation clients.

    Each client owns an ordered list of models and tries them one after
    another; ``generate`` raises LLMUnavailableError once all of them failed.
    """

    name = "llm"
    # Provider specific system prompts; None keeps the shared prompt
    report_prompt: Optional[str] = None
    chat_prompt: Optional[str] = None

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are available to call the provider."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[Turn]] = None,
        temperature: float = 0.7,
        max_tokens: int = 1024
    ) -> str:
        """
        Generate a completion.

        Args:
            prompt: The user's message or the task prompt
            system_prompt: Instructions for the model
            history: Prior conversation turns, oldest first. ``None`` means a
                single-shot request rather than a conversation.
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text

        Raises:
            LLMUnavailableError: If no model produced a response
        """
