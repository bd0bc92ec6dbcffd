"""
Chat assistant service.
"""
from typing import List, Optional

from aws_lambda_powertools import Logger
from src.models.chat import ChatMessage, UserContext
from src.services.constants import CHAT_SYSTEM_PROMPT, FALLBACK_RESPONSES, FALLBACK_KEYWORDS
from src.services.exceptions import LLMError
from src.utils.llm import LLMClient

logger = Logger()

def get_fallback_response(message: str) -> str:
    """
    Pick a canned answer by keyword when no language model is available.
    
    Topics are checked in order (pain, mood, cycle) with a case-insensitive
    substring match; the first match wins.
    
    Example:
        >>> get_fallback_response("My CRAMPS are bad") == FALLBACK_RESPONSES["pain"]
        True
    """
    lowered = (message or "").lower()
    for topic, keywords in FALLBACK_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return FALLBACK_RESPONSES[topic]
    return FALLBACK_RESPONSES["default"]

def build_system_prompt(
    user_context: Optional[UserContext] = None,
    base_prompt: str = CHAT_SYSTEM_PROMPT
) -> str:
    """Assistant instructions, personalized with the user's age range and conditions."""
    if user_context is None:
        return base_prompt

    details = []
    if user_context.age_range:
        details.append(f"Age range {user_context.age_range}")
    if user_context.conditions:
        details.append(f"known conditions: {', '.join(user_context.conditions)}")
    if not details:
        return base_prompt
    return f"{base_prompt}\n\nUser context: {', '.join(details)}"

def generate_chat_reply(
    message: str,
    history: Optional[List[ChatMessage]] = None,
    user_context: Optional[UserContext] = None,
    llm: Optional[LLMClient] = None
) -> str:
    """
    Answer a chat message.
    
    Args:
        message: The user's message
        history: Earlier turns of the conversation, oldest first
        user_context: Optional profile hints
        llm: Language model client, or None to answer from the canned texts
        
    Returns:
        The model's reply, or the keyword fallback when the model is not
        configured or fails
    """
    if llm is None or not llm.is_configured():
        logger.info("Language model not configured, returning fallback response")
        return get_fallback_response(message)

    turns = [
        {"role": turn.role.value, "content": turn.content}
        for turn in history or []
    ]
    try:
        reply = llm.generate(
            message,
            system_prompt=build_system_prompt(user_context, llm.chat_prompt or CHAT_SYSTEM_PROMPT),
            history=turns
        )
    except LLMError as e:
        logger.warning("Chat generation failed, using fallback response", extra={
            "error": str(e),
            "error_type": e.__class__.__name__
        })
        return get_fallback_response(message)

    logger.info("Generated chat reply", extra={
        "provider": llm.name,
        "history_turns": len(turns)
    })
    return reply
