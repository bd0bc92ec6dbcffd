"""
Lambda handler for the chat assistant endpoint.

POST /api/chat {message, history, userContext} -> {message}
"""
from typing import Any, Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.models.chat import ChatRequest
from src.services.chat import generate_chat_reply, get_fallback_response
from src.utils.clients import get_llm_client
from src.utils.http import json_response, error_response, parse_json_body
from src.utils.logging import logger, request_log_keys

tracer = Tracer()

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
def handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Answer a chat message.
    
    The assistant never fails the request: problems past the message check
    are answered with the default fallback text.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response
    """
    logger.append_keys(**request_log_keys(event))

    try:
        request = ChatRequest.model_validate(parse_json_body(event))
        if not request.message:
            return error_response(400, "Message is required")

        reply = generate_chat_reply(
            request.message,
            history=request.history,
            user_context=request.user_context,
            llm=get_llm_client()
        )
        return json_response(200, {"message": reply})

    except Exception:
        logger.exception("Chat request failed")
        return json_response(200, {"message": get_fallback_response("")})
