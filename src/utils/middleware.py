"""
Middleware functions for request processing.
"""
from functools import wraps
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools import Logger
from src.utils.http import error_response

logger = Logger()

def get_user_id(event: Dict[str, Any]) -> Optional[str]:
    """
    Extract the authenticated user ID from an API Gateway event.
    
    The Cognito user pool authorizer has already verified the token; its
    ``sub`` claim is the user ID.
    
    Args:
        event: API Gateway proxy event
        
    Returns:
        User ID, or None for anonymous requests
    """
    if not isinstance(event, dict):
        return None
    request_context = event.get("requestContext") or {}
    authorizer = request_context.get("authorizer") or {}
    claims = authorizer.get("claims") or {}
    user_id = claims.get("sub") or authorizer.get("principalId")
    return str(user_id) if user_id else None

def require_user(f: Callable) -> Callable:
    """
    Decorator to require an authenticated user for handlers.
    
    The wrapped function receives the user ID as ``user_id`` keyword
    argument. Requests without an identity get a 401 response.
    
    Args:
        f: Handler function to wrap
        
    Returns:
        Wrapped handler function
    """
    @wraps(f)
    def wrapped(event: Dict[str, Any], *args: Any, **kwargs: Any) -> Dict[str, Any]:
        user_id = get_user_id(event)
        if not user_id:
            logger.warning("Request without authenticated user", extra={
                "path": event.get("path") if isinstance(event, dict) else None,
                "http_method": event.get("httpMethod") if isinstance(event, dict) else None
            })
            return error_response(401, "Unauthorized")
        return f(event, *args, user_id=user_id, **kwargs)
    
    return wrapped
