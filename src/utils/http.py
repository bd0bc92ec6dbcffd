"""
Helpers for API Gateway proxy requests and responses.
"""
import json
from typing import Any, Dict, Optional

from pydantic import ValidationError

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*"
}

class BadRequestError(ValueError):
    """Raised when the request body cannot be parsed."""
    pass

def json_response(status_code: int, body: Any) -> Dict[str, Any]:
    """
    Build an API Gateway proxy response.
    
    Args:
        status_code: HTTP status code
        body: JSON-serializable response body
        
    Returns:
        Lambda proxy integration response
    """
    return {
        "statusCode": status_code,
        "headers": dict(DEFAULT_HEADERS),
        "body": json.dumps(body, default=str)
    }

def error_response(status_code: int, error: str, message: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    """Build an error response with an ``error`` key and optional ``message``."""
    body: Dict[str, Any] = {"error": error}
    if message:
        body["message"] = message
    body.update(extra)
    return json_response(status_code, body)

def validation_error_response(error: ValidationError) -> Dict[str, Any]:
    """400 response listing the fields that failed validation."""
    details = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in error.errors()
    ]
    return error_response(400, "Invalid request", details=details)

def parse_json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse the JSON body of a proxy event.
    
    Args:
        event: API Gateway proxy event
        
    Returns:
        Parsed body; an empty dict when there is no body
        
    Raises:
        BadRequestError: If the body is not a JSON object
    """
    body = event.get("body")
    if body is None or body == "":
        return {}
    if isinstance(body, dict):
        return body
    try:
        parsed = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequestError(f"Invalid JSON body: {e.msg}") from e
    if not isinstance(parsed, dict):
        raise BadRequestError("Request body must be a JSON object")
    return parsed

def query_params(event: Dict[str, Any]) -> Dict[str, str]:
    """Query string parameters, empty when none were sent."""
    return event.get("queryStringParameters") or {}

def path_param(event: Dict[str, Any], name: str) -> Optional[str]:
    """Path parameter from the route template, e.g. ``id`` in ``/api/logs/{id}``."""
    return (event.get("pathParameters") or {}).get(name)
