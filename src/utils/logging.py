"""
Shared structured logging for the API handlers.

Every handler logs through the module-level ``logger``; services create
their own ``Logger()`` instances, which share the same service name through
``POWERTOOLS_SERVICE_NAME``.
"""
import os
import sys
import json
import traceback
from typing import Any, Dict, Optional
from aws_lambda_powertools import Logger

def format_exception(exc_info) -> Optional[str]:
    """
    Format exception info into a single line.
    
    CloudWatch splits multi-line messages into separate events, so the
    traceback lines are joined with ' | '.
    """
    if exc_info is True:
        exc_info = sys.exc_info()
    elif isinstance(exc_info, BaseException):
        exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
    
    if not (isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[0] is not None):
        return None
    try:
        trace = ''.join(traceback.format_exception(*exc_info))
    except Exception as e:
        return f"Error formatting exception: {str(e)}"
    return trace.replace('\n', ' | ').strip()

class SingleLineLogger(Logger):
    """Logger that attaches the traceback as a single-line ``exception`` key."""
    
    def exception(self, message, *args, **kwargs):
        exc_info = kwargs.pop('exc_info', True)
        extra = kwargs.pop('extra', None) or {}
        extra['exception'] = format_exception(exc_info)
        kwargs['exc_info'] = False
        kwargs['extra'] = extra
        super().exception(message, *args, **kwargs)

def request_log_keys(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pick the request attributes worth attaching to every log line.
    
    Args:
        event: API Gateway proxy event
        
    Returns:
        Dictionary with method, path and the caller's user id when known
    """
    request_context = event.get("requestContext") or {}
    claims = (request_context.get("authorizer") or {}).get("claims") or {}
    return {
        "http_method": event.get("httpMethod"),
        "path": event.get("path"),
        "user_id": claims.get("sub")
    }

logger = SingleLineLogger(
    service=os.environ.get('POWERTOOLS_SERVICE_NAME', 'ovira_api'),
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    log_uncaught_exceptions=True,
    json_serializer=json.dumps,
    use_rfc3339=True
)

logger.append_keys(
    region=os.environ.get('AWS_REGION'),
    function=os.environ.get('AWS_LAMBDA_FUNCTION_NAME'),
    version=os.environ.get('AWS_LAMBDA_FUNCTION_VERSION')
)
