"""
Lambda handler for the dashboard cycle snapshot.

GET /api/cycle -> CycleStatus
"""
from typing import Any, Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.cycle import get_cycle_status
from src.services.exceptions import StorageError
from src.services.storage import ProfileRepository, SymptomLogRepository
from src.utils.http import json_response, error_response
from src.utils.logging import logger, request_log_keys
from src.utils.middleware import require_user

tracer = Tracer()

STREAK_WINDOW_DAYS = 7

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict[str, Any], context: LambdaContext, user_id: str) -> Dict[str, Any]:
    """
    Return cycle day, phase, next period prediction and logging streak.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        user_id: Authenticated user ID
        
    Returns:
        API Gateway Lambda proxy response
    """
    logger.append_keys(**request_log_keys(event))

    try:
        profile = ProfileRepository().get_or_create(user_id)
        recent_logs = SymptomLogRepository().list_recent(user_id, limit=STREAK_WINDOW_DAYS)
    except StorageError:
        logger.exception("Failed to load cycle data")
        return error_response(500, "Unable to load cycle data")

    status = get_cycle_status(profile, [log.date for log in recent_logs])
    logger.info("Calculated cycle status", extra={
        "cycle_day": status.cycle_day,
        "phase": status.phase.value if status.phase else None,
        "streak": status.streak
    })
    return json_response(200, status.to_response())
