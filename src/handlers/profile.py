"""
Lambda handler for the user profile and account.

GET    /api/profile             -> UserProfile (created on first access)
PUT    /api/profile             -> UserProfile, settings update
POST   /api/profile/onboarding  -> UserProfile, onboarding answers
GET    /api/profile/export      -> {profile, logs, exportedAt}
DELETE /api/profile             -> {deleted, logsDeleted, reportsDeleted}
"""
from typing import Any, Dict, Optional

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from src.models.base import utc_now
from src.models.user import ProfileUpdate, OnboardingData
from src.services.exceptions import StorageError, ProfileNotFoundError
from src.services.storage import ProfileRepository, SymptomLogRepository, ReportRepository
from src.utils.http import (
    BadRequestError,
    json_response,
    error_response,
    validation_error_response,
    parse_json_body
)
from src.utils.logging import logger, request_log_keys
from src.utils.middleware import require_user

tracer = Tracer()

def get_email(event: Dict[str, Any]) -> Optional[str]:
    """Email claim of the signed-in user, if the authorizer passed one."""
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    return (authorizer.get("claims") or {}).get("email")

def get_profile(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    profile = ProfileRepository().get_or_create(user_id, get_email(event))
    return json_response(200, profile.to_response())

def update_profile(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    try:
        update = ProfileUpdate.model_validate(parse_json_body(event))
    except ValidationError as e:
        return validation_error_response(e)

    try:
        profile = ProfileRepository().apply_settings(user_id, update)
    except ProfileNotFoundError:
        return error_response(404, "Profile not found")
    return json_response(200, profile.to_response())

def complete_onboarding(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    try:
        data = OnboardingData.model_validate(parse_json_body(event))
    except ValidationError as e:
        return validation_error_response(e)

    profile = ProfileRepository().complete_onboarding(user_id, data, get_email(event))
    logger.info("Onboarding completed", extra={"age_range": data.age_range.value})
    return json_response(200, profile.to_response())

def export_data(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    profile = ProfileRepository().get_or_create(user_id, get_email(event))
    logs = SymptomLogRepository().list_all(user_id)
    return json_response(200, {
        "profile": profile.to_response(),
        "logs": [log.to_response() for log in logs],
        "exportedAt": utc_now().isoformat()
    })

def delete_account(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    logs_deleted = SymptomLogRepository().delete_all(user_id)
    reports_deleted = ReportRepository().delete_all(user_id)
    ProfileRepository().delete(user_id)
    logger.info("Deleted account data", extra={
        "logs_deleted": logs_deleted,
        "reports_deleted": reports_deleted
    })
    return json_response(200, {
        "deleted": True,
        "logsDeleted": logs_deleted,
        "reportsDeleted": reports_deleted
    })

ROUTES = {
    ("GET", ""): get_profile,
    ("PUT", ""): update_profile,
    ("DELETE", ""): delete_account,
    ("POST", "onboarding"): complete_onboarding,
    ("GET", "export"): export_data
}

def route_key(event: Dict[str, Any]) -> tuple:
    """(method, sub-resource) of the request, e.g. ``("POST", "onboarding")``."""
    method = event.get("httpMethod", "GET").upper()
    path = (event.get("path") or "").rstrip("/")
    action = path.rsplit("/", 1)[-1]
    return method, "" if action in ("", "profile") else action

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict[str, Any], context: LambdaContext, user_id: str) -> Dict[str, Any]:
    """
    Dispatch profile requests for the signed-in user.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        user_id: Authenticated user ID
        
    Returns:
        API Gateway Lambda proxy response
    """
    logger.append_keys(**request_log_keys(event))

    action = ROUTES.get(route_key(event))
    if action is None:
        return error_response(404, "Not found")

    try:
        return action(event, user_id)
    except BadRequestError as e:
        return error_response(400, "Invalid request", str(e))
    except StorageError:
        logger.exception("Profile request failed", extra={"route": list(route_key(event))})
        return error_response(500, "Unable to load profile")
    except ValidationError:
        logger.exception("Stored profile failed validation", extra={"route": list(route_key(event))})
        return error_response(500, "Unable to load profile")
