"""
Lambda handler for daily symptom logs.

POST /api/logs {date, flowLevel, painLevel, ...} -> SymptomLog
GET  /api/logs?limit=N -> {logs: [SymptomLog]}
GET  /api/logs?start_date=YYYY-MM-DD&end_date=YYYY-MM-DD -> {logs: [SymptomLog]}
GET  /api/logs/{id} -> SymptomLog
PUT  /api/logs/{id} {painLevel, notes, ...} -> SymptomLog with updatedAt
"""
from datetime import date
from typing import Any, Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from src.models.symptom_log import SymptomLog, SymptomLogUpdate
from src.services.exceptions import StorageError, LogNotFoundError
from src.services.storage import SymptomLogRepository
from src.utils.http import (
    BadRequestError,
    json_response,
    error_response,
    validation_error_response,
    parse_json_body,
    path_param,
    query_params
)
from src.utils.logging import logger, request_log_keys
from src.utils.middleware import require_user

tracer = Tracer()

DEFAULT_LOG_LIMIT = 30
MAX_LOG_LIMIT = 90

def parse_limit(value: Any) -> int:
    """
    Parse the ``limit`` query parameter.
    
    Raises:
        BadRequestError: If the value is not a positive integer
    """
    if value in (None, ""):
        return DEFAULT_LOG_LIMIT
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"Invalid limit: {value}")
    if limit <= 0:
        raise BadRequestError(f"Invalid limit: {value}")
    return min(limit, MAX_LOG_LIMIT)

def parse_date_param(value: Any, name: str):
    """Parse an optional ISO date query parameter."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise BadRequestError(f"Invalid {name}: {value}. Use YYYY-MM-DD")

def create_log(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    try:
        log = SymptomLog.model_validate(parse_json_body(event))
    except BadRequestError as e:
        return error_response(400, "Invalid request", str(e))
    except ValidationError as e:
        return validation_error_response(e)

    try:
        stored = SymptomLogRepository().create(user_id, log)
    except StorageError:
        logger.exception("Failed to store symptom log")
        return error_response(500, "Unable to save log")
    return json_response(201, stored.to_response())

def list_logs(event: Dict[str, Any], user_id: str) -> Dict[str, Any]:
    params = query_params(event)
    try:
        start_date = parse_date_param(params.get("start_date"), "start_date")
        end_date = parse_date_param(params.get("end_date"), "end_date")
        limit = parse_limit(params.get("limit"))
    except BadRequestError as e:
        return error_response(400, "Invalid request", str(e))

    repository = SymptomLogRepository()
    try:
        if start_date or end_date:
            logs = repository.list_range(user_id, start_date, end_date)
        else:
            logs = repository.list_recent(user_id, limit)
    except StorageError:
        logger.exception("Failed to load symptom logs")
        return error_response(500, "Unable to load logs")

    return json_response(200, {"logs": [log.to_response() for log in logs]})

def get_log(event: Dict[str, Any], user_id: str, log_id: str) -> Dict[str, Any]:
    try:
        log = SymptomLogRepository().get(user_id, log_id)
    except StorageError:
        logger.exception("Failed to load symptom log", extra={"log_id": log_id})
        return error_response(500, "Unable to load log")
    if log is None:
        return error_response(404, "Log not found")
    return json_response(200, log.to_response())

def update_log(event: Dict[str, Any], user_id: str, log_id: str) -> Dict[str, Any]:
    try:
        update = SymptomLogUpdate.model_validate(parse_json_body(event))
        updated = SymptomLogRepository().update(user_id, log_id, update)
    except BadRequestError as e:
        return error_response(400, "Invalid request", str(e))
    except ValidationError as e:
        return validation_error_response(e)
    except LogNotFoundError:
        return error_response(404, "Log not found")
    except StorageError:
        logger.exception("Failed to update symptom log", extra={"log_id": log_id})
        return error_response(500, "Unable to save log")
    return json_response(200, updated.to_response())

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict[str, Any], context: LambdaContext, user_id: str) -> Dict[str, Any]:
    """
    Create, list, read or edit symptom logs of the signed-in user.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        user_id: Authenticated user ID
        
    Returns:
        API Gateway Lambda proxy response
    """
    logger.append_keys(**request_log_keys(event))

    method = event.get("httpMethod", "GET").upper()
    log_id = path_param(event, "id")
    if log_id:
        if method == "GET":
            return get_log(event, user_id, log_id)
        if method == "PUT":
            return update_log(event, user_id, log_id)
        return error_response(405, "Method not allowed")

    if method == "POST":
        return create_log(event, user_id)
    if method == "GET":
        return list_logs(event, user_id)
    return error_response(405, "Method not allowed")
