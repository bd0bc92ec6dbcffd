"""
Lambda handler for doctor-friendly health reports.

POST /api/health-report {logs, userProfile} -> HealthReportData
"""
from typing import Any, Dict, List

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import Field, ValidationError, field_validator

from src.models.base import CamelModel
from src.models.symptom_log import SymptomLog
from src.models.user import ReportProfile
from src.services.exceptions import StorageError
from src.services.report import generate_health_report
from src.services.storage import ReportRepository
from src.utils.clients import get_llm_client
from src.utils.http import (
    BadRequestError,
    json_response,
    error_response,
    validation_error_response,
    parse_json_body
)
from src.utils.logging import logger, request_log_keys
from src.utils.middleware import get_user_id

tracer = Tracer()

class HealthReportRequest(CamelModel):
    """Health report request model."""
    logs: List[SymptomLog]
    user_profile: ReportProfile = Field(default_factory=ReportProfile)

    @field_validator("user_profile", mode="before")
    @classmethod
    def default_profile(cls, value):
        return value or {}

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
def handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Generate a health report from the submitted logs.
    
    Reports requested by a signed-in user are also saved to the report
    history; a failed save does not fail the request.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response
    """
    logger.append_keys(**request_log_keys(event))

    try:
        body = parse_json_body(event)
    except BadRequestError as e:
        return error_response(400, "Invalid request", str(e))

    if not body.get("logs"):
        return error_response(
            400,
            "No symptom logs provided",
            "Please log some symptoms before generating a health report."
        )

    try:
        request = HealthReportRequest.model_validate(body)
    except ValidationError as e:
        return validation_error_response(e)

    try:
        report = generate_health_report(request.logs, request.user_profile, get_llm_client())
    except Exception:
        logger.exception("Health report generation failed", extra={"log_count": len(request.logs)})
        return error_response(500, "Failed to generate health report", "Please try again later.")

    user_id = get_user_id(event)
    if user_id:
        try:
            ReportRepository().save(user_id, report)
        except (StorageError, EnvironmentError) as e:
            logger.warning("Could not save health report", extra={
                "user_id": user_id,
                "error": str(e)
            })

    return json_response(200, report.to_response())
