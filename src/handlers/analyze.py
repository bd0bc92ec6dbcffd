"""
Lambda handler for symptom log analysis.

POST /api/analyze {logs, averageCycleLength} -> AnalysisResult
"""
from typing import Any, Dict, List, Optional

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import Field, ValidationError, field_validator

from src.models.base import CamelModel
from src.models.symptom_log import SymptomLog
from src.models.user import DEFAULT_CYCLE_LENGTH
from src.services.risk import analyze_logs
from src.utils.http import (
    BadRequestError,
    json_response,
    error_response,
    validation_error_response,
    parse_json_body
)
from src.utils.logging import logger, request_log_keys

tracer = Tracer()

class AnalyzeRequest(CamelModel):
    """Log analysis request model."""
    logs: List[SymptomLog] = Field(default_factory=list)
    average_cycle_length: Optional[int] = Field(DEFAULT_CYCLE_LENGTH, gt=0)

    @field_validator("logs", mode="before")
    @classmethod
    def default_logs(cls, value):
        return value or []

    @field_validator("average_cycle_length", mode="before")
    @classmethod
    def default_cycle_length(cls, value):
        return DEFAULT_CYCLE_LENGTH if value is None else value

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
def handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Flag concerning patterns in the submitted logs.
    
    An empty log list is answered with the not-enough-data result.
    
    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context
        
    Returns:
        API Gateway Lambda proxy response
    """
    logger.append_keys(**request_log_keys(event))

    try:
        request = AnalyzeRequest.model_validate(parse_json_body(event))
    except BadRequestError as e:
        return error_response(400, "Invalid request", str(e))
    except ValidationError as e:
        return validation_error_response(e)

    try:
        result = analyze_logs(request.logs, request.average_cycle_length)
        return json_response(200, result.to_response())
    except Exception:
        logger.exception("Log analysis failed", extra={"log_count": len(request.logs)})
        return error_response(500, "Failed to analyze data")
