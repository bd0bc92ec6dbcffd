"""
Lambda handler for the saved report history.

GET /api/reports      -> {reports: [SavedReport]}
GET /api/reports/{id} -> HealthReportData as it was generated
"""
from typing import Any, Dict

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from src.services.exceptions import StorageError
from src.services.storage import ReportRepository
from src.utils.http import json_response, error_response, path_param
from src.utils.logging import logger, request_log_keys
from src.utils.middleware import require_user

tracer = Tracer()

def get_report(user_id: str, report_id: str) -> Dict[str, Any]:
    try:
        report = ReportRepository().get(user_id, report_id)
    except StorageError:
        logger.exception("Failed to load saved report", extra={"report_id": report_id})
        return error_response(500, "Unable to load reports")
    if report is None:
        return error_response(404, "Report not found")
    return json_response(200, report.to_response())

@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
@require_user
def handler(event: Dict[str, Any], context: LambdaContext, user_id: str) -> Dict[str, Any]:
    """List the user's saved health reports, newest first, or load one of them."""
    logger.append_keys(**request_log_keys(event))

    report_id = path_param(event, "id")
    if report_id:
        return get_report(user_id, report_id)

    try:
        reports = ReportRepository().list_saved(user_id)
    except StorageError:
        logger.exception("Failed to load saved reports")
        return error_response(500, "Unable to load reports")

    return json_response(200, {"reports": [report.to_response() for report in reports]})
