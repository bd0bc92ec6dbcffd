"""
Lambda handlers package for AWS Lambda functions.
"""
from .chat import handler as chat_handler
from .analyze import handler as analyze_handler
from .health_report import handler as health_report_handler
from .reports import handler as reports_handler
from .logs import handler as logs_handler
from .cycle import handler as cycle_handler
from .profile import handler as profile_handler

__all__ = [
    "chat_handler",
    "analyze_handler",
    "health_report_handler",
    "reports_handler",
    "logs_handler",
    "cycle_handler",
    "profile_handler"
]
