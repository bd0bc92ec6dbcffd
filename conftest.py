"""Configure test suite environment"""
import os
import sys

# Add the project root directory to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)
sys.path.insert(0, os.path.dirname(project_root))  # Add parent directory for src imports

# Tracing needs the X-Ray daemon; logging goes to stdout as usual
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "ovira_api")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
