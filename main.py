"""
Health check endpoint for the Pocket Ledger API.
"""

from utils.decorators import lambda_handler
from utils.responses import success_response

SERVICE_NAME = "pocket-ledger-api"
VERSION = "1.0.0"


@lambda_handler()
def healthz(event, context):
    """
    GET /healthz

    Does not require authentication and touches no backing service, so it is
    safe for load balancer and uptime checks.
    """
    return success_response(
        data={"status": "healthy", "service": SERVICE_NAME, "version": VERSION},
        message="Service is running",
    )
