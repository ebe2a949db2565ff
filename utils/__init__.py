"""
Utils package for shared utilities and cross-cutting concerns.

This package contains decorators, logging utilities, and response formatters
used across the application.
"""

from .decorators import (extract_path_params, lambda_handler, require_auth,
                         validate_json_body, validate_model,
                         validate_query)
from .logging import (log_error, log_lambda_event, log_lambda_response,
                      setup_logger)
from .responses import (HTTPStatus, error_response, result_error_response,
                        success_response, unauthorized_response,
                        validation_error_response)

__all__ = [
    # Decorators
    "lambda_handler",
    "require_auth",
    "validate_json_body",
    "validate_model",
    "validate_query",
    "extract_path_params",
    # Logging
    "setup_logger",
    "log_lambda_event",
    "log_lambda_response",
    "log_error",
    # Responses
    "HTTPStatus",
    "success_response",
    "error_response",
    "validation_error_response",
    "unauthorized_response",
    "result_error_response",
]
