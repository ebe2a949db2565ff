"""
Decorators for Lambda function handlers.

This module provides decorators that add consistent logging, error handling,
authentication context, and request parsing to Lambda functions.
"""

import json
import time
from functools import wraps
from typing import Any, Callable, Dict, Optional, Type

from pydantic import BaseModel, ValidationError

from .logging import (log_error, log_lambda_event, log_lambda_response,
                      setup_logger)
from .responses import HTTPStatus, error_response, validation_error_response


def lambda_handler(
    logger_name: Optional[str] = None,
    log_event: bool = True,
    log_response: bool = True,
    structured_logging: bool = True,
) -> Callable:
    """
    Decorator for Lambda function handlers that provides:
    - Consistent logging setup
    - Automatic event/response logging
    - Conversion of uncaught exceptions into a 500 response
    - Execution time tracking

    Args:
        logger_name: Logger name (defaults to function module name)
        log_event: Whether to log incoming events
        log_response: Whether to log responses
        structured_logging: Whether to use structured JSON logging

    Returns:
        Decorated function
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            logger = setup_logger(
                logger_name or func.__module__, structured=structured_logging
            )

            start_time = time.time()

            try:
                if log_event:
                    log_lambda_event(logger, event, context)

                response = func(event, context)

                if not isinstance(response, dict) or "statusCode" not in response:
                    logger.warning("Handler returned invalid response format")
                    response = error_response(
                        "Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR
                    )

                if log_response:
                    execution_time = (time.time() - start_time) * 1000
                    log_lambda_response(logger, response, execution_time)

                return response

            except Exception as e:
                execution_time = (time.time() - start_time) * 1000

                log_error(
                    logger,
                    e,
                    {
                        "function_name": getattr(context, "function_name", "unknown"),
                        "request_id": getattr(context, "aws_request_id", "unknown"),
                        "execution_time_ms": execution_time,
                        "event_path": event.get("path") or event.get("rawPath"),
                        "event_method": event.get("httpMethod")
                        or event.get("requestContext", {})
                        .get("http", {})
                        .get("method"),
                    },
                )

                return error_response(
                    "Internal server error", HTTPStatus.INTERNAL_SERVER_ERROR
                )

        return wrapper

    return decorator


def require_auth(func: Callable) -> Callable:
    """
    Decorator that ensures the request carries an authorizer context.

    The API Gateway authorizer resolves the Supabase user id from the JWT and
    hands it down as ``userId``. Handlers read it from ``event["auth"]``.
    """

    @wraps(func)
    def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
        request_context = event.get("requestContext", {})
        authorizer_context = request_context.get("authorizer", {})

        # HTTP APIs nest the context under "lambda", REST APIs do not
        auth_context = authorizer_context.get("lambda", authorizer_context)

        if not auth_context or not auth_context.get("userId"):
            logger = setup_logger(__name__)
            logger.info(
                "Authorization failed - no valid context found",
                extra={
                    "request_context_keys": list(request_context.keys()),
                    "authorizer_keys": list(authorizer_context.keys()),
                },
            )
            return error_response("Unauthorized access", HTTPStatus.UNAUTHORIZED)

        event["auth"] = {
            "user_id": auth_context.get("userId"),
            "email": auth_context.get("email"),
        }

        return func(event, context)

    return wrapper


def validate_json_body(required_fields: Optional[list] = None) -> Callable:
    """
    Decorator that validates and parses JSON request body.

    Args:
        required_fields: List of required field names

    Returns:
        Decorated function
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            try:
                body = json.loads(event.get("body") or "{}")
            except json.JSONDecodeError as e:
                return validation_error_response(
                    "Invalid JSON in request body", {"json_error": str(e)}
                )

            if not isinstance(body, dict):
                return validation_error_response("Request body must be a JSON object")

            event["json_body"] = body

            if required_fields:
                missing_fields = [
                    field
                    for field in required_fields
                    if field not in body or body[field] is None
                ]

                if missing_fields:
                    return validation_error_response(
                        f"Missing required fields: {', '.join(missing_fields)}",
                        {"missing_fields": missing_fields},
                    )

            return func(event, context)

        return wrapper

    return decorator


def validate_model(model: Type[BaseModel]) -> Callable:
    """
    Decorator that validates ``event["json_body"]`` against a pydantic model.

    Must be applied below ``validate_json_body``. The parsed model is stored in
    ``event["model"]``.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            try:
                event["model"] = model.model_validate(event.get("json_body", {}))
            except ValidationError as e:
                return validation_error_response(
                    f"{model.__name__} validation failed",
                    {
                        "validation_errors": e.errors(
                            include_url=False,
                            include_context=False,
                            include_input=False,
                        )
                    },
                )
            return func(event, context)

        return wrapper

    return decorator


def extract_path_params(*param_names: str) -> Callable:
    """
    Decorator that extracts and validates path parameters.

    Args:
        param_names: Names of path parameters to extract

    Returns:
        Decorated function
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            path_params = event.get("pathParameters") or {}

            missing_params = [
                param
                for param in param_names
                if param not in path_params or not path_params[param]
            ]

            if missing_params:
                return validation_error_response(
                    f"Missing path parameters: {', '.join(missing_params)}",
                    {"missing_parameters": missing_params},
                )

            event["path_params"] = {param: path_params[param] for param in param_names}

            return func(event, context)

        return wrapper

    return decorator


def validate_query(model: Type[BaseModel]) -> Callable:
    """
    Decorator that validates query string parameters against a pydantic model.

    The parsed model is stored in ``event["query"]``.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            params = event.get("queryStringParameters") or {}
            try:
                event["query"] = model.model_validate(params)
            except ValidationError as e:
                return validation_error_response(
                    "Invalid query parameters",
                    {
                        "validation_errors": e.errors(
                            include_url=False,
                            include_context=False,
                            include_input=False,
                        )
                    },
                )
            return func(event, context)

        return wrapper

    return decorator
