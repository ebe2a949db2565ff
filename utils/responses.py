"""
HTTP responses for the Lambda handlers.

Bodies are camelCase JSON: pydantic models are dumped by alias so the API never
leaks storage column names, and Decimal money goes out as a JSON number.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union


class HTTPStatus(Enum):
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500


cors_headers = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,PATCH,PUT,DELETE,OPTIONS",
}


class APIJSONEncoder(json.JSONEncoder):
    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if hasattr(obj, "model_dump"):
            return obj.model_dump(by_alias=True)
        return super().default(obj)


def create_response(
    status_code: Union[int, HTTPStatus], body: Dict[str, Any]
) -> Dict[str, Any]:
    """Lambda proxy response with CORS headers and a JSON body."""
    if isinstance(status_code, HTTPStatus):
        status_code = status_code.value

    return {
        "statusCode": status_code,
        "headers": dict(cors_headers),
        "body": json.dumps(body, cls=APIJSONEncoder),
    }


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: Union[int, HTTPStatus] = HTTPStatus.OK,
) -> Dict[str, Any]:
    """
    Dict payloads (and models) are merged into the body; anything else lands
    under "data".
    """
    body = {}
    if message:
        body["message"] = message

    if data is not None:
        if hasattr(data, "model_dump"):
            data = data.model_dump(by_alias=True)
        if isinstance(data, dict):
            body.update(data)
        else:
            body["data"] = data

    return create_response(status_code, body)


def error_response(
    message: str,
    status_code: Union[int, HTTPStatus] = HTTPStatus.INTERNAL_SERVER_ERROR,
    error_code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message}
    if error_code:
        body["error_code"] = error_code
    if details:
        body["details"] = details
    return create_response(status_code, body)


def validation_error_response(
    message: str = "Validation failed", errors: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    return error_response(
        message, HTTPStatus.BAD_REQUEST, error_code="VALIDATION_ERROR", details=errors
    )


def unauthorized_response(message: str = "Unauthorized access") -> Dict[str, Any]:
    return error_response(
        message, HTTPStatus.UNAUTHORIZED, error_code="UNAUTHORIZED"
    )


def result_error_response(resource: str, error: str) -> Dict[str, Any]:
    """
    Map a data-access error string to a response.

    Not-found errors become 404s, everything else is a 500.
    """
    if error.endswith("not found"):
        return error_response(
            error, HTTPStatus.NOT_FOUND, error_code="RESOURCE_NOT_FOUND"
        )
    return error_response(
        f"{resource} request failed: {error}", HTTPStatus.INTERNAL_SERVER_ERROR
    )
