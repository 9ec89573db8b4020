"""Shared response utilities for Lambda handlers."""

from __future__ import annotations

import json
import os
from typing import Any
from typing import Mapping
from typing import Optional

from pydantic import BaseModel

from app.exceptions import AppError


def get_security_headers() -> dict[str, str]:
    """Get security headers for all responses.

    Returns:
        Dictionary of security headers.
    """
    return {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Cache-Control": "no-store, no-cache, must-revalidate",
        "Pragma": "no-cache",
    }


_DEFAULT_CORS_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
]


def get_cors_headers(
    event: Optional[Mapping[str, Any]] = None,
) -> dict[str, str]:
    """Get CORS headers for the response.

    The request origin is echoed back when it is in the allow-list
    (CORS_ALLOWED_ORIGINS, comma separated); otherwise the first allowed
    origin is returned.

    Args:
        event: The Lambda event containing the request origin header.
    """
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS", "")
    if allowed_origins_env:
        allowed_origins = [
            origin.strip()
            for origin in allowed_origins_env.split(",")
            if origin.strip()
        ]
    else:
        allowed_origins = _DEFAULT_CORS_ORIGINS

    request_origin = None
    if event:
        headers = event.get("headers") or {}
        request_origin = headers.get("origin") or headers.get("Origin")

    if request_origin and request_origin in allowed_origins:
        allow_origin = request_origin
    elif allowed_origins:
        allow_origin = allowed_origins[0]
    else:
        allow_origin = "*"

    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Headers": "Content-Type,Authorization",
        "Access-Control-Allow-Methods": "POST,OPTIONS",
    }


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
    event: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict or Pydantic model).
        headers: Optional additional headers to include.
        event: Optional Lambda event for CORS origin detection.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = {
        "Content-Type": "application/json",
    }
    response_headers.update(get_security_headers())
    response_headers.update(get_cors_headers(event))
    if headers:
        response_headers.update(headers)

    if isinstance(body, BaseModel):
        body = body.model_dump()

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(body, default=str),
    }


def error_response(
    error: AppError,
    event: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Create an error response from an application error."""
    return json_response(error.status_code, error.to_dict(), event=event)
