"""Lambda entrypoint for user registration.

Runs outside the VPC so it can reach the Cognito public API endpoints.
"""

from __future__ import annotations

from typing import Any, Mapping

from app.api.register_user import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    return _handler(event, context)
