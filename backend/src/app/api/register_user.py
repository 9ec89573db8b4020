"""User registration API handler.

Handles ``POST /v1/auth/register``: validates the JSON body, creates the
user in the Cognito user pool and sets the supplied password as permanent.

Registration is two separate Cognito calls and is not atomic. When the
password cannot be set after the user was created, the user is left in
``FORCE_CHANGE_PASSWORD`` state; the handler reports REGISTRATION_FAILED
and logs the user id at ERROR level so it can be finalized or removed.
"""

from __future__ import annotations

import os
import time
from typing import Any, Mapping
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from app.api.schemas import RegistrationRequestSchema, RegistrationResultSchema
from app.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    RegistrationError,
    ValidationError,
)
from app.services.identity_provider import CognitoIdentityProvider, NewUser
from app.utils import (
    error_response,
    json_response,
    parse_json_object,
    request_id_from,
    require_fields,
    validate_email_shape,
    validate_password_length,
)
from app.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    hash_for_correlation,
    log_lambda_event,
    log_response,
    mask_email,
    set_request_context,
)

configure_logging()
logger = get_logger(__name__)

DEFAULT_USER_ROLE = "User"


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Register a user from an API Gateway proxy event.

    Raises:
        ConfigurationError: If USER_POOL_ID is not set. The invocation is
            aborted rather than answered.
    """
    started = time.perf_counter()
    set_request_context(req_id=request_id_from(event, context))
    try:
        logger.info("Processing user registration request")
        log_lambda_event(logger, event)
        response = _handle_registration(event)
        log_response(
            logger,
            response["statusCode"],
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        return response
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_registration(event: Mapping[str, Any]) -> dict[str, Any]:
    try:
        request = _parse_request(event)
        _validate_request(request)
    except ValidationError as exc:
        logger.warning(
            f"Registration rejected: {exc.message}",
            extra={"error_code": exc.error_code, "field": exc.field},
        )
        return error_response(exc, event=event)

    provider = CognitoIdentityProvider(_require_env("USER_POOL_ID"))
    user = NewUser(
        user_id=str(uuid4()),
        email=request.email,
        tenant_id=request.tenant_id,
        user_role=_resolve_role(request.user_role),
    )

    logger.info(
        f"Registering {mask_email(user.email)} as {user.user_id}",
        extra={
            "tenant_id": user.tenant_id,
            "email_hash": hash_for_correlation(user.email),
        },
    )

    try:
        register_user(provider, user, request.password)
    except RegistrationError as exc:
        _log_registration_failure(exc)
        return error_response(exc, event=event)

    logger.info(f"User registered successfully: {user.user_id}")
    return json_response(
        201,
        RegistrationResultSchema(user_id=user.user_id),
        event=event,
    )


def register_user(
    provider: CognitoIdentityProvider,
    user: NewUser,
    password: str,
) -> None:
    """Create *user* and make *password* permanent.

    The password is only set once the user exists. A failure in the second
    step does not remove the created user.

    Raises:
        RegistrationError: If either provider call fails.
    """
    provider.create_user(user, temporary_password=password)
    provider.set_password(user.user_id, password, permanent=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_request(event: Mapping[str, Any]) -> RegistrationRequestSchema:
    payload = parse_json_object(event)
    try:
        return RegistrationRequestSchema.model_validate(payload)
    except PydanticValidationError as exc:
        raise InvalidRequestError() from exc


def _validate_request(request: RegistrationRequestSchema) -> None:
    require_fields(
        email=request.email,
        password=request.password,
        tenant_id=request.tenant_id,
    )
    validate_email_shape(request.email)
    validate_password_length(request.password)


def _resolve_role(user_role: str | None) -> str:
    if user_role is not None:
        return user_role
    return os.getenv("DEFAULT_USER_ROLE") or DEFAULT_USER_ROLE


def _log_registration_failure(exc: RegistrationError) -> None:
    if exc.operation == "AdminSetUserPassword":
        logger.error(
            f"User {exc.user_id} was created but its password was not set; "
            "user is left partially provisioned",
            extra={
                "user_id": exc.user_id,
                "operation": exc.operation,
                "partially_provisioned": True,
            },
            exc_info=exc,
        )
        return
    logger.error(
        f"Failed to register user: {exc.message}",
        extra={"user_id": exc.user_id, "operation": exc.operation},
        exc_info=exc,
    )


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(name)
    return value
