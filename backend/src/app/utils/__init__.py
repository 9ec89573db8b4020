"""Utility modules for the backend application."""

from app.utils.parsers import (
    decode_body,
    parse_json_object,
    request_id_from,
)
from app.utils.responses import error_response, json_response
from app.utils.validators import (
    require_fields,
    validate_email_shape,
    validate_password_length,
)
from app.utils.logging import (
    configure_logging,
    get_logger,
    hash_for_correlation,
    mask_email,
    set_request_context,
    clear_request_context,
)

__all__ = [
    "clear_request_context",
    "configure_logging",
    "decode_body",
    "error_response",
    "get_logger",
    "hash_for_correlation",
    "json_response",
    "mask_email",
    "parse_json_object",
    "request_id_from",
    "require_fields",
    "set_request_context",
    "validate_email_shape",
    "validate_password_length",
]
