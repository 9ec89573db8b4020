"""Request parsing helpers."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any
from typing import Mapping
from typing import Optional

from app.exceptions import InvalidRequestError


def decode_body(event: Mapping[str, Any]) -> str:
    """Return the raw request body, base64-decoding it when flagged.

    Raises:
        InvalidRequestError: If the body is not valid base64 or UTF-8.
    """
    raw = event.get("body") or ""
    if event.get("isBase64Encoded") and raw:
        try:
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise InvalidRequestError() from exc
    return raw


def parse_json_object(event: Mapping[str, Any]) -> dict[str, Any]:
    """Parse the request body as a JSON object.

    Duplicate keys and strings that cannot be encoded as UTF-8 (lone
    surrogates written as ``\\ud800`` escapes) make the body invalid.

    Raises:
        InvalidRequestError: If the body is empty, not JSON, or not an
            object.
    """
    raw = decode_body(event)
    if not raw:
        raise InvalidRequestError()
    try:
        payload = json.loads(raw, object_pairs_hook=_unique_keys)
        json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except (json.JSONDecodeError, UnicodeEncodeError) as exc:
        raise InvalidRequestError() from exc
    if not isinstance(payload, dict):
        raise InvalidRequestError()
    return payload


def _unique_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise InvalidRequestError()
        result[key] = value
    return result


def request_id_from(event: Mapping[str, Any], context: Any) -> Optional[str]:
    """Return the API Gateway request id, falling back to the Lambda one."""
    request_context = event.get("requestContext") or {}
    req_id = request_context.get("requestId")
    if req_id:
        return str(req_id)
    return getattr(context, "aws_request_id", None)
