"""Input validation utilities."""

from __future__ import annotations

from app.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 8


def require_fields(**values: str) -> None:
    """Ensure every given value is non-empty.

    Raises:
        ValidationError: If any value is empty. The message lists every
            field that was checked.
    """
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValidationError(
            f"{_join_names(list(values))} are required",
            field=missing[0],
        )


def validate_email_shape(value: str) -> str:
    """Check that an email address contains an "@".

    This is intentionally loose; the identity provider performs its own
    format validation when the user is created.

    Raises:
        ValidationError: If the address has no "@".
    """
    if "@" not in value:
        raise ValidationError("Invalid email format", field="email")
    return value


def validate_password_length(
    value: str,
    min_length: int = MIN_PASSWORD_LENGTH,
) -> str:
    """Check a password has at least *min_length* UTF-8 bytes.

    Raises:
        ValidationError: If the password is too short.
    """
    if len(value.encode("utf-8")) < min_length:
        raise ValidationError(
            f"Password must be at least {min_length} characters long",
            field="password",
        )
    return value


def _join_names(names: list[str]) -> str:
    labels = [name.capitalize() if i == 0 else name for i, name in enumerate(names)]
    if len(labels) <= 2:
        return " and ".join(labels)
    return ", ".join(labels[:-1]) + ", and " + labels[-1]
