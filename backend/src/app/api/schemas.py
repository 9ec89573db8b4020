"""Pydantic schemas for the registration API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict

REGISTRATION_SUCCESS_MESSAGE = (
    "User registered successfully. Please check your email for verification."
)


class RegistrationRequestSchema(BaseModel):
    """Registration request body.

    Presence and type are checked here; emptiness and format are checked
    by the handler so that they report VALIDATION_ERROR.
    """

    model_config = ConfigDict(extra="ignore")

    email: str
    password: str
    tenant_id: str
    user_role: Optional[str] = None


class RegistrationResultSchema(BaseModel):
    """Registration success response."""

    user_id: str
    message: str = REGISTRATION_SUCCESS_MESSAGE
