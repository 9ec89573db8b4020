"""Cognito user pool provisioning.

Wraps the two admin calls used to register a user: AdminCreateUser with a
temporary password (the welcome message suppressed) followed by
AdminSetUserPassword to make that password permanent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Optional

from botocore.exceptions import BotoCoreError
from botocore.exceptions import ClientError

from app.exceptions import RegistrationError
from app.services.aws_clients import get_cognito_idp_client
from app.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class NewUser:
    """Attributes stored on a newly created pool user."""

    user_id: str
    email: str
    tenant_id: str
    user_role: str

    def to_attributes(self) -> list[dict[str, str]]:
        return [
            {"Name": "email", "Value": self.email},
            {"Name": "email_verified", "Value": "false"},
            {"Name": "custom:tenant_id", "Value": self.tenant_id},
            {"Name": "custom:user_role", "Value": self.user_role},
        ]


class CognitoIdentityProvider:
    """Create users and set their passwords in a Cognito user pool."""

    def __init__(self, user_pool_id: str, client: Optional[Any] = None):
        self.user_pool_id = user_pool_id
        self.client = client or get_cognito_idp_client()

    def create_user(self, user: NewUser, temporary_password: str) -> dict[str, Any]:
        """Create *user* with a temporary password.

        Returns:
            The ``User`` record from the AdminCreateUser response.

        Raises:
            RegistrationError: If Cognito rejects the call.
        """
        try:
            response = self.client.admin_create_user(
                UserPoolId=self.user_pool_id,
                Username=user.user_id,
                UserAttributes=user.to_attributes(),
                DesiredDeliveryMediums=["EMAIL"],
                TemporaryPassword=temporary_password,
                MessageAction="SUPPRESS",
            )
        except (ClientError, BotoCoreError) as exc:
            raise RegistrationError(
                str(exc), operation="AdminCreateUser", user_id=user.user_id
            ) from exc

        record = response.get("User", {})
        logger.info(
            f"User created in Cognito: {user.user_id}",
            extra={"user_status": record.get("UserStatus")},
        )
        return record

    def set_password(self, user_id: str, password: str, permanent: bool = True) -> None:
        """Set the password for *user_id*.

        Raises:
            RegistrationError: If Cognito rejects the call.
        """
        try:
            self.client.admin_set_user_password(
                UserPoolId=self.user_pool_id,
                Username=user_id,
                Password=password,
                Permanent=permanent,
            )
        except (ClientError, BotoCoreError) as exc:
            raise RegistrationError(
                str(exc), operation="AdminSetUserPassword", user_id=user_id
            ) from exc

        logger.info(f"Password set for user: {user_id}")
