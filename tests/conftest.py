"""Pytest configuration and fixtures for backend tests.

This module provides shared fixtures for testing the registration Lambda,
including API Gateway events and a stubbed Cognito client.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Generator
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

USER_POOL_ID = 'us-east-1_TestPool1'


# --- Configuration Fixtures ---


@pytest.fixture(autouse=True)
def lambda_env(monkeypatch) -> None:
    """Environment the registration Lambda is deployed with."""
    monkeypatch.setenv('USER_POOL_ID', USER_POOL_ID)
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    monkeypatch.delenv('DEFAULT_USER_ROLE', raising=False)
    monkeypatch.delenv('CORS_ALLOWED_ORIGINS', raising=False)


@pytest.fixture(autouse=True)
def reset_client_cache() -> Generator:
    """Ensure no boto3 client leaks between tests."""
    from app.services.aws_clients import clear_client_cache

    clear_client_cache()
    yield
    clear_client_cache()


# --- API Event Fixtures ---


@pytest.fixture
def api_gateway_event() -> dict:
    """Base API Gateway event structure."""
    return {
        'httpMethod': 'POST',
        'path': '/v1/auth/register',
        'queryStringParameters': None,
        'headers': {'Content-Type': 'application/json'},
        'requestContext': {
            'requestId': str(uuid4()),
        },
        'body': None,
        'isBase64Encoded': False,
    }


@pytest.fixture
def registration_payload() -> dict:
    """A registration body that passes validation."""
    return {
        'email': 'jane.doe@example.com',
        'password': 'password123',
        'tenant_id': 'tenant-001',
        'user_role': 'Admin',
    }


@pytest.fixture
def make_event(api_gateway_event):
    """Build an API Gateway event carrying the given JSON body."""

    def _make(body, raw: bool = False) -> dict:
        event = dict(api_gateway_event)
        event['body'] = body if raw else json.dumps(body)
        return event

    return _make


# --- Mock Fixtures ---


@pytest.fixture
def cognito_client():
    """Real cognito-idp client; pair it with botocore's Stubber."""
    import boto3

    return boto3.client(
        'cognito-idp',
        region_name='us-east-1',
        aws_access_key_id='testing',
        aws_secret_access_key='testing',
    )


@pytest.fixture
def cognito_stub(cognito_client, mocker) -> Generator:
    """Stubber wired into the identity provider's client lookup."""
    from botocore.stub import Stubber

    mocker.patch(
        'app.services.identity_provider.get_cognito_idp_client',
        return_value=cognito_client,
    )
    with Stubber(cognito_client) as stubber:
        yield stubber


def created_user_response(username: str = 'generated') -> dict:
    """AdminCreateUser response body."""
    return {
        'User': {
            'Username': username,
            'UserStatus': 'FORCE_CHANGE_PASSWORD',
            'Enabled': True,
            'Attributes': [{'Name': 'email', 'Value': 'jane.doe@example.com'}],
        }
    }
