"""
Pytest configuration for school auth tests
"""

import os

os.environ.setdefault("ENVIRONMENT", "testing")

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from school_auth.utils.supabase_client import SupabaseGateway

GATEWAY_METHODS = [
    "create_auth_user",
    "delete_auth_user",
    "get_user_for_token",
    "sign_in_with_password",
    "insert_profile",
    "insert_role",
    "insert_teacher",
    "find_email_by_username",
    "has_role",
    "count_recent_bulk_attempts",
    "log_bulk_attempt",
    "list_teacher_profiles",
]

SESSION_PAYLOAD = {
    "user": {"id": "teacher-1", "email": "teacher@school.ir"},
    "session": {
        "access_token": "access-token",
        "refresh_token": "refresh-token",
        "token_type": "bearer",
        "expires_in": 3600,
    },
}


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )


def build_api_error(code: str, message: str) -> APIError:
    """PostgREST error as raised by the client library"""
    return APIError({"code": code, "message": message, "hint": None, "details": None})


def make_gateway() -> MagicMock:
    """Gateway stub whose remote calls all succeed by default"""
    gateway = MagicMock(spec=SupabaseGateway)
    for name in GATEWAY_METHODS:
        setattr(gateway, name, AsyncMock(return_value=None))

    gateway.create_auth_user.side_effect = [f"user-{n}" for n in range(1, 101)]
    gateway.get_user_for_token.return_value = {"id": "admin-1", "email": "admin@school.ir"}
    gateway.has_role.return_value = True
    gateway.count_recent_bulk_attempts.return_value = 0
    gateway.find_email_by_username.return_value = "teacher@school.ir"
    gateway.sign_in_with_password.return_value = SESSION_PAYLOAD
    gateway.list_teacher_profiles.return_value = []
    return gateway


@pytest.fixture
def gateway():
    """Privileged gateway stub"""
    return make_gateway()


@pytest.fixture
def public_gateway():
    """Anon-key gateway stub"""
    return make_gateway()


@pytest.fixture
def client(gateway, public_gateway):
    """Test client with both Supabase gateways replaced by stubs"""
    from school_auth.main import app
    from school_auth.utils.dependencies import get_admin_gateway, get_public_gateway

    app.dependency_overrides[get_admin_gateway] = lambda: gateway
    app.dependency_overrides[get_public_gateway] = lambda: public_gateway
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def bulk_user():
    """Build one valid bulk signup row"""
    def _build(n: int = 1, **overrides):
        row = {
            "email": f"user{n}@school.ir",
            "full_name": f"User {n}",
            "password": "s3cret-pass",
        }
        row.update(overrides)
        return row
    return _build


@pytest.fixture
def api_error():
    """Factory for PostgREST errors"""
    return build_api_error
