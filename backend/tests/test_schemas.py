from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from signon.schemas.user import AuthResponse, LoginInput, PublicUser, RegisterInput

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _public_user() -> PublicUser:
    return PublicUser(id=1, username="testuser", email="test@example.com", created_at=NOW, updated_at=NOW)


def _first_message(excinfo: pytest.ExceptionInfo[ValidationError]) -> str:
    return excinfo.value.errors()[0]["msg"]


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"username": "ab", "email": "test@example.com", "password": "password123"}, "Username must be at least 3 characters"),
        ({"username": "x" * 51, "email": "test@example.com", "password": "password123"}, "Username must be at most 50 characters"),
        ({"username": "testuser", "email": "not-an-email", "password": "password123"}, "Invalid email format"),
        ({"username": "testuser", "email": "test@example.com", "password": "12345"}, "Password must be at least 6 characters"),
    ],
)
def test_register_input_reports_readable_messages(data: dict, message: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        RegisterInput.model_validate(data)
    assert _first_message(excinfo) == message


def test_register_input_accepts_boundaries() -> None:
    assert RegisterInput(username="abc", email="a@example.com", password="123456")
    assert RegisterInput(username="x" * 50, email="a@example.com", password="123456")


def test_login_input_requires_password() -> None:
    with pytest.raises(ValidationError) as excinfo:
        LoginInput.model_validate({"email": "test@example.com", "password": ""})
    assert _first_message(excinfo) == "Password is required"
    assert LoginInput(email="test@example.com", password="x")


def test_missing_field_keeps_default_error() -> None:
    with pytest.raises(ValidationError) as excinfo:
        RegisterInput.model_validate({"email": "test@example.com", "password": "password123"})
    assert excinfo.value.errors()[0]["type"] == "missing"


def test_public_user_never_carries_password_hash() -> None:
    assert "password_hash" not in PublicUser.model_fields
    assert "password_hash" not in _public_user().model_dump()


def test_auth_response_requires_user_on_success() -> None:
    with pytest.raises(ValidationError):
        AuthResponse(success=True, message="Login successful")


def test_auth_response_rejects_user_on_failure() -> None:
    with pytest.raises(ValidationError):
        AuthResponse(success=False, message="Invalid email or password", user=_public_user())


def test_failed_response_serializes_without_user() -> None:
    response = AuthResponse(success=False, message="Invalid email or password")
    assert response.model_dump(exclude_none=True) == {"success": False, "message": "Invalid email or password"}
