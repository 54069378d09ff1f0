"""Pydantic schemas for user registration, login and responses."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

_USERNAME_MESSAGES = {
    "string_too_short": "Username must be at least 3 characters",
    "string_too_long": "Username must be at most 50 characters",
}
_EMAIL_MESSAGES = {"value_error": "Invalid email format"}
_PASSWORD_MESSAGES = {"string_too_short": "Password must be at least 6 characters"}
_LOGIN_PASSWORD_MESSAGES = {"string_too_short": "Password is required"}


def _reword(value: Any, handler: Callable[[Any], Any], messages: dict[str, str]) -> Any:
    """Run the field's own validation and replace known error messages."""

    try:
        return handler(value)
    except ValidationError as exc:
        error_type = exc.errors()[0]["type"]
        if error_type in messages:
            raise PydanticCustomError(error_type, messages[error_type]) from exc
        raise


class RegisterInput(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("username", mode="wrap")
    @classmethod
    def _username_messages(cls, value: Any, handler: Callable[[Any], Any]) -> Any:
        return _reword(value, handler, _USERNAME_MESSAGES)

    @field_validator("email", mode="wrap")
    @classmethod
    def _email_messages(cls, value: Any, handler: Callable[[Any], Any]) -> Any:
        return _reword(value, handler, _EMAIL_MESSAGES)

    @field_validator("password", mode="wrap")
    @classmethod
    def _password_messages(cls, value: Any, handler: Callable[[Any], Any]) -> Any:
        return _reword(value, handler, _PASSWORD_MESSAGES)


class LoginInput(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="wrap")
    @classmethod
    def _email_messages(cls, value: Any, handler: Callable[[Any], Any]) -> Any:
        return _reword(value, handler, _EMAIL_MESSAGES)

    @field_validator("password", mode="wrap")
    @classmethod
    def _password_messages(cls, value: Any, handler: Callable[[Any], Any]) -> Any:
        return _reword(value, handler, _LOGIN_PASSWORD_MESSAGES)


class PublicUser(BaseModel):
    """User representation safe to hand back to callers; carries no password hash."""

    id: int
    username: str
    email: EmailStr
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    success: bool
    message: str
    user: PublicUser | None = None

    @model_validator(mode="after")
    def _user_only_on_success(self) -> "AuthResponse":
        if self.success and self.user is None:
            raise ValueError("A successful response must include the user")
        if not self.success and self.user is not None:
            raise ValueError("A failed response must not include a user")
        return self
