"""Password hashing helpers."""
from __future__ import annotations

from typing import Iterable, Protocol

from passlib.context import CryptContext

from .config import get_settings


class PasswordHashError(RuntimeError):
    """Raised when the hashing backend cannot hash or verify a password."""


class Hasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class PasswordHasher:
    """Hash and verify user passwords using a passlib context (Argon2id by default)."""

    def __init__(self, schemes: Iterable[str] | None = None) -> None:
        if schemes is None:
            schemes = get_settings().password_schemes
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, password: str) -> str:
        try:
            return self._context.hash(password)
        except (ValueError, TypeError) as exc:
            raise PasswordHashError("Unable to hash password") from exc

    def verify(self, password: str, hashed: str) -> bool:
        # An unrecognised or corrupt stored hash is a backend fault, not a wrong password.
        try:
            return self._context.verify(password, hashed)
        except (ValueError, TypeError) as exc:
            raise PasswordHashError("Unable to verify password hash") from exc
