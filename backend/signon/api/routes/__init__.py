"""Route modules for the SignOn API."""
from . import auth

__all__ = ["auth"]
