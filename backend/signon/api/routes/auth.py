"""Authentication endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from signon.core.dependencies import get_db, get_password_hasher
from signon.core.security import Hasher, PasswordHashError
from signon.schemas.user import AuthResponse, LoginInput, RegisterInput
from signon.services.users import login_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, response_model_exclude_none=True)
async def register(
    payload: RegisterInput,
    response: Response,
    session: AsyncSession = Depends(get_db),
    hasher: Hasher = Depends(get_password_hasher),
) -> AuthResponse:
    try:
        result = await register_user(session, payload, hasher)
        if result.success:
            await session.commit()
    except (SQLAlchemyError, PasswordHashError) as exc:
        logger.exception("User registration failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Registration failed. Please try again.",
        ) from exc

    if result.success:
        response.status_code = status.HTTP_201_CREATED
    return result


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(
    payload: LoginInput,
    session: AsyncSession = Depends(get_db),
    hasher: Hasher = Depends(get_password_hasher),
) -> AuthResponse:
    try:
        return await login_user(session, payload, hasher)
    except (SQLAlchemyError, PasswordHashError) as exc:
        logger.exception("Login failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed. Please try again.",
        ) from exc
