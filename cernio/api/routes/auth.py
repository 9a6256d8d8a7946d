"""
api/routes/auth.py
------------------
Operator authentication endpoints.

GET  /auth/check-email  Is this email free for a new company account?
POST /auth/register     Onboard a company and its admin; returns tokens.
POST /auth/login        Exchange credentials for an access/refresh pair.
POST /auth/refresh      Rotate a refresh token (single use).
POST /auth/logout       Revoke a refresh token (idempotent).
GET  /auth/me           The authenticated operator's profile.

Handlers that write sessions commit before building their response, so a
returned refresh token is always already stored. Service errors
(ConflictError, UnauthorizedError) are translated to HTTP by the
application-level exception handler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.config import settings
from cernio.db.session import get_db
from cernio.dependencies import get_current_user
from cernio.models.user import User
from cernio.schemas.auth import (
    AuthResponse,
    EmailAvailability,
    LoginRequest,
    LogoutResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
)
from cernio.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _expires_in() -> int:
    return settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


@router.get(
    "/check-email",
    response_model=EmailAvailability,
    summary="Check whether an email can be used to register",
)
async def check_email(
    db: Annotated[AsyncSession, Depends(get_db)],
    email: str = Query(..., min_length=1, max_length=320),
) -> EmailAvailability:
    return EmailAvailability(available=await auth_service.is_email_available(db, email))


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new company and its admin user",
)
async def register(
    body: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    """
    Creates the company (tenant) and its first user in one transaction.
    The first user is always the company admin. Emails are unique across
    all companies.
    """
    user, tokens = await auth_service.register(db, body)
    await db.commit()
    return AuthResponse(
        user=UserRead.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=_expires_in(),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login and receive an access/refresh token pair",
)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthResponse:
    user, tokens = await auth_service.login(db, body.email, body.password)
    await db.commit()
    return AuthResponse(
        user=UserRead.model_validate(user),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=_expires_in(),
    )


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Exchange a refresh token for a new token pair",
)
async def refresh(
    body: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    tokens = await auth_service.refresh_tokens(db, body.refresh_token)
    await db.commit()
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=_expires_in(),
    )


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Revoke a refresh token",
)
async def logout(
    body: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> LogoutResponse:
    result = await auth_service.logout(db, body.refresh_token)
    await db.commit()
    return LogoutResponse(**result)


@router.get(
    "/me",
    response_model=UserRead,
    summary="Get the currently authenticated user",
)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)
