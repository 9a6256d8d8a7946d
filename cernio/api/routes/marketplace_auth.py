"""
api/routes/marketplace_auth.py
------------------------------
Marketplace customer authentication endpoints.

Same lifecycle as the operator endpoints; registration creates a customer
account with no company. Logout does not require an access token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.config import settings
from cernio.db.session import get_db
from cernio.dependencies import get_current_marketplace_user
from cernio.models.marketplace_user import MarketplaceUser
from cernio.schemas.auth import (
    EmailAvailability,
    LoginRequest,
    LogoutResponse,
    RefreshRequest,
    TokenResponse,
)
from cernio.schemas.marketplace_auth import (
    MarketplaceAuthResponse,
    MarketplaceRegisterRequest,
    MarketplaceUserRead,
)
from cernio.services.marketplace_auth_service import marketplace_auth_service

router = APIRouter(prefix="/marketplace-auth", tags=["Marketplace Authentication"])


def _expires_in() -> int:
    return settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


@router.get("/check-email", response_model=EmailAvailability)
async def check_email(
    db: Annotated[AsyncSession, Depends(get_db)],
    email: str = Query(..., min_length=1, max_length=320),
) -> EmailAvailability:
    available = await marketplace_auth_service.is_email_available(db, email)
    return EmailAvailability(available=available)


@router.post(
    "/register",
    response_model=MarketplaceAuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a marketplace customer account",
)
async def register(
    body: MarketplaceRegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MarketplaceAuthResponse:
    customer, tokens = await marketplace_auth_service.register(db, body)
    await db.commit()
    return MarketplaceAuthResponse(
        user=MarketplaceUserRead.model_validate(customer),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=_expires_in(),
    )


@router.post("/login", response_model=MarketplaceAuthResponse)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MarketplaceAuthResponse:
    customer, tokens = await marketplace_auth_service.login(db, body.email, body.password)
    await db.commit()
    return MarketplaceAuthResponse(
        user=MarketplaceUserRead.model_validate(customer),
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=_expires_in(),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    body: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    tokens = await marketplace_auth_service.refresh_tokens(db, body.refresh_token)
    await db.commit()
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        expires_in=_expires_in(),
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    body: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LogoutResponse:
    result = await marketplace_auth_service.logout(db, body.refresh_token)
    await db.commit()
    return LogoutResponse(**result)


@router.get("/me", response_model=MarketplaceUserRead)
async def get_me(
    current_customer: Annotated[MarketplaceUser, Depends(get_current_marketplace_user)],
) -> MarketplaceUserRead:
    return MarketplaceUserRead.model_validate(current_customer)
