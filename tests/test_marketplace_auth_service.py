"""
Service-level tests for marketplace customer authentication.

The session lifecycle is shared with operators, so these focus on what is
specific to customers: registration without a tenant and token kind
separation.
"""

import pytest
from sqlalchemy import func, select

from cernio.core.exceptions import ConflictError, UnauthorizedError
from cernio.core.security import decode_access_token, decode_refresh_token
from cernio.models import MarketplaceSession, Session, Tenant
from cernio.schemas.marketplace_auth import MarketplaceRegisterRequest
from cernio.services.auth_service import auth_service
from cernio.services.marketplace_auth_service import marketplace_auth_service

from conftest import PASSWORD


def _register_request(**overrides) -> MarketplaceRegisterRequest:
    data = {
        "first_name": "Sal",
        "last_name": "Vage",
        "email": "sal@salvage.io",
        "password": PASSWORD,
        "phone": "+1 555 0100",
    }
    data.update(overrides)
    return MarketplaceRegisterRequest(**data)


@pytest.mark.asyncio
async def test_register_customer_without_tenant(db):
    customer, tokens = await marketplace_auth_service.register(db, _register_request())
    await db.commit()

    assert customer.email == "sal@salvage.io"
    assert customer.phone == "+1 555 0100"
    assert customer.is_active
    assert (await db.execute(select(func.count()).select_from(Tenant))).scalar_one() == 0

    assert decode_access_token(tokens.access_token)["type"] == "marketplace"
    assert decode_refresh_token(tokens.refresh_token)["sub"] == customer.id

    stored = await db.execute(
        select(MarketplaceSession).where(MarketplaceSession.refresh_token == tokens.refresh_token)
    )
    assert stored.scalar_one().user_id == customer.id
    assert (await db.execute(select(func.count()).select_from(Session))).scalar_one() == 0


@pytest.mark.asyncio
async def test_register_duplicate_customer_email(db, customer):
    with pytest.raises(ConflictError):
        await marketplace_auth_service.register(db, _register_request(email=customer.email))


@pytest.mark.asyncio
async def test_customer_login_and_rotation(db, customer):
    _, tokens = await marketplace_auth_service.login(db, customer.email, PASSWORD)
    await db.commit()

    rotated = await marketplace_auth_service.refresh_tokens(db, tokens.refresh_token)
    await db.commit()
    assert rotated.refresh_token != tokens.refresh_token

    with pytest.raises(UnauthorizedError):
        await marketplace_auth_service.refresh_tokens(db, tokens.refresh_token)


@pytest.mark.asyncio
async def test_operator_token_cannot_refresh_customer_session(db, operator):
    _, tokens = await auth_service.login(db, operator.email, PASSWORD)
    await db.commit()

    with pytest.raises(UnauthorizedError, match="Invalid refresh token"):
        await marketplace_auth_service.refresh_tokens(db, tokens.refresh_token)


@pytest.mark.asyncio
async def test_deactivated_customer_cannot_login(db, customer):
    customer.is_active = False
    await db.commit()

    with pytest.raises(UnauthorizedError, match="Account is deactivated"):
        await marketplace_auth_service.login(db, customer.email, PASSWORD)
    assert await marketplace_auth_service.validate_by_id(db, customer.id) is None


@pytest.mark.asyncio
async def test_customer_logout_is_idempotent(db, customer):
    _, tokens = await marketplace_auth_service.login(db, customer.email, PASSWORD)
    await db.commit()

    for _ in range(2):
        result = await marketplace_auth_service.logout(db, tokens.refresh_token)
        assert result == {"message": "Logged out successfully"}
