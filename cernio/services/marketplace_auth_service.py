"""
services/marketplace_auth_service.py
------------------------------------
Marketplace customer authentication. Customers are self-service and belong
to no tenant; their tokens carry type="marketplace" and are signed with the
same secrets as operator tokens, so the type claim is what keeps the two
apart.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.exceptions import ConflictError
from cernio.core.logging import get_logger
from cernio.core.security import hash_password_async
from cernio.models.marketplace_user import MarketplaceUser
from cernio.models.session import MarketplaceSession
from cernio.schemas.marketplace_auth import MarketplaceRegisterRequest
from cernio.services.session_authority import (
    EMAIL_TAKEN,
    PrincipalKind,
    SessionAuthority,
    TokenPair,
)

logger = get_logger(__name__)

MARKETPLACE = PrincipalKind(
    name="marketplace",
    principal_model=MarketplaceUser,
    session_model=MarketplaceSession,
)


class MarketplaceAuthService(SessionAuthority[MarketplaceUser]):

    def __init__(self) -> None:
        super().__init__(MARKETPLACE)

    async def register(
        self, db: AsyncSession, data: MarketplaceRegisterRequest
    ) -> tuple[MarketplaceUser, TokenPair]:
        await self.ensure_email_available(db, data.email)
        hashed = await hash_password_async(data.password)

        customer = MarketplaceUser(
            email=data.email,
            hashed_password=hashed,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
        )
        db.add(customer)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise ConflictError(EMAIL_TAKEN)

        await db.refresh(customer)
        tokens = await self.issue_tokens(db, customer)
        logger.info("Marketplace customer registered", user_id=customer.id)
        return customer, tokens


marketplace_auth_service = MarketplaceAuthService()
