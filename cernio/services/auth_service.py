"""
services/auth_service.py
------------------------
Operator (company user) authentication.

Registration onboards a whole company: it creates the tenant and its first
user in the request transaction, and that user is always the company admin.
Login, refresh, logout and current-user lookups come from SessionAuthority.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.exceptions import ConflictError
from cernio.core.logging import get_logger
from cernio.core.security import hash_password_async
from cernio.models.session import Session
from cernio.models.user import User, UserRole
from cernio.schemas.auth import RegisterRequest
from cernio.services.session_authority import (
    EMAIL_TAKEN,
    PrincipalKind,
    SessionAuthority,
    TokenPair,
)
from cernio.services.tenant_service import TenantService

logger = get_logger(__name__)

OPERATOR = PrincipalKind(name="operator", principal_model=User, session_model=Session)


class AuthService(SessionAuthority[User]):

    def __init__(self) -> None:
        super().__init__(OPERATOR)

    async def register(
        self, db: AsyncSession, data: RegisterRequest
    ) -> tuple[User, TokenPair]:
        """
        Create a tenant plus its founding admin and sign them in.

        Raises ConflictError if the email is used by any operator, in any
        tenant. A duplicate that slips past the up-front check (concurrent
        registration) trips the unique index instead; the whole transaction
        is rolled back so no orphan tenant survives.
        """
        await self.ensure_email_available(db, data.email)
        hashed = await hash_password_async(data.password)

        try:
            tenant = await TenantService.create_tenant(db, data.company_name)
            user = User(
                email=data.email,
                hashed_password=hashed,
                first_name=data.first_name,
                last_name=data.last_name,
                role=UserRole.company_admin.value,
                tenant=tenant,
            )
            db.add(user)
            await db.flush()
        except IntegrityError:
            await db.rollback()
            logger.info("Registration rolled back", reason="email_taken")
            raise ConflictError(EMAIL_TAKEN)

        await db.refresh(user)
        tokens = await self.issue_tokens(db, user)
        logger.info("User registered", user_id=user.id, tenant_id=user.tenant_id)
        return user, tokens


# Singleton, shared across all requests
auth_service = AuthService()
