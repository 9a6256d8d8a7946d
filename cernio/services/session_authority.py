"""
services/session_authority.py
-----------------------------
Credential verification, token issuance and refresh-token rotation, shared
by every principal kind (operators and marketplace customers).

A SessionAuthority is parameterised by a PrincipalKind: the principal model,
its session model and the `type` claim stamped into its tokens. Subclasses
only add registration, which is where the kinds genuinely differ.

Session rules enforced here:
  - Every login, register and refresh writes one new session row.
  - A refresh token is redeemed by deleting its row in a single
    DELETE ... RETURNING statement restricted to unexpired rows. That
    statement is the serialization point: when two requests race with the
    same token, only one gets a row back, the other is rejected.
  - Logout deletes by exact token match and is idempotent.

Every failure surfaces as ConflictError or UnauthorizedError; JWT decoding
errors never escape this module.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Generic, TypeVar

from jose import JWTError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.config import settings
from cernio.core.exceptions import ConflictError, UnauthorizedError
from cernio.core.logging import get_logger
from cernio.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    verify_password_async,
)
from cernio.db.base import Base

logger = get_logger(__name__)

PrincipalT = TypeVar("PrincipalT", bound=Base)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_DEACTIVATED = "Account is deactivated"
INVALID_REFRESH_TOKEN = "Invalid refresh token"
EMAIL_TAKEN = "User with this email already exists"
LOGGED_OUT = "Logged out successfully"


@dataclass(frozen=True)
class PrincipalKind:
    name: str
    principal_model: Any
    session_model: Any


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class SessionAuthority(Generic[PrincipalT]):

    def __init__(self, kind: PrincipalKind) -> None:
        self.kind = kind
        self._log = logger.bind(kind=kind.name)

    # ── Lookups ──────────────────────────────────────────────────────────────

    async def get_by_email(self, db: AsyncSession, email: str) -> PrincipalT | None:
        """Exact, case-sensitive email lookup."""
        model = self.kind.principal_model
        result = await db.execute(select(model).where(model.email == email))
        return result.scalar_one_or_none()

    async def is_email_available(self, db: AsyncSession, email: str) -> bool:
        return await self.get_by_email(db, email) is None

    async def ensure_email_available(self, db: AsyncSession, email: str) -> None:
        if not await self.is_email_available(db, email):
            self._log.info("Registration rejected", reason="email_taken")
            raise ConflictError(EMAIL_TAKEN)

    async def validate_by_id(
        self, db: AsyncSession, principal_id: str
    ) -> PrincipalT | None:
        """
        Materialise the principal behind an access token's `sub` claim.
        Returns None when the principal is gone or deactivated.
        """
        principal = await db.get(
            self.kind.principal_model, principal_id, populate_existing=True
        )
        if principal is None or not principal.is_active:
            return None
        return principal

    # ── Operations ───────────────────────────────────────────────────────────

    async def login(
        self, db: AsyncSession, email: str, password: str
    ) -> tuple[PrincipalT, TokenPair]:
        """
        Verify credentials and issue a token pair.

        Unknown email and wrong password share one message. A deactivated
        account gets its own message.
        """
        principal = await self.get_by_email(db, email)
        if principal is None:
            self._log.info("Login failed", reason="unknown_email")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not principal.is_active:
            self._log.info("Login failed", reason="deactivated", principal_id=principal.id)
            raise UnauthorizedError(ACCOUNT_DEACTIVATED)

        if not await verify_password_async(password, principal.hashed_password):
            self._log.info("Login failed", reason="bad_password", principal_id=principal.id)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        tokens = await self.issue_tokens(db, principal)
        self._log.info("Login succeeded", principal_id=principal.id)
        return principal, tokens

    async def refresh_tokens(self, db: AsyncSession, refresh_token: str) -> TokenPair:
        """Redeem a refresh token for a brand-new pair (single use)."""
        try:
            payload = decode_refresh_token(refresh_token)
        except JWTError as exc:
            self._log.info("Refresh rejected", reason="bad_signature", error=str(exc))
            raise UnauthorizedError(INVALID_REFRESH_TOKEN) from exc

        if payload.get("type") != self.kind.name:
            self._log.info("Refresh rejected", reason="wrong_kind")
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        session_model = self.kind.session_model
        result = await db.execute(
            delete(session_model)
            .where(
                session_model.refresh_token == refresh_token,
                session_model.expires_at > datetime.now(timezone.utc),
            )
            .returning(session_model.user_id)
            .execution_options(synchronize_session=False)
        )
        principal_id = result.scalar_one_or_none()
        if principal_id is None:
            self._log.info("Refresh rejected", reason="no_live_session")
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        principal = await self.validate_by_id(db, principal_id)
        if principal is None:
            self._log.info("Refresh rejected", reason="inactive", principal_id=principal_id)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN)

        tokens = await self.issue_tokens(db, principal)
        self._log.info("Session rotated", principal_id=principal.id)
        return tokens

    async def logout(self, db: AsyncSession, refresh_token: str) -> dict[str, str]:
        session_model = self.kind.session_model
        result = await db.execute(
            delete(session_model)
            .where(session_model.refresh_token == refresh_token)
            .execution_options(synchronize_session=False)
        )
        self._log.info("Logged out", sessions_removed=result.rowcount)
        return {"message": LOGGED_OUT}

    # ── Token issuance ───────────────────────────────────────────────────────

    async def issue_tokens(self, db: AsyncSession, principal: PrincipalT) -> TokenPair:
        """
        Mint an access/refresh pair and persist the refresh token as a
        session row. The row's expires_at is counted from issuance time, not
        read back from the token's exp claim.
        """
        now = datetime.now(timezone.utc)
        access_token = create_access_token(principal.id, principal.email, self.kind.name)
        refresh_token = create_refresh_token(principal.id, principal.email, self.kind.name)

        db.add(
            self.kind.session_model(
                user_id=principal.id,
                refresh_token=refresh_token,
                expires_at=now + timedelta(days=settings.SESSION_EXPIRE_DAYS),
            )
        )
        await db.flush()
        return TokenPair(access_token=access_token, refresh_token=refresh_token)
