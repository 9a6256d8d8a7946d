"""
models/session.py
-----------------
Refresh-token sessions, one table per principal kind.

One row exists per outstanding refresh token. A row is deleted when its token
is redeemed (rotation) or logged out, so a refresh token can be used at most
once. expires_at is set at issuance from SESSION_EXPIRE_DAYS and is checked
independently of the token's own exp claim.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cernio.db.base import Base, generate_uuid


class RefreshSessionMixin:
    """Columns shared by every session table; user_id is declared per kind."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    refresh_token: Mapped[str] = mapped_column(
        String(1024), unique=True, nullable=False, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id} user_id={self.user_id}>"


class Session(RefreshSessionMixin, Base):
    __tablename__ = "sessions"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="sessions")  # noqa: F821


class MarketplaceSession(RefreshSessionMixin, Base):
    __tablename__ = "marketplace_sessions"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("marketplace_users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user: Mapped["MarketplaceUser"] = relationship(  # noqa: F821
        "MarketplaceUser", back_populates="sessions"
    )
