"""
models/marketplace_user.py
--------------------------
Marketplace principal: a self-service salvage buyer. No tenant binding.
"""

from typing import Optional

from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cernio.db.base import Base, TimestampMixin, generate_uuid


class MarketplaceUser(Base, TimestampMixin):
    __tablename__ = "marketplace_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    sessions: Mapped[list["MarketplaceSession"]] = relationship(  # noqa: F821
        "MarketplaceSession", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<MarketplaceUser id={self.id} email={self.email}>"
