"""
models/user.py
--------------
Operator principal: a company user bound to exactly one tenant.

Email is unique across ALL tenants (it is the login key) and is stored and
matched exactly as given. The hashed_password column stores bcrypt hashes
only; plain text is never stored and never logged.
"""

from enum import Enum as PyEnum

from sqlalchemy import Boolean, ForeignKey, String, true
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cernio.db.base import Base, TimestampMixin, generate_uuid


class UserRole(str, PyEnum):
    system_admin = "system_admin"
    company_admin = "company_admin"
    project_manager = "project_manager"
    field_worker = "field_worker"
    accountant = "accountant"


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(
        String(32), nullable=False, default=UserRole.field_worker.value
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    tenant: Mapped["Tenant"] = relationship(  # noqa: F821
        "Tenant", back_populates="users", lazy="joined"
    )
    sessions: Mapped[list["Session"]] = relationship(  # noqa: F821
        "Session", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
