"""
models/tenant.py
----------------
Tenant (company) ORM model.

A tenant is a demolition company account. It is created together with its
founding operator during registration and is never created on its own.
Company names are not unique: two contractors may trade under the same name.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cernio.db.base import Base, TimestampMixin, generate_uuid


class Tenant(Base, TimestampMixin):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    users: Mapped[list["User"]] = relationship(  # noqa: F821
        "User", back_populates="tenant", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Tenant id={self.id} name={self.name}>"
