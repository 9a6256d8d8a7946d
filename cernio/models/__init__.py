"""
models/__init__.py
------------------
Re-export all models so table creation can discover every table via a
single import:

    from cernio.models import Base
"""

from cernio.db.base import Base
from cernio.models.tenant import Tenant
from cernio.models.user import User, UserRole
from cernio.models.marketplace_user import MarketplaceUser
from cernio.models.session import MarketplaceSession, Session

__all__ = [
    "Base",
    "Tenant",
    "User",
    "UserRole",
    "MarketplaceUser",
    "Session",
    "MarketplaceSession",
]
