"""
services/tenant_service.py
--------------------------
Business logic for tenant (company) records.

Tenants are only ever created as part of operator registration, inside the
caller's transaction: this service flushes but never commits, so the tenant
row lives or dies with the founding user written next to it.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from cernio.core.logging import get_logger
from cernio.models.tenant import Tenant

logger = get_logger(__name__)


class TenantService:

    @staticmethod
    async def create_tenant(db: AsyncSession, name: str) -> Tenant:
        tenant = Tenant(name=name)
        db.add(tenant)
        await db.flush()
        logger.info("Tenant created", tenant_id=tenant.id)
        return tenant
