"""
create_tables.py
----------------
One-shot script to create the tenant, user and session tables.
Schema migrations are managed outside this repository.

Usage:
    python create_tables.py
"""

import asyncio

from cernio.core.logging import configure_logging, get_logger
from cernio.db.session import engine
from cernio.models import Base  # Imports all models so metadata is populated

logger = get_logger(__name__)


async def create_all_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Tables created", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_all_tables())
