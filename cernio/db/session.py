"""
db/session.py
-------------
Async SQLAlchemy engine and the per-request unit of work.

Every HTTP request gets exactly one AsyncSession, and that session is one
transaction. Handlers that issue or revoke tokens commit it themselves
before returning: the exit code of a yield dependency may run after the
response has been sent, so the commit below only covers whatever a handler
left pending, and the rollback covers handlers that raise. Two auth
guarantees lean on this:

  - Registration: the tenant row and its founding user are flushed in the
    same transaction, so neither is visible without the other.
  - Refresh rotation: consuming the old session row and inserting the new
    one commit (or roll back) together.

Pool: pool_pre_ping guards against connections dropped by the database
while idle; expire_on_commit=False keeps ORM attributes readable after the
commit in async code.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cernio.core.config import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=10,
    max_overflow=20,
    pool_pre_ping=True,
    pool_recycle=1800,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding the request's transactional session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
