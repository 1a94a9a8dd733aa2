"""
Async database engine and session factory.

Every request gets its own AsyncSession through the get_db dependency.
The access gate opens its own short-lived session from AsyncSessionLocal,
so tests can swap both engine and sessionmaker on this module.
"""
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from command_center.config import settings


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session and close it when the request is done."""
    async with AsyncSessionLocal() as session:
        yield session
