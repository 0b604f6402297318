"""Async SQLAlchemy engine and session factory.

One engine with connection pooling for the whole process; each request
gets its own AsyncSession through the get_db dependency.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tasktrack.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """Create an engine. Pool sizing only applies to server databases."""
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=settings.debug)
    return create_async_engine(
        database_url,
        echo=settings.debug,
        pool_size=5,
        max_overflow=15,
    )


engine = build_engine(settings.database_url)

# Session factory — each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
