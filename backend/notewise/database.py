import json
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from notewise.config import get_settings


def _json_serializer(value: object) -> str:
    # Keep non-ASCII tags searchable as plain text.
    return json.dumps(value, ensure_ascii=False)


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine with the JSON settings the models rely on."""
    return create_async_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        json_serializer=_json_serializer,
    )


settings = get_settings()

engine = build_engine(settings.async_database_url)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async database session.

    Usage::

        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
