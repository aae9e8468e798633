from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from typing import AsyncGenerator

from pizza_pension.core.config import DATABASE_URL, DB_ECHO

engine = create_async_engine(DATABASE_URL, echo=DB_ECHO)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_models() -> None:
    """Create any missing tables for the registered models."""
    # Imported for their side effect of registering tables on Base.metadata
    from pizza_pension.api.v1.models import registration, session, user  # noqa: F401
    from pizza_pension.core.db import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
