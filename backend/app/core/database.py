import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from backend.app.core.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(reset: bool | None = None):
    """Create missing tables. Existing data is kept unless reset mode is on."""
    # Import models to register them with SQLAlchemy
    from backend.app.models import filament  # noqa: F401

    if reset is None:
        reset = settings.reset_db_on_startup

    async with engine.begin() as conn:
        if reset:
            logger.warning("reset_db_on_startup is enabled - dropping all filament records")
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
