import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.core.config import Database
from src.database.models import Base

logger = logging.getLogger(__name__)


def make_session_factory(database: Database) -> async_sessionmaker[AsyncSession]:
    """Build the engine and connection pool shared by every command for the lifetime of the bot."""
    logger.debug(f"Connecting to database {database.DATABASE} at {database.HOST}:{database.PORT}")
    async_engine = create_async_engine(
        database.assemble_db_connection(), pool_size=database.POOL_SIZE, pool_pre_ping=True
    )
    return async_sessionmaker(async_engine, autoflush=True, expire_on_commit=False, class_=AsyncSession)


async def create_schema(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Create missing tables."""
    async with session_factory() as session:
        connection = await session.connection()
        await connection.run_sync(Base.metadata.create_all)
        await session.commit()
    logger.info("Database schema is up to date")
