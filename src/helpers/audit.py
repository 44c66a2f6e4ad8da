import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.database import crud
from src.database.models import UserInfraction

logger = logging.getLogger(__name__)


async def log_punishment(
    session_factory: async_sessionmaker[AsyncSession], user_id: int, infraction_id: int
) -> UserInfraction:
    """Append one applied punishment to the audit log. Database errors are left to the caller."""
    async with session_factory() as session:
        record = await crud.user_infraction.record(session, user_id=user_id, infraction_id=infraction_id)

    logger.info(
        f"Logged infraction {infraction_id} for user {user_id}",
        extra={"case_id": record.id, "created_at": repr(record.created_at)},
    )
    return record
