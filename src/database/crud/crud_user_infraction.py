from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.crud.base import CRUDBase
from src.database.models import UserInfraction
from src.database.schemas.infraction import UserInfractionCreate


class CRUDUserInfraction(CRUDBase[UserInfraction, UserInfractionCreate]):
    """Applied punishment (audit log) operations. Rows are append-only."""

    async def record(self, db: AsyncSession, *, user_id: int | str, infraction_id: int) -> UserInfraction:
        return await self.create(
            db, obj_in=UserInfractionCreate(user_id=str(user_id), infraction_id=infraction_id)
        )

    async def read_for_user(self, db: AsyncSession, *, user_id: int | str) -> Sequence[UserInfraction]:
        """Read all applied punishments for a user, oldest first."""
        query = (
            select(UserInfraction)
            .filter(UserInfraction.user_id == str(user_id))
            .order_by(UserInfraction.id)
        )
        scalars = await db.scalars(query)
        return scalars.all()


user_infraction = CRUDUserInfraction(UserInfraction)
