import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.crud.base import CRUDBase
from src.database.models import Infraction
from src.database.schemas.infraction import InfractionCreate

logger = logging.getLogger(__name__)


class CRUDInfraction(CRUDBase[Infraction, InfractionCreate]):
    """Infraction catalog operations."""

    async def create_unique(self, db: AsyncSession, *, obj_in: InfractionCreate) -> Optional[Infraction]:
        """Create an infraction, returns None if one with the same id already exists."""
        if await self.read(db, obj_in.id) is not None:
            return None

        try:
            return await self.create(db, obj_in=obj_in)
        except IntegrityError as exc:
            # Someone inserted the same id between the read and the insert.
            logger.debug(f"Infraction {obj_in.id} was created concurrently", exc_info=exc)
            await db.rollback()
            return None


infraction = CRUDInfraction(Infraction)
