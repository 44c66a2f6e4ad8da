# flake8: noqa: D101
from datetime import datetime

from sqlalchemy import ForeignKey, Integer, String, func
from sqlalchemy.dialects.mysql import TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base_class import Base


class UserInfraction(Base):
    """
    An applied punishment, written once per punishment attempt and never updated.

    Attributes:
        id (int): Case number assigned by the database.
        user_id (str): Discord snowflake of the punished user.
        infraction_id (int): The catalog infraction that was applied.
        created_at (datetime): Set by the database on insert.
    """
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    infraction_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("infractions.id", ondelete="RESTRICT"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(TIMESTAMP, nullable=False, server_default=func.now())
