# flake8: noqa: D101
import enum
from functools import total_ordering

from sqlalchemy import Enum, Integer
from sqlalchemy.dialects.mysql import BIGINT
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base_class import Base


@total_ordering
class Severity(enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __lt__(self, other: "Severity") -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        members = list(Severity)
        return members.index(self) < members.index(other)


class Punishment(enum.Enum):
    BAN = "Ban"
    TIMEOUT = "Timeout"
    STRIKE = "Strike"


class Infraction(Base):
    """
    A punishment template from the infraction catalog.

    Attributes:
        id (int): Caller supplied identifier, unique and never changed once created.
        severity (Severity): How serious the infraction is.
        punishment (Punishment): What happens to a user punished with this infraction.
        duration (int): Timeout length in seconds, ignored by the other punishments.
    """
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    severity: Mapped[Severity] = mapped_column(Enum(Severity), nullable=False)
    punishment: Mapped[Punishment] = mapped_column(Enum(Punishment), nullable=False)
    duration: Mapped[int] = mapped_column(BIGINT, nullable=False, default=0)
