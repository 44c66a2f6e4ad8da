from src.database.base_class import Base

from .infraction import Infraction, Punishment, Severity
from .user_infraction import UserInfraction

__all__ = ["Base", "Infraction", "Punishment", "Severity", "UserInfraction"]
