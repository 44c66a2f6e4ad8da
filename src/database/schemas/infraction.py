from pydantic import BaseModel

from src.database.models import Punishment, Severity


# Properties to receive on Infraction creation
class InfractionCreate(BaseModel):
    id: int
    severity: Severity
    punishment: Punishment
    duration: int = 0


# Properties to receive on UserInfraction creation
class UserInfractionCreate(BaseModel):
    user_id: str
    infraction_id: int
