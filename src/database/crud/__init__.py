from .crud_infraction import infraction
from .crud_user_infraction import user_infraction

__all__ = ["infraction", "user_infraction"]
