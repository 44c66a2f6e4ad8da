import json
from enum import Enum
from typing import Any


class PunishCodes(Enum):
    SUCCESS = "SUCCESS"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_INFRACTION = "INVALID_INFRACTION"
    INFRASTRUCTURE_FAILURE = "INFRASTRUCTURE_FAILURE"


class SimpleResponse(object):
    """A simple response object."""

    def __init__(self, message: str, code: str | Any = None):
        self.message = message
        self.code = code

    def __str__(self):
        code = self.code.value if isinstance(self.code, Enum) else self.code
        return json.dumps(
            {"message": self.message, "code": code}, ensure_ascii=False
        )

    def __repr__(self):
        return self.__str__()
