import re
from typing import Any

from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    """
    Base class for SQLAlchemy declarative models, providing automatic table names derived from the class name.

    Attributes:
        id (Any): The primary key field for the table.
        __name__ (str): The name of the class used to generate the table name.
    """

    id: Any
    __name__: str

    # noinspection PyMethodParameters
    @declared_attr.directive
    def __tablename__(cls) -> str:  # noqa: N805
        """
        Generate a plural, snake_case table name from the class name.

        Returns:
            str: e.g. ``UserInfraction`` becomes ``user_infractions``.
        """
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower() + "s"
