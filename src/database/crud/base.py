from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.base_class import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        CRUD object with default methods to Create, Read and Delete.

        Records in this bot are never updated, so there is no Update.

        **Parameters**

        * `model`: A SQLAlchemy model class
        """
        self.model = model

    async def read(self, db: AsyncSession, id_: Any) -> Optional[ModelType]:
        return await db.get(self.model, id_)

    async def read_all(self, db: AsyncSession, order_by: str | None = None) -> Sequence[ModelType]:
        query = select(self.model)
        if order_by:
            query = query.order_by(getattr(self.model, order_by))
        scalars = await db.scalars(query)
        return scalars.all()

    async def create(self, db: AsyncSession, *, obj_in: CreateSchemaType) -> ModelType:
        db_obj = self.model(**obj_in.model_dump())
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id_: Any) -> Optional[ModelType]:
        """Delete a record by primary key, returns None when there was nothing to delete."""
        obj = await db.get(self.model, id_)
        if obj is None:
            return None
        await db.delete(obj)
        await db.commit()
        return obj
