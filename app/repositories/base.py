"""Base repository for database operations."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)
from app.utils.helpers import utc_now

type RecordId = int | UUID


class BaseRepository[ModelT: SQLModel, CreateSchemaT: BaseModel, UpdateSchemaT: BaseModel]:
    """
    Base repository implementing common CRUD operations.

    Repositories only flush; committing is left to the caller so that a
    service can decide when a change becomes durable.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        label: Human readable entity name used in error messages.
    """

    model: type[ModelT]
    id_field: str = "id"
    label: str = "Record"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, schema: CreateSchemaT, **kwargs: Any) -> ModelT:
        """
        Create a new record in the database.

        Args:
            schema: Creation schema with data
            **kwargs: Extra column values not carried by the schema

        Returns:
            ModelT: Created database model
        """
        data = schema.model_dump(exclude_unset=True)
        data.update(kwargs)
        db_obj = self.model.model_validate(data)
        return await self._add_and_refresh(db_obj)

    async def get_by_id(self, record_id: RecordId) -> ModelT | None:
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: RecordId) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(detail=f"{self.label} with ID {record_id} not found.")
        return record

    async def update(
        self,
        record: ModelT,
        schema: UpdateSchemaT,
        exclude: set[str] | None = None,
    ) -> ModelT:
        """
        Copy the schema's fields onto an already loaded record.

        Args:
            record: Record to update
            schema: Update schema with fields to update
            exclude: Schema fields that must not be copied (e.g. ``id``)

        Returns:
            ModelT: Updated record
        """
        obj_data = schema.model_dump(exclude_unset=True, exclude=exclude or {self.id_field})
        for key, value in obj_data.items():
            setattr(record, key, value)

        if hasattr(record, "updated_at"):
            record.updated_at = utc_now()

        return await self._add_and_refresh(record)

    async def delete(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    async def exists(self, record_id: RecordId) -> bool:
        """Check if a record exists without loading it."""
        id_column = getattr(self.model, self.id_field)
        statement = select(1).where(id_column == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
            DatabaseConnectionError: If the database cannot be reached
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(detail=f"{self.label} already exists.") from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e
        return record
