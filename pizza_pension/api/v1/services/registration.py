from datetime import datetime, timezone
from typing import List

from loguru import logger
from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from pizza_pension.api.v1.models.registration import Registration
from pizza_pension.api.v1.schemas.registration import (
    RegistrationCreate,
    Registration as RegistrationSchema
)
from pizza_pension.core.errors import StorageError


class RegistrationService:
    """
    Persistence for registrations: insert, list everything, delete by id.
    There is deliberately no update.
    """

    def __init__(self, db: AsyncSession):
        if db is None:
            raise ValueError("Database session cannot be None")
        self.db = db

    async def insert(self, registration_in: RegistrationCreate) -> RegistrationSchema:
        registration = Registration(
            **registration_in.model_dump(),
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        try:
            self.db.add(registration)
            await self.db.commit()
            await self.db.refresh(registration)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to store registration for {registration_in.email}: {e}")
            raise StorageError("Could not store registration") from e
        logger.info(f"Registration {registration.id} stored ({registration.pizza}, {registration.drink})")
        return RegistrationSchema.model_validate(registration)

    async def list_all(self) -> List[RegistrationSchema]:
        try:
            result = await self.db.execute(select(Registration).order_by(Registration.id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to list registrations: {e}")
            raise StorageError("Could not list registrations") from e
        return [RegistrationSchema.model_validate(reg) for reg in result.scalars().all()]

    async def delete_by_id(self, registration_id: int) -> bool:
        """
        Remove the registration if it exists. Unknown ids are a no-op.
        Returns whether a row was removed.
        """
        try:
            result = await self.db.execute(
                delete(Registration).where(Registration.id == registration_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to delete registration {registration_id}: {e}")
            raise StorageError("Could not delete registration") from e
        deleted = bool(result.rowcount)
        if deleted:
            logger.info(f"Registration {registration_id} deleted")
        else:
            logger.debug(f"Registration {registration_id} not found, nothing deleted")
        return deleted

    async def count(self) -> int:
        try:
            result = await self.db.execute(select(func.count()).select_from(Registration))
        except SQLAlchemyError as e:
            raise StorageError("Could not count registrations") from e
        return result.scalar_one()
