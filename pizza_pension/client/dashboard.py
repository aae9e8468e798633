from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from pizza_pension.api.v1.schemas.dashboard import CapacityCounter, DistributionEntry
from pizza_pension.api.v1.schemas.registration import Registration
from pizza_pension.api.v1.services.dashboard import (
    capacity_counter,
    drink_distribution,
    pizza_distribution,
)
from pizza_pension.api.v1.services.export import EXPORT_FILENAME, build_workbook
from pizza_pension.client.api import PizzaPensionClient
from pizza_pension.core.config import EVENT_CAPACITY, EXPORT_DATE_FORMAT


class NothingToExport(Exception):
    """Raised when an export is requested while there are no registrations."""


class AdminDashboard:
    """
    Admin view over all registrations: the list, the pizza and drink
    distributions, the seat counter, row deletion and spreadsheet export.
    """

    def __init__(self, client: PizzaPensionClient, capacity: int = EVENT_CAPACITY):
        self.client = client
        self.capacity = capacity
        self.registrations: List[Registration] = []

    async def load(self) -> List[Registration]:
        self.registrations = await self.client.list_registrations()
        logger.debug(f"Dashboard loaded {len(self.registrations)} registrations")
        return self.registrations

    @property
    def pizza_distribution(self) -> List[DistributionEntry]:
        return pizza_distribution(self.registrations)

    @property
    def drink_distribution(self) -> List[DistributionEntry]:
        return drink_distribution(self.registrations)

    @property
    def counter(self) -> CapacityCounter:
        return capacity_counter(len(self.registrations), self.capacity)

    async def delete(self, registration_id: int) -> List[Registration]:
        await self.client.delete_registration(registration_id)
        return await self.load()

    def export(
        self,
        path: Optional[Union[str, Path]] = None,
        date_format: str = EXPORT_DATE_FORMAT,
    ) -> Path:
        """
        Write the loaded registrations to an .xlsx file and return its path.
        """
        if not self.registrations:
            raise NothingToExport("Det finns inga anmälningar att exportera.")

        target = Path(path) if path is not None else Path(EXPORT_FILENAME)
        if target.is_dir():
            target = target / EXPORT_FILENAME
        build_workbook(self.registrations, date_format).save(target)
        logger.info(f"Exported {len(self.registrations)} registrations to {target}")
        return target

    async def logout(self) -> None:
        await self.client.logout()
        self.registrations = []
