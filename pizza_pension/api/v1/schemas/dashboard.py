from pydantic import BaseModel
from typing import List

from pizza_pension.api.v1.schemas.registration import CamelModel


class DistributionEntry(CamelModel):
    name: str
    value: int
    share: float


class CapacityCounter(CamelModel):
    total: int
    capacity: int
    remaining: int
    label: str


class DashboardSummary(CamelModel):
    counter: CapacityCounter
    pizza_distribution: List[DistributionEntry]
    drink_distribution: List[DistributionEntry]


class StatusResponse(BaseModel):
    status: str
