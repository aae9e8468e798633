from typing import Dict, Iterable, List

from pizza_pension.api.v1.schemas.dashboard import (
    CapacityCounter,
    DashboardSummary,
    DistributionEntry,
)
from pizza_pension.api.v1.schemas.registration import Registration
from pizza_pension.core.config import EVENT_CAPACITY


def _distribution(values: List[str], key) -> List[DistributionEntry]:
    # Insertion-ordered: label is the first original value seen for each key
    labels: Dict[str, str] = {}
    counts: Dict[str, int] = {}
    for value in values:
        k = key(value)
        if k not in counts:
            labels[k] = value
            counts[k] = 0
        counts[k] += 1

    total = len(values)
    return [
        DistributionEntry(name=labels[k], value=n, share=n / total)
        for k, n in counts.items()
    ]


def pizza_distribution(registrations: Iterable[Registration]) -> List[DistributionEntry]:
    """Group by exact pizza name."""
    return _distribution([r.pizza for r in registrations], key=lambda v: v)


def drink_distribution(registrations: Iterable[Registration]) -> List[DistributionEntry]:
    """
    Group free-text drinks ignoring case and surrounding whitespace,
    so "Cola", "cola" and " COLA " end up together under "Cola".
    """
    return _distribution([r.drink for r in registrations], key=lambda v: v.strip().lower())


def capacity_counter(total: int, capacity: int = EVENT_CAPACITY) -> CapacityCounter:
    # remaining is not clamped, 19 of 18 reads -1
    return CapacityCounter(
        total=total,
        capacity=capacity,
        remaining=capacity - total,
        label=f"{total} / {capacity}",
    )


def build_summary(registrations: List[Registration], capacity: int = EVENT_CAPACITY) -> DashboardSummary:
    return DashboardSummary(
        counter=capacity_counter(len(registrations), capacity),
        pizza_distribution=pizza_distribution(registrations),
        drink_distribution=drink_distribution(registrations),
    )
