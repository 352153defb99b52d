"""Per-employee daily capacity tracking."""

import bisect
from collections.abc import Collection
from dataclasses import dataclass
from datetime import date

from releaseflow.calendar import iter_working_days
from releaseflow.logger import debug_enabled, get_logger
from releaseflow.models import Employee

logger = get_logger()

# Hour amounts at or below this are treated as zero (float sum leftovers)
EPSILON = 1e-9


@dataclass
class CapacityDay:
    """One working day of an employee's capacity."""

    day: date
    hours_available: float
    hours_allocated: float = 0.0

    @property
    def hours_free(self) -> float:
        return self.hours_available - self.hours_allocated


@dataclass(frozen=True)
class Allocation:
    """Outcome of booking hours against an employee's capacity."""

    start_date: date | None  # First day hours were consumed
    end_date: date | None  # Last day hours were consumed
    hours_remaining: float  # Hours that did not fit inside the horizon

    @property
    def complete(self) -> bool:
        return self.hours_remaining <= EPSILON


class EmployeeCapacity:
    """Working-day capacity of one employee over a bounded horizon.

    ``days`` is sorted by date and holds working days only. Allocations
    deplete ``hours_allocated`` in place, so every task booked against the
    same instance sees what earlier tasks already took.
    """

    def __init__(self, employee_id: str, days: list[CapacityDay]) -> None:
        self.employee_id = employee_id
        self.days = days

    @classmethod
    def build(
        cls,
        employee: Employee,
        start: date,
        horizon_end: date,
        holidays: Collection[date],
    ) -> "EmployeeCapacity":
        """Materialize capacity for every working day in ``[start, horizon_end]``."""
        days = [
            CapacityDay(day=day, hours_available=employee.hours_on(day))
            for day in iter_working_days(start, horizon_end, holidays)
        ]
        return cls(employee.id, days)

    def __len__(self) -> int:
        return len(self.days)

    @property
    def hours_available(self) -> float:
        return sum(d.hours_available for d in self.days)

    @property
    def hours_allocated(self) -> float:
        return sum(d.hours_allocated for d in self.days)

    def first_index_on_or_after(self, day: date) -> int | None:
        """Index of the first entry dated ``day`` or later, None past the horizon."""
        idx = bisect.bisect_left(self.days, day, key=lambda d: d.day)
        return idx if idx < len(self.days) else None

    def allocate(self, from_index: int, hours: float) -> Allocation:
        """Greedily consume ``hours`` day by day starting at ``from_index``.

        Each day gives ``min(remaining, free)`` hours. Consumption is never
        rolled back, including when the horizon runs out first.
        """
        remaining = hours
        start: date | None = None
        end: date | None = None

        for entry in self.days[from_index:]:
            if remaining <= EPSILON:
                break
            free = entry.hours_free
            if free <= EPSILON:
                continue
            take = min(remaining, free)
            entry.hours_allocated += take
            remaining -= take
            if start is None:
                start = entry.day
            end = entry.day
            if debug_enabled():
                logger.debug(
                    f"    {self.employee_id} {entry.day}: +{take:g}h "
                    f"({entry.hours_allocated:g}/{entry.hours_available:g}), "
                    f"{remaining:g}h left"
                )

        if remaining <= EPSILON:
            remaining = 0.0
        return Allocation(start_date=start, end_date=end, hours_remaining=remaining)
