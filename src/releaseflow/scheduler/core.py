"""Core dataclasses for the scheduling engine."""

from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum


class UnscheduledReason(str, Enum):
    """Why a task received no dates. These are results, not errors."""

    CYCLE = "cycle"  # Task sits on (or behind) a blocker cycle
    EXTERNAL_BLOCKER = "external_blocker"  # Blocker id is not a task of the release
    NO_CAPACITY = "no_capacity"  # Assignee cannot absorb the hours within the horizon


@dataclass(frozen=True)
class TaskOutcome:
    """Resolution of one task: a date range, or the reason there is none."""

    start_date: date | None = None
    end_date: date | None = None
    reason: UnscheduledReason | None = None

    @classmethod
    def scheduled(cls, start_date: date, end_date: date) -> "TaskOutcome":
        return cls(start_date=start_date, end_date=end_date)

    @classmethod
    def failed(cls, reason: UnscheduledReason) -> "TaskOutcome":
        return cls(reason=reason)

    @property
    def ok(self) -> bool:
        return self.reason is None


@dataclass
class ScheduledTask:
    """Per-task output record consumed by chart rendering."""

    task_id: str
    name: str
    start_date: date | None
    end_date: date | None
    progress: int  # 0-100, derived from status only
    dependencies: list[str]  # Blocker task ids, as given
    assigned_employee: str | None  # Display name of the assignee
    color: str
    unscheduled_reason: UnscheduledReason | None = None
    assigned_employee_id: str | None = None

    @property
    def is_scheduled(self) -> bool:
        return self.unscheduled_reason is None and self.start_date is not None


@dataclass(frozen=True)
class EmployeeColor:
    """Legend entry for one employee."""

    id: str
    name: str
    color: str


@dataclass(frozen=True)
class EmployeeLoad:
    """Hours an employee offers over the horizon and how many were booked."""

    employee_id: str
    name: str
    hours_available: float
    hours_allocated: float

    @property
    def utilization(self) -> float:
        """Fraction of available hours allocated (0.0 when nothing is available)."""
        if self.hours_available <= 0:
            return 0.0
        return self.hours_allocated / self.hours_available


def _default_tasks() -> list[ScheduledTask]:
    return []


def _default_colors() -> list[EmployeeColor]:
    return []


def _default_loads() -> list[EmployeeLoad]:
    return []


def _default_str_list() -> list[str]:
    return []


@dataclass
class ReleaseSchedule:
    """Complete result of scheduling one release.

    ``release_date`` is only set when every task was scheduled; a release with
    any unschedulable task has no meaningful projected completion.
    """

    tasks: list[ScheduledTask] = field(default_factory=_default_tasks)
    employees: list[EmployeeColor] = field(default_factory=_default_colors)
    release_date: date | None = None
    target_end_date: date | None = None
    employee_loads: list[EmployeeLoad] = field(default_factory=_default_loads)
    warnings: list[str] = field(default_factory=_default_str_list)

    @property
    def scheduled_tasks(self) -> list[ScheduledTask]:
        return [t for t in self.tasks if t.is_scheduled]

    @property
    def unscheduled_tasks(self) -> list[ScheduledTask]:
        return [t for t in self.tasks if not t.is_scheduled]

    @property
    def target_missed(self) -> bool:
        """True if the projected release date falls after the target end date."""
        if self.release_date is None or self.target_end_date is None:
            return False
        return self.release_date > self.target_end_date

    def get_task(self, task_id: str) -> ScheduledTask | None:
        for task in self.tasks:
            if task.task_id == task_id:
                return task
        return None

    def date_range(self, padding_days: int = 1) -> tuple[date, date] | None:
        """Chart window: earliest start and latest end, padded on both sides.

        Returns None when no task has dates.
        """
        scheduled = self.scheduled_tasks
        if not scheduled:
            return None
        padding = timedelta(days=padding_days)
        start = min(t.start_date for t in scheduled if t.start_date is not None)
        end = max(t.end_date for t in scheduled if t.end_date is not None)
        return start - padding, end + padding
