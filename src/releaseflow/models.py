"""Data models for releases, team members and tasks.

Records use snake_case attribute names but accept (and export) the camelCase
keys written by the browser planning tool, e.g. ``estimatedHours`` or
``blockerTaskIds``.
"""

from __future__ import annotations

import math
from datetime import date
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


def _date_only(value: Any) -> Any:
    """Reduce ISO datetime strings (``2025-01-06T00:00:00.000Z``) to their date part."""
    if isinstance(value, str) and len(value) > 10 and value[10] in "T ":
        return value[:10]
    return value


CalendarDate = Annotated[date, BeforeValidator(_date_only)]


class TaskStatus(str, Enum):
    """Task progress state. Only used for display, never for scheduling."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CapacityPeriod(_Record):
    """Daily working hours for an inclusive date range (0 hours = vacation)."""

    id: str | None = None
    start_date: CalendarDate
    end_date: CalendarDate
    hours_per_day: float = Field(ge=0)
    description: str | None = None

    @model_validator(mode="after")
    def validate_end_after_start(self) -> CapacityPeriod:
        """Ensure the range is not inverted."""
        if self.end_date < self.start_date:
            raise ValueError("end date must not be before start date")
        return self

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class Employee(_Record):
    """A team member with an ordered list of capacity periods."""

    id: str
    name: str
    position: str = ""
    capacity_periods: list[CapacityPeriod] = Field(default_factory=list[CapacityPeriod])

    @field_validator("capacity_periods", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        return [] if v is None else v

    def capacity_on(self, day: date) -> CapacityPeriod | None:
        """Return the first period (in list order) that covers ``day``.

        Periods may overlap or leave gaps; the earliest listed match wins.
        """
        for period in self.capacity_periods:
            if period.covers(day):
                return period
        return None

    def hours_on(self, day: date) -> float:
        """Hours available on ``day``; dates outside every period have none."""
        period = self.capacity_on(day)
        return period.hours_per_day if period else 0.0


class Task(_Record):
    """A unit of work with an effort estimate and blocker tasks."""

    id: str
    name: str
    estimated_hours: float = Field(ge=0)
    assigned_employee_id: str | None = None
    blocker_task_ids: list[str] = Field(default_factory=list)
    priority: int = 0  # Lower number = scheduled first
    status: TaskStatus = TaskStatus.PENDING
    actual_start_date: CalendarDate | None = None
    actual_end_date: CalendarDate | None = None

    @field_validator("blocker_task_ids", mode="before")
    @classmethod
    def ensure_id_list(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]

    @field_validator("assigned_employee_id", mode="before")
    @classmethod
    def empty_assignee_is_none(cls, v: Any) -> Any:
        return v or None

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v: Any) -> Any:
        """Numbers and numeric strings are truncated to int; anything else is 0."""
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                return 0
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return 0
        if isinstance(v, float) and not math.isfinite(v):
            return 0
        return int(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> Any:
        valid = {s.value for s in TaskStatus}
        if isinstance(v, TaskStatus) or v in valid:
            return v
        return TaskStatus.PENDING


class Release(_Record):
    """A release: its calendar plus the team and tasks it owns."""

    id: str
    name: str
    description: str | None = None
    start_date: CalendarDate
    target_end_date: CalendarDate | None = None
    custom_holidays: list[CalendarDate] = Field(default_factory=list)
    employees: list[Employee] = Field(default_factory=list[Employee])
    tasks: list[Task] = Field(default_factory=list[Task])

    @field_validator("custom_holidays", "employees", "tasks", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> Release:
        """Task and employee ids must be unique within the release."""
        for kind, ids in (
            ("task", [t.id for t in self.tasks]),
            ("employee", [e.id for e in self.employees]),
        ):
            seen: set[str] = set()
            for item_id in ids:
                if item_id in seen:
                    raise ValueError(f"Duplicate {kind} id '{item_id}' in release '{self.id}'")
                seen.add(item_id)
        return self

    @property
    def holidays(self) -> frozenset[date]:
        return frozenset(self.custom_holidays)

    def get_task(self, task_id: str) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def get_employee(self, employee_id: str) -> Employee | None:
        for employee in self.employees:
            if employee.id == employee_id:
                return employee
        return None


class ProjectData(_Record):
    """Root of an exported project file."""

    releases: list[Release] = Field(default_factory=list[Release])
    active_release_id: str | None = None

    @field_validator("releases", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        return [] if v is None else v

    @model_validator(mode="after")
    def normalize_active_release(self) -> ProjectData:
        """Point a dangling active id at the first release."""
        ids = {r.id for r in self.releases}
        if self.active_release_id is not None and self.active_release_id not in ids:
            self.active_release_id = self.releases[0].id if self.releases else None
        return self

    def get_release(self, release_id: str) -> Release | None:
        for release in self.releases:
            if release.id == release_id:
                return release
        return None
