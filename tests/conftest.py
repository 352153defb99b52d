"""Pytest configuration and helpers for releaseflow tests."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date

import pytest

from releaseflow.calendar import is_working_day
from releaseflow.logger import reset_logger
from releaseflow.models import CapacityPeriod, Employee, Release, Task, TaskStatus
from releaseflow.scheduler import ReleaseSchedule

MONDAY = date(2025, 1, 6)  # A Monday; default release start in tests
FAR_FUTURE = date(2027, 12, 31)


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Leave the logger silent and handler-free after each test."""
    yield
    reset_logger()


def make_task(  # noqa: PLR0913 - test helper mirrors Task fields
    task_id: str,
    hours: float = 8.0,
    *,
    assignee: str | None = None,
    blockers: Iterable[str] = (),
    priority: int = 0,
    status: TaskStatus = TaskStatus.PENDING,
) -> Task:
    """Create a Task with sensible defaults."""
    return Task(
        id=task_id,
        name=f"Task {task_id}",
        estimated_hours=hours,
        assigned_employee_id=assignee,
        blocker_task_ids=list(blockers),
        priority=priority,
        status=status,
    )


def make_employee(
    employee_id: str,
    hours_per_day: float = 8.0,
    *,
    start: date = MONDAY,
    end: date = FAR_FUTURE,
    name: str | None = None,
) -> Employee:
    """Create an Employee with a single capacity period."""
    return Employee(
        id=employee_id,
        name=name or employee_id.title(),
        position="Engineer",
        capacity_periods=[
            CapacityPeriod(start_date=start, end_date=end, hours_per_day=hours_per_day)
        ],
    )


def make_release(
    tasks: Iterable[Task],
    employees: Iterable[Employee] = (),
    *,
    start: date = MONDAY,
    holidays: Iterable[date] = (),
    target: date | None = None,
) -> Release:
    """Create a Release around the given tasks and team."""
    return Release(
        id="rel-1",
        name="Release 1",
        start_date=start,
        target_end_date=target,
        custom_holidays=list(holidays),
        employees=list(employees),
        tasks=list(tasks),
    )


def assert_valid_schedule(result: ReleaseSchedule, release: Release) -> None:
    """Check the invariants every schedule must satisfy.

    - one record per input task
    - scheduled tasks start after their scheduled blockers end
    - no start or end date falls on a non-working day
    - release_date is set exactly when every task was scheduled
    """
    ids = [t.task_id for t in result.tasks]
    assert sorted(ids) == sorted(t.id for t in release.tasks)
    assert len(set(ids)) == len(ids)

    by_id = {t.task_id: t for t in result.tasks}
    for task in release.tasks:
        record = by_id[task.id]
        if not record.is_scheduled:
            continue
        assert record.start_date is not None
        assert record.end_date is not None
        assert record.start_date <= record.end_date
        assert is_working_day(record.start_date, release.holidays)
        assert is_working_day(record.end_date, release.holidays)
        for blocker_id in task.blocker_task_ids:
            blocker = by_id.get(blocker_id)
            if blocker is not None and blocker.is_scheduled:
                assert blocker.end_date is not None
                assert record.start_date > blocker.end_date, (
                    f"{task.id} starts {record.start_date} but blocker "
                    f"{blocker_id} ends {blocker.end_date}"
                )

    if release.tasks and all(t.is_scheduled for t in result.tasks):
        assert result.release_date == max(t.end_date for t in result.tasks if t.end_date)
    else:
        assert result.release_date is None
