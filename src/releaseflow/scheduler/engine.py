"""Forward scheduling of a release against employee capacity."""

import math
from dataclasses import dataclass
from datetime import date

from releaseflow.calendar import ONE_DAY, add_months, add_working_days, next_working_day
from releaseflow.logger import changes_enabled, checks_enabled, get_logger
from releaseflow.models import Release, Task

from .capacity import EmployeeCapacity
from .config import SchedulingConfig
from .core import (
    EmployeeLoad,
    ReleaseSchedule,
    ScheduledTask,
    TaskOutcome,
    UnscheduledReason,
)
from .ordering import schedule_order
from .presentation import assignee_name, employee_colors, task_color, task_progress

logger = get_logger()

REASON_DESCRIPTIONS = {
    UnscheduledReason.CYCLE: "it is part of (or blocked by) a dependency cycle",
    UnscheduledReason.EXTERNAL_BLOCKER: "a blocker does not exist in this release",
    UnscheduledReason.NO_CAPACITY: "the assignee has no capacity left within the planning horizon",
}


@dataclass
class _Frame:
    """A task waiting on its blockers during resolution."""

    task_id: str
    earliest: date  # Latest blocker end + 1 seen so far
    next_blocker: int = 0  # Index into the task's blocker_task_ids


class ReleaseScheduler:
    """Greedy forward scheduler for the tasks of one release.

    Tasks are visited in dependency-then-priority order. Each task starts no
    earlier than the working day after its latest blocker ends and, when
    assigned, books hours day by day against its employee's capacity before
    any later task can see it (first come, first served).

    Every call to schedule() rebuilds capacity from the release, so results
    depend only on the release snapshot. The release is never modified.
    """

    def __init__(self, release: Release, *, config: SchedulingConfig | None = None) -> None:
        """Initialize the scheduler.

        Args:
            release: Release whose tasks are scheduled
            config: Optional scheduling configuration (horizon, day length, colors)
        """
        self.release = release
        self.config = config or SchedulingConfig()
        self.holidays = release.holidays
        self.tasks = {task.id: task for task in release.tasks}
        self.horizon_end = add_months(release.start_date, self.config.horizon_months)
        self._capacities: dict[str, EmployeeCapacity] = {}
        self._outcomes: dict[str, TaskOutcome] = {}

    def schedule(self) -> ReleaseSchedule:
        """Schedule every task of the release.

        Returns:
            ReleaseSchedule with exactly one record per task
        """
        self._capacities = self._build_capacities()
        self._outcomes = {}

        order = schedule_order(self.release.tasks)
        logger.checks(
            f"Scheduling {len(order)} tasks of release '{self.release.name}' "
            f"from {self.release.start_date} (horizon ends {self.horizon_end})"
        )
        for task in order:
            self._resolve(task.id)

        records = [self._to_record(task, self._outcomes[task.id]) for task in order]
        release_date = None
        if records and all(r.is_scheduled for r in records):
            release_date = max(r.end_date for r in records if r.end_date is not None)

        result = ReleaseSchedule(
            tasks=records,
            employees=employee_colors(self.release.employees, self.config),
            release_date=release_date,
            target_end_date=self.release.target_end_date,
            employee_loads=self._employee_loads(),
        )
        result.warnings.extend(self._warnings(result))
        return result

    def _build_capacities(self) -> dict[str, EmployeeCapacity]:
        capacities: dict[str, EmployeeCapacity] = {}
        for employee in self.release.employees:
            if not employee.capacity_periods:
                capacities[employee.id] = EmployeeCapacity(employee.id, [])
                continue
            capacities[employee.id] = EmployeeCapacity.build(
                employee, self.release.start_date, self.horizon_end, self.holidays
            )
        return capacities

    def _resolve(self, task_id: str) -> TaskOutcome:
        """Resolve a task, resolving its unscheduled in-release blockers first.

        The blocker graph is walked depth first with an explicit stack, so
        long chains behind a cycle cannot exhaust the interpreter stack.
        ``resolving`` holds the tasks on the current path; meeting one of
        them again means the path closed a cycle.
        """
        outcome = self._outcomes.get(task_id)
        if outcome is not None:
            return outcome

        stack = [_Frame(task_id, earliest=self.release.start_date)]
        resolving = {task_id}
        while stack:
            frame = stack[-1]
            task = self.tasks[frame.task_id]
            outcome, descend_to = self._advance(frame, task, resolving)
            if descend_to is not None:
                resolving.add(descend_to)
                stack.append(_Frame(descend_to, earliest=self.release.start_date))
                continue

            if outcome is None:
                outcome = self._place(task, frame.earliest)
            stack.pop()
            resolving.discard(task.id)
            self._record(task.id, outcome)

        return self._outcomes[task_id]

    def _advance(
        self, frame: _Frame, task: Task, resolving: set[str]
    ) -> tuple[TaskOutcome | None, str | None]:
        """Consume the blockers of ``frame`` that are already resolved.

        Returns ``(failure, None)`` when a blocker decides the task's fate,
        ``(None, blocker_id)`` when an unresolved blocker must be resolved
        first, and ``(None, None)`` once every blocker has been seen.
        """
        while frame.next_blocker < len(task.blocker_task_ids):
            blocker_id = task.blocker_task_ids[frame.next_blocker]
            if blocker_id not in self.tasks:
                if checks_enabled():
                    logger.checks(f"  {task.id}: blocker {blocker_id} is not in the release")
                return TaskOutcome.failed(UnscheduledReason.EXTERNAL_BLOCKER), None

            blocker = self._outcomes.get(blocker_id)
            if blocker is None:
                if blocker_id in resolving:
                    if checks_enabled():
                        logger.checks(f"  Cycle detected at {blocker_id}")
                    return TaskOutcome.failed(UnscheduledReason.CYCLE), None
                return None, blocker_id

            if blocker.reason is not None:
                if checks_enabled():
                    logger.checks(
                        f"  {task.id}: blocker {blocker_id} failed ({blocker.reason.value})"
                    )
                return TaskOutcome.failed(blocker.reason), None
            assert blocker.end_date is not None
            frame.earliest = max(frame.earliest, blocker.end_date + ONE_DAY)
            frame.next_blocker += 1
        return None, None

    def _record(self, task_id: str, outcome: TaskOutcome) -> None:
        self._outcomes[task_id] = outcome
        if not changes_enabled():
            return
        if outcome.ok:
            logger.changes(f"Scheduled {task_id}: {outcome.start_date} -> {outcome.end_date}")
        else:
            assert outcome.reason is not None
            logger.changes(f"Unscheduled {task_id}: {outcome.reason.value}")

    def _place(self, task: Task, earliest: date) -> TaskOutcome:
        """Date a task whose blockers are all scheduled."""
        earliest = next_working_day(earliest, self.holidays)
        if checks_enabled():
            logger.checks(
                f"  {task.id} (priority {task.priority}, {task.estimated_hours:g}h): "
                f"earliest start {earliest}"
            )

        if not task.assigned_employee_id:
            return self._schedule_unassigned(task, earliest)
        return self._schedule_assigned(task, task.assigned_employee_id, earliest)

    def _schedule_unassigned(self, task: Task, earliest: date) -> TaskOutcome:
        """Size by whole working days; never limited by capacity."""
        days = math.ceil(task.estimated_hours / self.config.hours_per_workday)
        return TaskOutcome.scheduled(earliest, add_working_days(earliest, days, self.holidays))

    def _schedule_assigned(self, task: Task, employee_id: str, earliest: date) -> TaskOutcome:
        capacity = self._capacities.get(employee_id)
        if not capacity:
            if checks_enabled():
                logger.checks(f"  {task.id}: employee {employee_id} has no capacity records")
            return TaskOutcome.failed(UnscheduledReason.NO_CAPACITY)

        idx = capacity.first_index_on_or_after(earliest)
        if idx is None:
            if checks_enabled():
                logger.checks(f"  {task.id}: earliest start {earliest} is past the horizon")
            return TaskOutcome.failed(UnscheduledReason.NO_CAPACITY)

        if task.estimated_hours <= 0:
            day = capacity.days[idx].day
            return TaskOutcome.scheduled(day, day)

        allocation = capacity.allocate(idx, task.estimated_hours)
        if not allocation.complete:
            if checks_enabled():
                logger.checks(
                    f"  {task.id}: {allocation.hours_remaining:g}h did not fit before "
                    f"{self.horizon_end}"
                )
            return TaskOutcome.failed(UnscheduledReason.NO_CAPACITY)

        assert allocation.start_date is not None
        assert allocation.end_date is not None
        return TaskOutcome.scheduled(allocation.start_date, allocation.end_date)

    def _to_record(self, task: Task, outcome: TaskOutcome) -> ScheduledTask:
        return ScheduledTask(
            task_id=task.id,
            name=task.name,
            start_date=outcome.start_date,
            end_date=outcome.end_date,
            progress=task_progress(task.status),
            dependencies=list(task.blocker_task_ids),
            assigned_employee=assignee_name(task.assigned_employee_id, self.release),
            assigned_employee_id=task.assigned_employee_id,
            color=task_color(task.assigned_employee_id, self.release, self.config),
            unscheduled_reason=outcome.reason,
        )

    def _employee_loads(self) -> list[EmployeeLoad]:
        loads: list[EmployeeLoad] = []
        for employee in self.release.employees:
            capacity = self._capacities[employee.id]
            loads.append(
                EmployeeLoad(
                    employee_id=employee.id,
                    name=employee.name,
                    hours_available=capacity.hours_available,
                    hours_allocated=capacity.hours_allocated,
                )
            )
        return loads

    def _warnings(self, result: ReleaseSchedule) -> list[str]:
        warnings: list[str] = []
        for record in result.unscheduled_tasks:
            assert record.unscheduled_reason is not None
            warnings.append(
                f"Task '{record.task_id}' could not be scheduled: "
                f"{REASON_DESCRIPTIONS[record.unscheduled_reason]}"
            )
        if result.target_missed:
            assert result.release_date is not None
            assert result.target_end_date is not None
            days_late = (result.release_date - result.target_end_date).days
            warnings.append(
                f"Release finishes {days_late} days after its target "
                f"({result.release_date} vs {result.target_end_date})"
            )
        return warnings


def schedule_release(release: Release, config: SchedulingConfig | None = None) -> ReleaseSchedule:
    """Compute the schedule of ``release``; see ReleaseScheduler."""
    return ReleaseScheduler(release, config=config).schedule()
