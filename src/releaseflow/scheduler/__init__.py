"""Scheduler package - capacity-aware forward scheduling of releases.

Main entry points:
- schedule_release / ReleaseScheduler: compute a ReleaseSchedule for a Release
- schedule_order: dependency-then-priority task ordering
- EmployeeCapacity: per-employee daily capacity over the planning horizon
"""

from .capacity import Allocation, CapacityDay, EmployeeCapacity
from .config import DEFAULT_PALETTE, UNASSIGNED_COLOR, SchedulingConfig
from .core import (
    EmployeeColor,
    EmployeeLoad,
    ReleaseSchedule,
    ScheduledTask,
    TaskOutcome,
    UnscheduledReason,
)
from .engine import ReleaseScheduler, schedule_release
from .ordering import schedule_order
from .presentation import task_progress

__all__ = [
    # Core dataclasses
    "EmployeeColor",
    "EmployeeLoad",
    "ReleaseSchedule",
    "ScheduledTask",
    "TaskOutcome",
    "UnscheduledReason",
    # Configuration
    "SchedulingConfig",
    "DEFAULT_PALETTE",
    "UNASSIGNED_COLOR",
    # Capacity
    "Allocation",
    "CapacityDay",
    "EmployeeCapacity",
    # Engine
    "ReleaseScheduler",
    "schedule_release",
    "schedule_order",
    "task_progress",
]
