"""releaseflow - release planning with capacity-aware Gantt scheduling."""

from .exceptions import (
    ConfigError,
    ParseError,
    ReleaseFlowError,
    ReleaseNotFoundError,
    ValidationError,
)
from .loader import dump_project, load_project, load_release
from .models import CapacityPeriod, Employee, ProjectData, Release, Task, TaskStatus
from .scheduler import (
    ReleaseSchedule,
    ReleaseScheduler,
    ScheduledTask,
    SchedulingConfig,
    UnscheduledReason,
    schedule_release,
)

__version__ = "0.1.0"

__all__ = [
    "CapacityPeriod",
    "ConfigError",
    "Employee",
    "ParseError",
    "ProjectData",
    "Release",
    "ReleaseFlowError",
    "ReleaseNotFoundError",
    "ReleaseSchedule",
    "ReleaseScheduler",
    "ScheduledTask",
    "SchedulingConfig",
    "Task",
    "TaskStatus",
    "UnscheduledReason",
    "ValidationError",
    "dump_project",
    "load_project",
    "load_release",
    "schedule_release",
]
