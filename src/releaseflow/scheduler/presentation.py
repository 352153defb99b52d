"""Display helpers attached to schedule output: colors, names, progress."""

from releaseflow.models import Employee, Release, TaskStatus

from .config import SchedulingConfig
from .core import EmployeeColor

UNKNOWN_EMPLOYEE_NAME = "Unknown"

_PROGRESS = {
    TaskStatus.COMPLETED: 100,
    TaskStatus.IN_PROGRESS: 50,
    TaskStatus.BLOCKED: 0,
    TaskStatus.PENDING: 0,
}


def task_progress(status: TaskStatus) -> int:
    """Percent complete shown on the chart; a function of status alone."""
    return _PROGRESS.get(status, 0)


def employee_color(index: int, config: SchedulingConfig) -> str:
    return config.palette[index % len(config.palette)]


def employee_colors(employees: list[Employee], config: SchedulingConfig) -> list[EmployeeColor]:
    """Legend entries, colored by each employee's position in the team list."""
    return [
        EmployeeColor(id=employee.id, name=employee.name, color=employee_color(idx, config))
        for idx, employee in enumerate(employees)
    ]


def task_color(employee_id: str | None, release: Release, config: SchedulingConfig) -> str:
    """Assignee's color, or the neutral color for unassigned/unknown assignees."""
    if employee_id:
        for idx, employee in enumerate(release.employees):
            if employee.id == employee_id:
                return employee_color(idx, config)
    return config.unassigned_color


def assignee_name(employee_id: str | None, release: Release) -> str | None:
    if not employee_id:
        return None
    employee = release.get_employee(employee_id)
    return employee.name if employee else UNKNOWN_EMPLOYEE_NAME
