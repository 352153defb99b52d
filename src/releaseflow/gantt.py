"""Mermaid Gantt rendering of a computed release schedule."""

from __future__ import annotations

import re
from datetime import date

from .calendar import ONE_DAY
from .models import Release
from .scheduler import ReleaseSchedule, ScheduledTask

UNASSIGNED_SECTION = "Unassigned"

_UNSAFE_ID = re.compile(r"[^A-Za-z0-9_]")
_UNSAFE_LABEL = re.compile(r"[:#;]")


def mermaid_id(task_id: str) -> str:
    """Turn an arbitrary task id (often a UUID) into a Mermaid-safe identifier."""
    return "t_" + _UNSAFE_ID.sub("_", task_id)


def _label(task: ScheduledTask) -> str:
    label = _UNSAFE_LABEL.sub(" ", task.name).strip() or task.task_id
    if task.progress:
        label = f"{label} ({task.progress}%)"
    return label


def _fmt(day: date) -> str:
    return day.strftime("%Y-%m-%d")


class GanttRenderer:
    """Renders a ReleaseSchedule as Mermaid ``gantt`` syntax.

    Tasks are grouped into one section per assignee in team order, followed
    by unassigned tasks. Unscheduled tasks cannot be drawn and are listed as
    comments together with their reason.
    """

    def __init__(self, release: Release, schedule: ReleaseSchedule) -> None:
        self.release = release
        self.schedule = schedule

    def render(
        self,
        *,
        title: str | None = None,
        axis_format: str | None = None,
        tick_interval: str | None = None,
    ) -> str:
        """Generate the chart.

        Args:
            title: Chart title (default: release name)
            axis_format: Mermaid axisFormat string (e.g. "%b %d")
            tick_interval: Mermaid tickInterval (e.g. "1week")

        Returns:
            Mermaid gantt chart syntax
        """
        lines: list[str] = []
        lines.extend(self._frontmatter())
        lines.extend(self._header(title or self.release.name, axis_format, tick_interval))
        lines.append("")

        if self.schedule.release_date is not None:
            lines.append(f"    Release : vert, release, {_fmt(self.schedule.release_date)}, 0d")
        if self.release.target_end_date is not None:
            lines.append(f"    Target : vert, target, {_fmt(self.release.target_end_date)}, 0d")

        for section, tasks in self._sections():
            lines.append(f"    section {section}")
            for task in tasks:
                lines.append(self._task_line(task))

        unscheduled = self.schedule.unscheduled_tasks
        if unscheduled:
            lines.append("")
            for task in unscheduled:
                assert task.unscheduled_reason is not None
                lines.append(
                    f"    %% unscheduled: {task.name} ({task.task_id}): "
                    f"{task.unscheduled_reason.value}"
                )

        return "\n".join(lines)

    def _frontmatter(self) -> list[str]:
        css_rules = [
            f"#{mermaid_id(task.task_id)} {{ fill: {task.color}; stroke: {task.color} }}"
            for task in self.schedule.scheduled_tasks
        ]
        lines = ["---", "config:", "    gantt:", "        topAxis: true"]
        if css_rules:
            lines.append('    themeCSS: "')
            lines.extend(f"        {rule}  \\n" for rule in css_rules)
            lines.append('    "')
        lines.append("---")
        return lines

    def _header(
        self, title: str, axis_format: str | None, tick_interval: str | None
    ) -> list[str]:
        lines = [
            "gantt",
            f"    title {title}",
            "    dateFormat YYYY-MM-DD",
            "    excludes weekends",
        ]
        holidays = sorted(self.release.holidays)
        if holidays:
            lines.append(f"    excludes {', '.join(_fmt(d) for d in holidays)}")
        if axis_format:
            lines.append(f"    axisFormat {axis_format}")
        if tick_interval:
            lines.append(f"    tickInterval {tick_interval}")
        return lines

    def _sections(self) -> list[tuple[str, list[ScheduledTask]]]:
        """(title, tasks) per employee in team order, then unassigned tasks.

        Grouped by employee id; two members sharing a name get two sections.
        """
        grouped: dict[str | None, list[ScheduledTask]] = {
            e.id: [] for e in self.release.employees
        }
        grouped[None] = []
        for task in self.schedule.scheduled_tasks:
            grouped.setdefault(task.assigned_employee_id, []).append(task)

        titles = {e.id: e.name for e in self.release.employees}
        return [
            (
                titles.get(employee_id, UNASSIGNED_SECTION) if employee_id else UNASSIGNED_SECTION,
                sorted(tasks, key=lambda t: (t.start_date, t.end_date)),
            )
            for employee_id, tasks in grouped.items()
            if tasks
        ]

    def _task_line(self, task: ScheduledTask) -> str:
        assert task.start_date is not None
        assert task.end_date is not None
        tags: list[str] = []
        if task.progress >= 100:
            tags.append("done")
        elif task.progress > 0:
            tags.append("active")
        tags_str = ", ".join(tags) + ", " if tags else ""
        # Mermaid end dates are exclusive; schedule end dates are the last working day
        end = task.end_date + ONE_DAY
        return (
            f"    {_label(task)} :{tags_str}{mermaid_id(task.task_id)}, "
            f"{_fmt(task.start_date)}, {_fmt(end)}"
        )


def render_mermaid(
    release: Release,
    schedule: ReleaseSchedule,
    *,
    title: str | None = None,
    axis_format: str | None = None,
    tick_interval: str | None = None,
) -> str:
    """Render ``schedule`` as a Mermaid gantt chart."""
    return GanttRenderer(release, schedule).render(
        title=title, axis_format=axis_format, tick_interval=tick_interval
    )
