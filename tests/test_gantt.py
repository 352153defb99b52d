"""Tests for Mermaid Gantt chart rendering."""

from datetime import date

from releaseflow.gantt import GanttRenderer, mermaid_id, render_mermaid
from releaseflow.models import TaskStatus
from releaseflow.scheduler import DEFAULT_PALETTE, UNASSIGNED_COLOR, schedule_release
from tests.conftest import make_employee, make_release, make_task


def _render(release, **kwargs):
    return render_mermaid(release, schedule_release(release), **kwargs)


def _basic_release(**kwargs):
    return make_release(
        [
            make_task("a", 8, assignee="e1", status=TaskStatus.COMPLETED),
            make_task("b", 8, blockers=["a"], status=TaskStatus.IN_PROGRESS),
        ],
        [make_employee("e1", name="Alice")],
        **kwargs,
    )


def test_mermaid_id_sanitizes_uuids():
    assert mermaid_id("a") == "t_a"
    assert mermaid_id("3f2a-91c0.x") == "t_3f2a_91c0_x"


def test_header_and_default_title():
    output = _render(_basic_release())
    lines = output.splitlines()

    assert lines[0] == "---"
    assert "gantt" in lines
    assert "    title Release 1" in lines
    assert "    dateFormat YYYY-MM-DD" in lines
    assert "    excludes weekends" in lines
    assert not any(line.startswith("    axisFormat") for line in lines)


def test_custom_title_and_axis_options():
    output = _render(_basic_release(), title="Q1 plan", axis_format="%b %d", tick_interval="1week")
    assert "    title Q1 plan" in output
    assert "    axisFormat %b %d" in output
    assert "    tickInterval 1week" in output


def test_holidays_are_excluded():
    release = _basic_release(holidays=[date(2025, 1, 20), date(2025, 1, 15)])
    assert "    excludes 2025-01-15, 2025-01-20" in _render(release)


def test_task_lines_use_exclusive_end_dates():
    output = _render(_basic_release())
    lines = output.splitlines()

    assert "    section Alice" in lines
    assert "    Task a (100%) :done, t_a, 2025-01-06, 2025-01-07" in lines
    assert "    section Unassigned" in lines
    assert "    Task b (50%) :active, t_b, 2025-01-07, 2025-01-09" in lines
    assert lines.index("    section Alice") < lines.index("    section Unassigned")


def test_pending_task_has_no_tags_or_progress():
    release = make_release([make_task("a", 8)])
    assert "    Task a :t_a, 2025-01-06, 2025-01-08" in _render(release)


def test_colors_in_theme_css():
    output = _render(_basic_release())
    color = DEFAULT_PALETTE[0]
    assert f"#t_a {{ fill: {color}; stroke: {color} }}" in output
    assert f"#t_b {{ fill: {UNASSIGNED_COLOR}; stroke: {UNASSIGNED_COLOR} }}" in output


def test_release_and_target_markers():
    output = _render(_basic_release(target=date(2025, 1, 31)))
    assert "    Release : vert, release, 2025-01-08, 0d" in output
    assert "    Target : vert, target, 2025-01-31, 0d" in output


def test_unscheduled_tasks_listed_as_comments():
    release = make_release(
        [make_task("a", 8, blockers=["elsewhere"]), make_task("b", 8)],
    )
    output = _render(release)

    assert "    %% unscheduled: Task a (a): external_blocker" in output
    assert "t_a," not in output
    assert "Release : vert" not in output


def test_empty_sections_are_omitted():
    release = make_release(
        [make_task("a", 8, assignee="e2")],
        [make_employee("e1", name="Alice"), make_employee("e2", name="Bob")],
    )
    output = _render(release)
    assert "    section Bob" in output
    assert "section Alice" not in output
    assert "section Unassigned" not in output


def test_labels_strip_mermaid_separators():
    task = make_task("a", 8).model_copy(update={"name": "Deploy: phase #1; final"})
    release = make_release([task])
    output = GanttRenderer(release, schedule_release(release)).render()
    assert "    Deploy  phase  1  final :t_a, 2025-01-06, 2025-01-08" in output


def test_team_members_sharing_a_name_get_separate_sections():
    release = make_release(
        [make_task("a", 8, assignee="e1"), make_task("b", 8, assignee="e2")],
        [make_employee("e1", name="Alex"), make_employee("e2", name="Alex")],
    )
    lines = _render(release).splitlines()

    sections = [i for i, line in enumerate(lines) if line == "    section Alex"]
    assert len(sections) == 2
    assert lines[sections[0] + 1].endswith(":t_a, 2025-01-06, 2025-01-07")
    assert lines[sections[1] + 1].endswith(":t_b, 2025-01-06, 2025-01-07")
