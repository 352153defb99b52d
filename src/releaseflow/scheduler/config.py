"""Configuration for the scheduling engine."""

from pydantic import BaseModel, Field

DEFAULT_PALETTE = [
    "#0891b2",  # cyan-600
    "#f59e0b",  # amber-500
    "#10b981",  # emerald-500
    "#8b5cf6",  # violet-500
    "#f97316",  # orange-500
    "#06b6d4",  # cyan-500
    "#84cc16",  # lime-500
    "#ec4899",  # pink-500
]

UNASSIGNED_COLOR = "#6b7280"  # gray-500


class SchedulingConfig(BaseModel):
    """Tunable constants of a scheduling pass."""

    # Capacity is materialized for this many months after the release start;
    # anything that cannot fit inside the window is reported as no_capacity.
    horizon_months: int = Field(default=12, ge=1)

    # Working-day length used to size tasks that have no assignee
    hours_per_workday: float = Field(default=8.0, gt=0)

    # Employee colors, picked by position in the release's employee list
    palette: list[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE), min_length=1)
    unassigned_color: str = UNASSIGNED_COLOR
