"""Working-day calendar arithmetic.

A working day is any Monday-Friday date that is not listed as a custom
holiday. All functions operate on calendar dates; there is no time-of-day.
"""

from __future__ import annotations

from calendar import monthrange
from collections.abc import Collection, Iterator
from datetime import date, timedelta

SATURDAY = 5  # date.weekday(): Monday=0 ... Sunday=6

ONE_DAY = timedelta(days=1)

NO_HOLIDAYS: frozenset[date] = frozenset()


def is_weekend(day: date) -> bool:
    return day.weekday() >= SATURDAY


def is_holiday(day: date, holidays: Collection[date] = NO_HOLIDAYS) -> bool:
    return day in holidays


def is_working_day(day: date, holidays: Collection[date] = NO_HOLIDAYS) -> bool:
    return not is_weekend(day) and not is_holiday(day, holidays)


def next_working_day(day: date, holidays: Collection[date] = NO_HOLIDAYS) -> date:
    """Return ``day`` if it is a working day, otherwise the first one after it.

    Terminates for any finite holiday collection.
    """
    while not is_working_day(day, holidays):
        day += ONE_DAY
    return day


def add_working_days(day: date, count: int, holidays: Collection[date] = NO_HOLIDAYS) -> date:
    """Advance ``day`` by exactly ``count`` working days.

    Non-working days are skipped and do not count. ``count=0`` returns
    ``day`` unchanged, even when it is not itself a working day.
    """
    added = 0
    while added < count:
        day += ONE_DAY
        if is_working_day(day, holidays):
            added += 1
    return day


def iter_working_days(
    start: date, end: date, holidays: Collection[date] = NO_HOLIDAYS
) -> Iterator[date]:
    """Yield the working days in the inclusive range ``[start, end]``."""
    day = start
    while day <= end:
        if is_working_day(day, holidays):
            yield day
        day += ONE_DAY


def working_days_between(start: date, end: date, holidays: Collection[date] = NO_HOLIDAYS) -> int:
    """Count working days in the inclusive range (0 when ``end < start``)."""
    return sum(1 for _ in iter_working_days(start, end, holidays))


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole calendar months.

    The day of month is clamped to the length of the target month, so
    2024-02-29 plus twelve months is 2025-02-28.
    """
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
