"""Tests for per-employee capacity materialization and allocation."""

from datetime import date

from releaseflow.models import CapacityPeriod, Employee
from releaseflow.scheduler import CapacityDay, EmployeeCapacity
from tests.conftest import MONDAY, make_employee


def test_build_covers_working_days_only():
    employee = make_employee("e1", 6)
    capacity = EmployeeCapacity.build(employee, MONDAY, date(2025, 1, 14), {date(2025, 1, 8)})

    assert [d.day for d in capacity.days] == [
        date(2025, 1, 6),
        date(2025, 1, 7),
        date(2025, 1, 9),
        date(2025, 1, 10),
        date(2025, 1, 13),
        date(2025, 1, 14),
    ]
    assert all(d.hours_available == 6 for d in capacity.days)
    assert all(d.hours_allocated == 0 for d in capacity.days)
    assert capacity.hours_available == 36


def test_uncovered_days_have_no_hours():
    employee = make_employee("e1", 8, start=date(2025, 1, 8), end=date(2025, 1, 9))
    capacity = EmployeeCapacity.build(employee, MONDAY, date(2025, 1, 10), set())
    assert [d.hours_available for d in capacity.days] == [0, 0, 8, 8, 0]


def test_overlapping_periods_use_first_listed():
    employee = Employee(
        id="e1",
        name="Alice",
        capacity_periods=[
            CapacityPeriod(start_date=MONDAY, end_date=date(2025, 1, 7), hours_per_day=4),
            CapacityPeriod(start_date=MONDAY, end_date=date(2025, 1, 31), hours_per_day=8),
        ],
    )
    capacity = EmployeeCapacity.build(employee, MONDAY, date(2025, 1, 8), set())
    assert [d.hours_available for d in capacity.days] == [4, 4, 8]


def test_first_index_on_or_after():
    capacity = EmployeeCapacity.build(make_employee("e1"), MONDAY, date(2025, 1, 17), set())

    assert capacity.first_index_on_or_after(date(2025, 1, 1)) == 0
    assert capacity.first_index_on_or_after(MONDAY) == 0
    # Saturday resolves to the following Monday
    idx = capacity.first_index_on_or_after(date(2025, 1, 11))
    assert idx is not None
    assert capacity.days[idx].day == date(2025, 1, 13)
    assert capacity.first_index_on_or_after(date(2025, 1, 18)) is None


def test_allocate_spreads_hours_over_days():
    capacity = EmployeeCapacity.build(make_employee("e1", 4), MONDAY, date(2025, 1, 17), set())

    first = capacity.allocate(0, 10)
    assert first.complete
    assert first.start_date == date(2025, 1, 6)
    assert first.end_date == date(2025, 1, 8)
    assert [d.hours_allocated for d in capacity.days[:3]] == [4, 4, 2]

    # The next booking starts with the 2h left on Wednesday
    second = capacity.allocate(0, 6)
    assert second.start_date == date(2025, 1, 8)
    assert second.end_date == date(2025, 1, 9)
    assert capacity.hours_allocated == 16


def test_allocate_skips_zero_hour_days():
    capacity = EmployeeCapacity(
        "e1",
        [
            CapacityDay(day=date(2025, 1, 6), hours_available=0),
            CapacityDay(day=date(2025, 1, 7), hours_available=8, hours_allocated=8),
            CapacityDay(day=date(2025, 1, 8), hours_available=8),
        ],
    )
    allocation = capacity.allocate(0, 3)
    assert allocation.start_date == date(2025, 1, 8)
    assert allocation.end_date == date(2025, 1, 8)


def test_partial_allocation_is_kept():
    capacity = EmployeeCapacity.build(
        make_employee("e1", 8, end=date(2025, 1, 7)), MONDAY, date(2025, 1, 10), set()
    )
    allocation = capacity.allocate(0, 24)
    assert not allocation.complete
    assert allocation.hours_remaining == 8
    assert allocation.start_date == MONDAY
    assert allocation.end_date == date(2025, 1, 7)
    assert capacity.hours_allocated == 16


def test_empty_capacity_is_falsy():
    assert not EmployeeCapacity("e1", [])
    assert EmployeeCapacity("e1", []).first_index_on_or_after(MONDAY) is None


def test_float_leftovers_are_not_free_capacity():
    capacity = EmployeeCapacity(
        "e1",
        [
            CapacityDay(day=date(2025, 1, 6), hours_available=8, hours_allocated=8 - 1e-12),
            CapacityDay(day=date(2025, 1, 7), hours_available=8),
        ],
    )
    allocation = capacity.allocate(0, 3)
    assert allocation.start_date == date(2025, 1, 7)
    assert allocation.end_date == date(2025, 1, 7)


def test_tiny_remainder_counts_as_complete():
    capacity = EmployeeCapacity.build(make_employee("e1", 8), MONDAY, date(2025, 1, 10), set())
    allocation = capacity.allocate(0, 8 + 1e-12)
    assert allocation.complete
    assert allocation.hours_remaining == 0
    assert allocation.end_date == MONDAY
