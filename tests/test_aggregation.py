"""
Tests for the realized hours aggregator, run against the in-memory FakeRepository.
"""

import datetime

import pytest

from app.core.errors import EmployeeNotFound, InvalidPeriod, WorkConfigUnavailable
from app.core.hours import aggregate_month, aggregate_year, build_day_hours, classify_month
from app.core.models import Absence, AssignedShift, HourBlock, Novelty, NoveltyType, WorkConfig
from conftest import EMPLOYEE_ID, FakeRepository


def assigned(day, start="07:00", end="19:00", lunch=60, month=4, year=2025):
    return AssignedShift(
        employee_id=EMPLOYEE_ID,
        date=datetime.date(year, month, day),
        start_time=start,
        end_time=end,
        lunch_minutes=lunch,
    )


def absence(day, hours, month=4):
    return Absence(employee_id=EMPLOYEE_ID, date=datetime.date(2025, month, day), hours=hours)


def novelty(day, hours, kind, month=4):
    return Novelty(employee_id=EMPLOYEE_ID, date=datetime.date(2025, month, day), hours=hours, type=kind)


class TestAggregateMonth:
    def test_absence_and_novelty_on_an_ordinary_day(self):
        repo = FakeRepository(
            shifts=[assigned(15)],
            absences=[absence(15, 2)],
            novelties=[novelty(15, 1, NoveltyType.POSITIVE)],
        )

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.employee.id == EMPLOYEE_ID
        assert summary.employee.full_name == "Ana Gómez"
        assert summary.period.year == 2025 and summary.period.month == 4
        assert summary.ordinary == HourBlock(absence=2.0, novelty=1.0, diurnal_extra=4.67, nocturnal_extra=0.0)
        assert summary.sunday == HourBlock()
        assert summary.holiday == HourBlock()

    def test_days_route_to_their_day_type(self):
        repo = FakeRepository(shifts=[assigned(15), assigned(18), assigned(20, start="22:00", end="06:00", lunch=30)])

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.ordinary.diurnal_extra == 3.67
        assert summary.holiday.diurnal_extra == 3.67
        assert summary.sunday.nocturnal_extra == 0.17
        assert summary.sunday.diurnal_extra == 0.0

    def test_negative_novelty_reduces_extras(self):
        repo = FakeRepository(shifts=[assigned(15)], novelties=[novelty(15, 2, NoveltyType.NEGATIVE)])

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.ordinary.novelty == -2.0
        assert summary.ordinary.diurnal_extra == 1.67

    def test_novelty_can_cancel_extras_entirely(self):
        repo = FakeRepository(shifts=[assigned(15)], novelties=[novelty(15, 6, NoveltyType.NEGATIVE)])

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.ordinary.diurnal_extra == 0.0
        assert summary.ordinary.nocturnal_extra == 0.0

    def test_unassigned_days_are_ignored(self):
        repo = FakeRepository(
            shifts=[assigned(15)],
            absences=[absence(16, 8)],
            novelties=[novelty(16, 3, NoveltyType.POSITIVE)],
        )

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.ordinary.absence == 0.0
        assert summary.ordinary.novelty == 0.0
        assert summary.ordinary.diurnal_extra == 3.67

    def test_last_assignment_of_a_date_wins(self):
        repo = FakeRepository(shifts=[assigned(15), assigned(15, start="08:00", end="15:00", lunch=0)])

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.ordinary.diurnal_extra == 0.0

    def test_idempotent(self):
        repo = FakeRepository(
            shifts=[assigned(day) for day in (1, 2, 3, 17, 20)],
            absences=[absence(2, 1.5)],
            novelties=[novelty(3, 0.5, NoveltyType.POSITIVE)],
        )

        first = aggregate_month(repo, EMPLOYEE_ID, 2025, 4).model_dump_json()
        second = aggregate_month(repo, EMPLOYEE_ID, 2025, 4).model_dump_json()

        assert first == second

    def test_positive_novelty_never_decreases_extras(self):
        base = FakeRepository(shifts=[assigned(15, start="13:00", end="23:00")])
        boosted = FakeRepository(
            shifts=[assigned(15, start="13:00", end="23:00")],
            novelties=[novelty(15, 1.5, NoveltyType.POSITIVE)],
        )

        before = aggregate_month(base, EMPLOYEE_ID, 2025, 4).ordinary
        after = aggregate_month(boosted, EMPLOYEE_ID, 2025, 4).ordinary

        assert after.diurnal_extra + after.nocturnal_extra >= before.diurnal_extra + before.nocturnal_extra

    def test_negative_novelty_never_increases_extras(self):
        base = FakeRepository(shifts=[assigned(15, start="13:00", end="23:00")])
        reduced = FakeRepository(
            shifts=[assigned(15, start="13:00", end="23:00")],
            novelties=[novelty(15, 0.5, NoveltyType.NEGATIVE)],
        )

        before = aggregate_month(base, EMPLOYEE_ID, 2025, 4).ordinary
        after = aggregate_month(reduced, EMPLOYEE_ID, 2025, 4).ordinary

        assert after.diurnal_extra <= before.diurnal_extra
        assert after.nocturnal_extra <= before.nocturnal_extra
        assert after.diurnal_extra + after.nocturnal_extra < before.diurnal_extra + before.nocturnal_extra

    def test_overnight_shift_into_the_morning(self):
        repo = FakeRepository(shifts=[assigned(15, start="22:00", end="08:00", lunch=0)])

        summary = aggregate_month(repo, EMPLOYEE_ID, 2025, 4)

        assert summary.ordinary.diurnal_extra == 0.0
        assert summary.ordinary.nocturnal_extra == 2.67

    def test_unknown_employee(self):
        with pytest.raises(EmployeeNotFound):
            aggregate_month(FakeRepository(), 999, 2025, 4)

    def test_missing_work_config(self):
        with pytest.raises(WorkConfigUnavailable):
            aggregate_month(FakeRepository(work_config=False), EMPLOYEE_ID, 2025, 4)

    def test_invalid_period_aborts_before_reading(self):
        repo = FakeRepository()
        with pytest.raises(InvalidPeriod):
            aggregate_month(repo, EMPLOYEE_ID, 2025, 13)
        assert repo.calls == []


class TestBuildDayHours:
    def test_day_breakdown(self):
        days = build_day_hours(
            classify_month(2025, 4),
            [assigned(15)],
            [absence(15, 2)],
            [novelty(15, 1, NoveltyType.POSITIVE)],
            WorkConfig(),
        )

        assert len(days) == 1
        day = days[0]
        assert day.date == datetime.date(2025, 4, 15)
        assert day.worked_hours == 12.0
        assert day.extra_hours == 4.67
        assert day.absence == 2.0
        assert day.novelty == 1.0


class TestAggregateYear:
    def test_sums_monthly_blocks(self):
        repo = FakeRepository(shifts=[assigned(15, month=m) for m in (1, 2, 3)])

        result = aggregate_year(repo, EMPLOYEE_ID, 2025)

        assert result.year == 2025
        assert result.employee_id == EMPLOYEE_ID
        assert result.employee_name == "Ana Gómez"
        assert len(result.monthly_data) == 12
        assert [m.period.month for m in result.monthly_data] == list(range(1, 13))
        # The 15th of January, February and March 2025 are neither Sundays nor holidays
        assert result.total_hours.ordinary.diurnal_extra == 11.01

    def test_broken_month_is_skipped(self):
        repo = FakeRepository(shifts=[assigned(15, month=m) for m in (5, 6, 7)])
        repo.failing_months = {6}

        result = aggregate_year(repo, EMPLOYEE_ID, 2025)

        assert len(result.monthly_data) == 11
        assert 6 not in [m.period.month for m in result.monthly_data]
        total = sum(m.ordinary.diurnal_extra for m in result.monthly_data)
        assert result.total_hours.ordinary.diurnal_extra == round(total, 2) == 7.34

    def test_unknown_employee_fails_the_whole_year(self):
        with pytest.raises(EmployeeNotFound):
            aggregate_year(FakeRepository(), 999, 2025)
