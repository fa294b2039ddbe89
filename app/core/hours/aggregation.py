"""Realized hours per employee: assigned shifts adjusted by absences and novelties."""

from collections import defaultdict

from app.core.logging_config import get_logger
from app.core.models import (
    Absence,
    AssignedShift,
    CalendarDay,
    DayHours,
    DayType,
    EmployeeHourSummary,
    EmployeeInfo,
    EmployeeYearSummary,
    HourBlock,
    HourTotals,
    Novelty,
    Period,
    WorkConfig,
)
from app.core.time_utils import duration_hours, round2, split_by_band
from app.core.types import DateKey
from app.core.validators import validate_period, validate_year

from .classifier import classify_month
from .repository import HoursRepository

logger = get_logger(__name__)

_BLOCK_FIELDS = ("absence", "novelty", "diurnal_extra", "nocturnal_extra")


def absence_hours_by_date(absences: list[Absence]) -> dict[DateKey, float]:
    totals: dict[DateKey, float] = defaultdict(float)
    for absence in absences:
        totals[absence.date.isoformat()] += absence.hours
    return dict(totals)


def novelty_hours_by_date(novelties: list[Novelty]) -> dict[DateKey, float]:
    """Positive minus negative hours per date. May be negative."""
    totals: dict[DateKey, float] = defaultdict(float)
    for novelty in novelties:
        totals[novelty.date.isoformat()] += novelty.signed_hours
    return dict(totals)


def assignment_by_date(shifts: list[AssignedShift]) -> dict[DateKey, AssignedShift]:
    """At most one assignment per date; if the store returns several, the last wins."""
    result: dict[DateKey, AssignedShift] = {}
    for shift in shifts:
        key = shift.date.isoformat()
        if key in result:
            logger.warning(f"Multiple assigned shifts for employee {shift.employee_id} on {key}, keeping the last")
        result[key] = shift
    return result


def build_day_hours(
    days: list[CalendarDay],
    shifts: list[AssignedShift],
    absences: list[Absence],
    novelties: list[Novelty],
    work_config: WorkConfig,
) -> list[DayHours]:
    """
    Compute realized figures for every classified day that has an assignment.

    Days without an assignment are skipped even when they carry absences or
    novelties.
    """
    absence_map = absence_hours_by_date(absences)
    novelty_map = novelty_hours_by_date(novelties)
    assigned = assignment_by_date(shifts)
    threshold = work_config.daily_regular_hours

    result = []
    for day in days:
        key = day.date.isoformat()
        shift = assigned.get(key)
        if shift is None:
            continue

        base_worked = duration_hours(shift.start_time, shift.end_time) - shift.lunch_minutes / 60.0
        novelty = novelty_map.get(key, 0.0)
        absence = absence_map.get(key, 0.0)
        adjusted = base_worked + novelty
        extra = max(0.0, adjusted - threshold)

        diurnal, nocturnal = split_by_band(
            shift.start_time,
            shift.end_time,
            work_config.diurnal_start,
            work_config.diurnal_end,
        )
        band_total = diurnal + nocturnal
        if band_total > 0:
            diurnal_extra = round2(extra * diurnal / band_total)
            nocturnal_extra = round2(extra * nocturnal / band_total)
        else:
            diurnal_extra = nocturnal_extra = 0.0

        result.append(
            DayHours(
                date=day.date,
                day_type=day.day_type,
                start_time=shift.start_time,
                end_time=shift.end_time,
                worked_hours=round2(adjusted),
                novelty=round2(novelty),
                absence=round2(absence),
                extra_hours=round2(extra),
                diurnal_extra=diurnal_extra,
                nocturnal_extra=nocturnal_extra,
            )
        )

    return result


def summarize_day_hours(day_hours: list[DayHours]) -> dict[DayType, HourBlock]:
    totals = {day_type: dict.fromkeys(_BLOCK_FIELDS, 0.0) for day_type in DayType}

    for day in day_hours:
        block = totals[day.day_type]
        for field in _BLOCK_FIELDS:
            block[field] += getattr(day, field)

    return {
        day_type: HourBlock(**{field: round2(value) for field, value in block.items()})
        for day_type, block in totals.items()
    }


def load_day_hours(
    repo: HoursRepository,
    employee_id: int,
    year: int,
    month: int,
    work_config: WorkConfig | None = None,
) -> list[DayHours]:
    """Read one month of snapshots from the repository and compute the days."""
    validate_period(year, month)
    days = classify_month(year, month)

    if work_config is None:
        work_config = repo.active_work_config()

    shifts = repo.assigned_shifts_for_employee_month(employee_id, year, month)
    absences = repo.absences_for_employee_month(employee_id, year, month)
    novelties = repo.novelties_for_employee_month(employee_id, year, month)

    return build_day_hours(days, shifts, absences, novelties, work_config)


def aggregate_month(
    repo: HoursRepository,
    employee_id: int,
    year: int,
    month: int,
    work_config: WorkConfig | None = None,
    employee_name: str | None = None,
) -> EmployeeHourSummary:
    """
    Realized hour summary for one employee and month.

    Args:
        repo: Persistence collaborator
        employee_id: Employee to summarize
        year: Year (2000-2100)
        month: Month (1-12)
        work_config: Active configuration; read from the repository when None
        employee_name: Pre-resolved full name (optimization for yearly runs)

    Raises:
        InvalidPeriod, EmployeeNotFound, WorkConfigUnavailable
    """
    validate_period(year, month)
    if employee_name is None:
        employee_name = repo.employee_full_name(employee_id)

    day_hours = load_day_hours(repo, employee_id, year, month, work_config)
    blocks = summarize_day_hours(day_hours)

    logger.info(
        f"Aggregated hours for employee {employee_id} {year}-{month:02d}",
        extra={"extra_fields": {"employee_id": employee_id, "assigned_days": len(day_hours)}},
    )

    return EmployeeHourSummary(
        employee=EmployeeInfo(id=employee_id, full_name=employee_name),
        period=Period(year=year, month=month),
        ordinary=blocks[DayType.ORDINARY],
        sunday=blocks[DayType.SUNDAY],
        holiday=blocks[DayType.HOLIDAY],
    )


def sum_monthly_summaries(months: list[EmployeeHourSummary]) -> HourTotals:
    """Element-wise sum of monthly blocks, rounded to two decimals."""
    totals = {day_type: dict.fromkeys(_BLOCK_FIELDS, 0.0) for day_type in DayType}

    for summary in months:
        for day_type in DayType:
            block = getattr(summary, day_type.value)
            for field in _BLOCK_FIELDS:
                totals[day_type][field] += getattr(block, field)

    return HourTotals(
        **{
            day_type.value: HourBlock(**{field: round2(value) for field, value in block.items()})
            for day_type, block in totals.items()
        }
    )


def aggregate_year(repo: HoursRepository, employee_id: int, year: int) -> EmployeeYearSummary:
    """
    Twelve monthly summaries and their total.

    The employee name and work configuration are resolved once up front and
    their failures propagate. A failure inside a single month is logged and
    that month is left out of both ``monthly_data`` and ``total_hours``.
    """
    validate_year(year)
    employee_name = repo.employee_full_name(employee_id)
    work_config = repo.active_work_config()

    months: list[EmployeeHourSummary] = []
    for month in range(1, 13):
        try:
            months.append(
                aggregate_month(
                    repo,
                    employee_id,
                    year,
                    month,
                    work_config=work_config,
                    employee_name=employee_name,
                )
            )
        except Exception:
            logger.exception(f"Skipping month {year}-{month:02d} for employee {employee_id}")

    return EmployeeYearSummary(
        year=year,
        employee_id=employee_id,
        employee_name=employee_name,
        monthly_data=months,
        total_hours=sum_monthly_summaries(months),
    )
