from app.core.config import (
    MAX_ABSENCE_HOURS_PER_DAY,
    MAX_ABSENCE_HOURS_PER_MONTH,
    MAX_SHIFT_HOURS,
    MIN_SHIFT_HOURS,
    YEAR_MAX,
    YEAR_MIN,
)
from app.core.errors import InvalidAbsence, InvalidPeriod, InvalidShiftTiming, InvalidYear
from app.core.time_utils import duration_hours, to_minutes


def validate_year(year: int) -> int:
    """Years outside [YEAR_MIN, YEAR_MAX] are rejected with InvalidYear."""
    if not YEAR_MIN <= year <= YEAR_MAX:
        raise InvalidYear(f"invalid year: {year}. Must be between {YEAR_MIN}-{YEAR_MAX}")
    return year


def validate_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidPeriod(f"invalid month: {month}. Must be between 1-12")
    return month


def validate_period(year: int, month: int) -> tuple[int, int]:
    """
    Validate a (year, month) pair.

    Both failures surface as InvalidPeriod (InvalidYear is a subclass), so
    callers only need one except clause.
    """
    return validate_year(year), validate_month(month)


def validate_shift_timing(start_time: str, end_time: str, lunch_minutes: int) -> float:
    """
    Check the template timing rules and return the gross duration in hours.

    - start and end must be well-formed and differ
    - duration (end before start means next day) must lie in [1h, 12h]
    - lunch must be non-negative and shorter than the shift
    """
    if to_minutes(start_time, "start_time") == to_minutes(end_time, "end_time"):
        raise InvalidShiftTiming("start_time and end_time must differ")

    hours = duration_hours(start_time, end_time)
    if not MIN_SHIFT_HOURS <= hours <= MAX_SHIFT_HOURS:
        raise InvalidShiftTiming(
            f"shift duration {hours:.2f}h must be between {MIN_SHIFT_HOURS:g}h and {MAX_SHIFT_HOURS:g}h"
        )

    if lunch_minutes < 0:
        raise InvalidShiftTiming("lunch_minutes cannot be negative")

    if lunch_minutes / 60.0 >= hours:
        raise InvalidShiftTiming("lunch must be shorter than the shift")

    return hours


def validate_assigned_timing(start_time: str, end_time: str, lunch_minutes: int) -> None:
    """Realized shifts only need well-formed times and a non-negative lunch."""
    to_minutes(start_time, "start_time")
    to_minutes(end_time, "end_time")
    if lunch_minutes < 0:
        raise InvalidShiftTiming("lunch_minutes cannot be negative")


def validate_diurnal_band(diurnal_start: str, diurnal_end: str) -> None:
    if to_minutes(diurnal_start, "diurnal_start") >= to_minutes(diurnal_end, "diurnal_end"):
        raise InvalidShiftTiming("diurnal_start must be before diurnal_end")


def validate_absence_hours(hours: float, month_total_before: float = 0.0) -> float:
    """
    Absence hours must be in (0, 24] and keep the monthly total within policy.

    Args:
        hours: Hours of the new absence
        month_total_before: Hours already recorded for the employee that month
    """
    if hours <= 0:
        raise InvalidAbsence("absence hours must be greater than zero")
    if hours > MAX_ABSENCE_HOURS_PER_DAY:
        raise InvalidAbsence(f"absence hours cannot exceed {MAX_ABSENCE_HOURS_PER_DAY:g} per day")
    if month_total_before + hours > MAX_ABSENCE_HOURS_PER_MONTH:
        raise InvalidAbsence(
            f"monthly absence total would be {month_total_before + hours:g}h; "
            f"the limit is {MAX_ABSENCE_HOURS_PER_MONTH:g}h"
        )
    return hours
