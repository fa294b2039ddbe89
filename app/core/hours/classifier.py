"""Classification of calendar months into ordinary days, Sundays and holidays."""

import calendar
import datetime

from app.core.logging_config import get_logger
from app.core.models import CalendarDay, DayType
from app.core.types import MonthCalendarSummary

from .cache import holidays_for_month, month_scalars

logger = get_logger(__name__)


def week_of_month(date: datetime.date) -> int:
    """1 for days 1-7, 2 for days 8-14 and so on up to 5."""
    return ((date.day - 1) // 7) + 1


def classify_day(date: datetime.date, holidays: set[datetime.date] | frozenset[datetime.date]) -> DayType:
    """
    Day type with precedence Sunday > Holiday > Ordinary.

    A holiday observed on a Sunday is a Sunday.
    """
    if date.weekday() == calendar.SUNDAY:
        return DayType.SUNDAY
    if date in holidays:
        return DayType.HOLIDAY
    return DayType.ORDINARY


def classify_month(year: int, month: int) -> list[CalendarDay]:
    """
    Build the classified days of a month, in date order.

    Raises:
        InvalidPeriod: if year or month is out of range
    """
    holidays = frozenset(holidays_for_month(year, month))
    _, days_in_month = calendar.monthrange(year, month)

    days = []
    for day in range(1, days_in_month + 1):
        date = datetime.date(year, month, day)
        days.append(
            CalendarDay(
                date=date,
                day_type=classify_day(date, holidays),
                week=week_of_month(date),
            )
        )
    return days


def ordinary_count(year: int, month: int) -> int:
    """Number of non-Sunday days, holidays included."""
    return month_scalars(year, month)["ordinary_days"]


def sunday_count(year: int, month: int) -> int:
    return month_scalars(year, month)["sundays"]


def working_days(year: int, month: int) -> int:
    """Ordinary days minus the holidays that do not fall on a Sunday."""
    holidays = holidays_for_month(year, month)
    weekday_holidays = sum(1 for d in holidays if d.weekday() != calendar.SUNDAY)
    result = max(ordinary_count(year, month) - weekday_holidays, 0)

    logger.debug(
        f"Working days {year}-{month:02d}: {result}",
        extra={
            "extra_fields": {
                "ordinary_days": ordinary_count(year, month),
                "holidays": len(holidays),
                "holidays_not_on_sunday": weekday_holidays,
            }
        },
    )
    return result


def month_summary(year: int, month: int) -> MonthCalendarSummary:
    return {
        "year": year,
        "month": month,
        "holidays": list(holidays_for_month(year, month)),
        "ordinary_days": ordinary_count(year, month),
        "sundays": sunday_count(year, month),
        "working_days": working_days(year, month),
    }
