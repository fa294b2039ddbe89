"""Process-wide memoization of holidays and per-month day counts."""

import calendar
import datetime
from functools import lru_cache

from app.core.holidays import colombian_holidays
from app.core.types import MonthScalars
from app.core.validators import validate_period, validate_year


@lru_cache(maxsize=128)
def _holidays_for_year(year: int) -> tuple[datetime.date, ...]:
    return colombian_holidays(year)


@lru_cache(maxsize=256)
def _holidays_for_month(year: int, month: int) -> tuple[datetime.date, ...]:
    return tuple(d for d in _holidays_for_year(year) if d.month == month)


@lru_cache(maxsize=256)
def _month_scalars(year: int, month: int) -> tuple[int, int]:
    _, days_in_month = calendar.monthrange(year, month)
    sundays = sum(
        1 for day in range(1, days_in_month + 1) if datetime.date(year, month, day).weekday() == calendar.SUNDAY
    )
    return days_in_month - sundays, sundays


def holidays_for(year: int) -> tuple[datetime.date, ...]:
    """Observed holidays for a year. Later calls return the same tuple."""
    return _holidays_for_year(validate_year(year))


def holidays_for_month(year: int, month: int) -> tuple[datetime.date, ...]:
    """Observed holidays falling in one month, filtered from the year cache."""
    validate_period(year, month)
    return _holidays_for_month(year, month)


def month_scalars(year: int, month: int) -> MonthScalars:
    """
    Day counts for a month.

    ``ordinary_days`` counts every non-Sunday day, holidays included.
    """
    validate_period(year, month)
    ordinary, sundays = _month_scalars(year, month)
    return {"ordinary_days": ordinary, "sundays": sundays}


def clear_calendar_cache() -> None:
    """Evict every cached holiday set and month count."""
    _holidays_for_year.cache_clear()
    _holidays_for_month.cache_clear()
    _month_scalars.cache_clear()


def cache_stats() -> dict[str, int]:
    """Current entry counts, exposed for diagnostics and tests."""
    return {
        "years": _holidays_for_year.cache_info().currsize,
        "months": _holidays_for_month.cache_info().currsize,
        "month_scalars": _month_scalars.cache_info().currsize,
    }
