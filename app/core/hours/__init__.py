"""
Hours engine - holiday calendar, shift projection and realized hours.

Exports the public functions used by the routes.
"""

from .aggregation import aggregate_month, aggregate_year, build_day_hours, load_day_hours
from .cache import cache_stats, clear_calendar_cache, holidays_for, holidays_for_month, month_scalars
from .classifier import (
    classify_day,
    classify_month,
    month_summary,
    ordinary_count,
    sunday_count,
    week_of_month,
    working_days,
)
from .projection import apply_shift_to_calendar, project_shift, projected_days, summarize_projection
from .repository import HoursRepository, SqlAlchemyHoursRepository

__all__ = [
    # Calendar
    "holidays_for",
    "holidays_for_month",
    "month_scalars",
    "clear_calendar_cache",
    "cache_stats",
    "classify_day",
    "classify_month",
    "week_of_month",
    "ordinary_count",
    "sunday_count",
    "working_days",
    "month_summary",
    # Projection
    "apply_shift_to_calendar",
    "summarize_projection",
    "projected_days",
    "project_shift",
    # Realized hours
    "build_day_hours",
    "load_day_hours",
    "aggregate_month",
    "aggregate_year",
    # Persistence
    "HoursRepository",
    "SqlAlchemyHoursRepository",
]
