# app/core/types.py

"""
Custom type definitions for improved type safety across the application.

This module defines NewType wrappers for common domain concepts to prevent
mixing up similar primitive types (e.g., year vs month).
"""

import datetime
from typing import NewType, TypedDict

# Domain-specific type aliases using NewType for type safety
Year = NewType("Year", int)
Month = NewType("Month", int)

# Type aliases for common structures
DateKey = str  # "YYYY-MM-DD"


class MonthScalars(TypedDict):
    """Cached day counts for one month."""

    ordinary_days: int
    sundays: int


class MonthCalendarSummary(TypedDict):
    """Type definition for the calendar month summary."""

    year: Year
    month: Month
    holidays: list[datetime.date]
    ordinary_days: int
    sundays: int
    working_days: int
