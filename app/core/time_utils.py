import datetime
import logging
import math
from typing import Any

from app.core.config import MINUTES_PER_DAY, TIME_FORMAT_HM
from app.core.errors import InvalidShiftTiming

logger = logging.getLogger(__name__)


def round2(value: float) -> float:
    """Round half away from zero to two decimals, on the value scaled by 100."""
    scaled = math.floor(abs(value) * 100 + 0.5)
    if not scaled:
        return 0.0
    return math.copysign(scaled / 100, value)


def to_time(value: Any, field_name: str = "time") -> datetime.time:
    """Parse a wall-clock value.

    Handles:
    1) str times: "HH:MM" or "HH:MM:SS"
    2) datetime.time objects
    3) error handling via logging + InvalidShiftTiming (no bare except)
    """
    if isinstance(value, datetime.time):
        return value

    if isinstance(value, str):
        s = value.strip()
        if not s:
            logger.error("%s is empty string", field_name)
            raise InvalidShiftTiming(f"{field_name} is empty")

        try:
            if len(s.split(":")) == 2:
                return datetime.datetime.strptime(s, TIME_FORMAT_HM).time()
            return datetime.datetime.strptime(s, "%H:%M:%S").time()
        except ValueError as e:
            logger.warning("Failed parsing %s as time string. value=%r", field_name, value)
            raise InvalidShiftTiming(f"Invalid {field_name} format: {value!r}") from e

    logger.error("Unsupported %s type. type=%s value=%r", field_name, type(value).__name__, value)
    raise InvalidShiftTiming(f"Unsupported {field_name} type: {type(value).__name__}")


def to_minutes(value: Any, field_name: str = "time") -> int:
    """Minutes since midnight for a wall-clock value."""
    t = to_time(value, field_name)
    return t.hour * 60 + t.minute


def format_hhmm(value: Any) -> str:
    return to_time(value).strftime(TIME_FORMAT_HM)


def shift_window(start: Any, end: Any) -> tuple[int, int]:
    """
    Shift window in minutes on a synthetic day.

    If end <= start the shift crosses midnight and 24h is added to the end.
    """
    start_min = to_minutes(start, "start_time")
    end_min = to_minutes(end, "end_time")
    # Shift crosses midnight
    if end_min <= start_min:
        end_min += MINUTES_PER_DAY
    return start_min, end_min


def duration_hours(start: Any, end: Any) -> float:
    """Gross duration of a shift in hours, normalizing end-before-start to the next day."""
    start_min, end_min = shift_window(start, end)
    return (end_min - start_min) / 60.0


def split_by_band(
    start: Any,
    end: Any,
    diurnal_start: Any,
    diurnal_end: Any,
) -> tuple[float, float]:
    """
    Split a shift into diurnal and nocturnal hours.

    Each minute of the shift is classified by its wall-clock time: it is
    diurnal when strictly after ``diurnal_start`` and strictly before
    ``diurnal_end``, otherwise nocturnal. The band is open at both ends, so
    the minute starting exactly at ``diurnal_start`` is nocturnal. The shift
    lives on a single synthetic day: minutes past midnight keep counting
    upward from 1440 and, the band not wrapping, are always nocturnal.

    Returns:
        (diurnal_hours, nocturnal_hours), summing to the gross duration
    """
    start_min, end_min = shift_window(start, end)
    band_start = to_minutes(diurnal_start, "diurnal_start")
    band_end = to_minutes(diurnal_end, "diurnal_end")

    if band_end <= band_start:
        raise InvalidShiftTiming(
            f"diurnal band must start before it ends: {format_hhmm(diurnal_start)}-{format_hhmm(diurnal_end)}"
        )

    diurnal_minutes = 0
    for minute in range(start_min, end_min):
        if band_start < minute < band_end:
            diurnal_minutes += 1

    nocturnal_minutes = (end_min - start_min) - diurnal_minutes
    return diurnal_minutes / 60.0, nocturnal_minutes / 60.0
