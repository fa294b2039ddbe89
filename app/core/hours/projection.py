"""Projection of a shift template's extra hours over a classified month."""

from app.core.logging_config import get_logger
from app.core.models import (
    CalendarDay,
    DayType,
    ExtraHourBlock,
    ExtraHourSummary,
    Period,
    ProjectedDay,
    ShiftTemplate,
    WorkConfig,
)
from app.core.time_utils import duration_hours, round2, split_by_band
from app.core.validators import validate_period

from .classifier import classify_month

logger = get_logger(__name__)


def template_worked_hours(template: ShiftTemplate) -> float:
    """Gross duration minus lunch."""
    return duration_hours(template.start_time, template.end_time) - template.lunch_minutes / 60.0


def apply_shift_to_calendar(
    days: list[CalendarDay],
    template: ShiftTemplate,
    work_config: WorkConfig,
) -> list[ProjectedDay]:
    """
    Apply a template to every day of a month and keep the days with extras.

    Lunch is deducted when comparing against the daily threshold but not
    when splitting into bands: the split uses the full wall-clock window.

    Args:
        days: Classified days of the month
        template: Shift template assumed to be worked every day
        work_config: Diurnal band and daily threshold

    Returns:
        One ProjectedDay per day whose worked hours exceed the threshold
    """
    threshold = work_config.daily_regular_hours
    total_worked = template_worked_hours(template)

    if total_worked <= threshold:
        logger.debug(
            f"Template {template.name!r} works {total_worked:.2f}h <= {threshold}h, no extras",
        )
        return []

    extra = total_worked - threshold
    diurnal, nocturnal = split_by_band(
        template.start_time,
        template.end_time,
        work_config.diurnal_start,
        work_config.diurnal_end,
    )
    scale = extra / (diurnal + nocturnal)
    diurnal_extra = round2(scale * diurnal)
    nocturnal_extra = round2(scale * nocturnal)

    return [
        ProjectedDay(
            date=day.date,
            day_type=day.day_type,
            worked_hours=round2(total_worked),
            diurnal_extra=diurnal_extra,
            nocturnal_extra=nocturnal_extra,
        )
        for day in days
    ]


def summarize_projection(projected: list[ProjectedDay], year: int, month: int) -> ExtraHourSummary:
    """Sum projected days into one block per day type, rounded at the end."""
    totals = {day_type: [0.0, 0.0] for day_type in DayType}

    for day in projected:
        totals[day.day_type][0] += day.diurnal_extra
        totals[day.day_type][1] += day.nocturnal_extra

    blocks = {
        day_type: ExtraHourBlock(diurnal_extra=round2(d), nocturnal_extra=round2(n))
        for day_type, (d, n) in totals.items()
    }

    return ExtraHourSummary(
        period=Period(year=year, month=month),
        ordinary=blocks[DayType.ORDINARY],
        sunday=blocks[DayType.SUNDAY],
        holiday=blocks[DayType.HOLIDAY],
    )


def projected_days(template: ShiftTemplate, year: int, month: int, work_config: WorkConfig) -> list[ProjectedDay]:
    validate_period(year, month)
    return apply_shift_to_calendar(classify_month(year, month), template, work_config)


def project_shift(template: ShiftTemplate, year: int, month: int, work_config: WorkConfig) -> ExtraHourSummary:
    """
    Estimate the extra hours a template produces in a month, per day type.

    Raises:
        InvalidPeriod: if year or month is out of range
        InvalidShiftTiming: if a template or band time is malformed
    """
    projected = projected_days(template, year, month, work_config)
    summary = summarize_projection(projected, year, month)

    logger.info(
        f"Projected template {template.id} for {year}-{month:02d}",
        extra={
            "extra_fields": {
                "shift_id": template.id,
                "projected_days": len(projected),
                "ordinary": summary.ordinary.model_dump(),
                "sunday": summary.sunday.model_dump(),
                "holiday": summary.holiday.model_dump(),
            }
        },
    )
    return summary
