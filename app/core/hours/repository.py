"""
Read-side persistence seam for the hours engine.

The engine depends only on the six read operations of ``HoursRepository``.
``SqlAlchemyHoursRepository`` implements them over the ORM and returns
frozen pydantic snapshots, so nothing the engine holds is attached to a
session.
"""

import calendar
import datetime
from typing import Protocol

from sqlalchemy.orm import Session

from app.core.errors import EmployeeNotFound, ShiftNotFound, WorkConfigUnavailable
from app.core.models import Absence, AssignedShift, Novelty, NoveltyType, ShiftPeriod, ShiftTemplate, WorkConfig
from app.core.time_utils import format_hhmm
from app.database import database as db_module


class HoursRepository(Protocol):
    def assigned_shifts_for_employee_month(self, employee_id: int, year: int, month: int) -> list[AssignedShift]: ...

    def absences_for_employee_month(self, employee_id: int, year: int, month: int) -> list[Absence]: ...

    def novelties_for_employee_month(self, employee_id: int, year: int, month: int) -> list[Novelty]: ...

    def shift_template_by_id(self, shift_id: int) -> ShiftTemplate: ...

    def employee_full_name(self, employee_id: int) -> str: ...

    def active_work_config(self) -> WorkConfig: ...


def month_bounds(year: int, month: int) -> tuple[datetime.date, datetime.date]:
    """First and last date of a month."""
    _, last_day = calendar.monthrange(year, month)
    return datetime.date(year, month, 1), datetime.date(year, month, last_day)


def to_shift_template(row: db_module.Shift) -> ShiftTemplate:
    return ShiftTemplate(
        id=row.id,
        store_id=row.store_id,
        name=row.name,
        period=ShiftPeriod(row.period.value),
        start_time=format_hhmm(row.start_time),
        end_time=format_hhmm(row.end_time),
        lunch_minutes=row.lunch_minutes or 0,
        is_active=bool(row.is_active),
    )


def to_assigned_shift(row: db_module.AssignedShift) -> AssignedShift:
    return AssignedShift(
        employee_id=row.employee_id,
        date=row.date,
        start_time=format_hhmm(row.start_time),
        end_time=format_hhmm(row.end_time),
        lunch_minutes=row.lunch_minutes or 0,
    )


def to_absence(row: db_module.Absence) -> Absence:
    return Absence(employee_id=row.employee_id, date=row.date, hours=row.hours, reason=row.reason)


def to_novelty(row: db_module.Novelty) -> Novelty:
    return Novelty(
        employee_id=row.employee_id,
        date=row.date,
        hours=row.hours,
        type=NoveltyType(row.type.value),
        comment=row.comment,
    )


def to_work_config(row: db_module.WorkConfig) -> WorkConfig:
    return WorkConfig(
        diurnal_start=format_hhmm(row.diurnal_start),
        diurnal_end=format_hhmm(row.diurnal_end),
        daily_regular_hours=row.daily_regular_hours,
        is_active=bool(row.is_active),
    )


class SqlAlchemyHoursRepository:
    """HoursRepository backed by a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def _month_rows(self, model, employee_id: int, year: int, month: int):
        first, last = month_bounds(year, month)
        return (
            self.session.query(model)
            .filter(model.employee_id == employee_id)
            .filter(model.date >= first)
            .filter(model.date <= last)
            .order_by(model.date, model.id)
            .all()
        )

    def assigned_shifts_for_employee_month(self, employee_id: int, year: int, month: int) -> list[AssignedShift]:
        rows = self._month_rows(db_module.AssignedShift, employee_id, year, month)
        return [to_assigned_shift(row) for row in rows]

    def absences_for_employee_month(self, employee_id: int, year: int, month: int) -> list[Absence]:
        rows = self._month_rows(db_module.Absence, employee_id, year, month)
        return [to_absence(row) for row in rows]

    def novelties_for_employee_month(self, employee_id: int, year: int, month: int) -> list[Novelty]:
        rows = self._month_rows(db_module.Novelty, employee_id, year, month)
        return [to_novelty(row) for row in rows]

    def shift_template_by_id(self, shift_id: int) -> ShiftTemplate:
        row = self.session.get(db_module.Shift, shift_id)
        if row is None:
            raise ShiftNotFound(f"shift {shift_id} not found")
        return to_shift_template(row)

    def employee_full_name(self, employee_id: int) -> str:
        row = self.session.get(db_module.User, employee_id)
        if row is None:
            raise EmployeeNotFound(f"employee {employee_id} not found")
        return row.full_name

    def active_work_config(self) -> WorkConfig:
        row = (
            self.session.query(db_module.WorkConfig)
            .filter(db_module.WorkConfig.is_active.is_(True))
            .order_by(db_module.WorkConfig.id.desc())
            .first()
        )
        if row is None:
            raise WorkConfigUnavailable("no active work configuration")
        return to_work_config(row)
