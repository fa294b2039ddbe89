# app/routes/shared.py
"""
Shared dependencies and request schemas for route modules.
"""

import datetime

from fastapi import Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.core.hours import SqlAlchemyHoursRepository
from app.core.models import NoveltyType, ShiftPeriod
from app.database.database import get_db


def get_repository(db: Session = Depends(get_db)) -> SqlAlchemyHoursRepository:
    """Hours repository bound to the request's database session."""
    return SqlAlchemyHoursRepository(db)


# ============ Pydantic schemas ============


class LoginRequest(BaseModel):
    email: str
    password: str


class PreviewRequest(BaseModel):
    shift_id: int
    year: int
    month: int


class ShiftCreate(BaseModel):
    store_id: int
    name: str = Field(min_length=1, max_length=100)
    period: ShiftPeriod = ShiftPeriod.WEEKLY
    start_time: str
    end_time: str
    lunch_minutes: int = 0
    is_active: bool = True


class AssignedShiftCreate(BaseModel):
    employee_id: int
    date: datetime.date
    start_time: str
    end_time: str
    lunch_minutes: int = 0
    shift_id: int | None = None


class AbsenceCreate(BaseModel):
    employee_id: int
    date: datetime.date
    hours: float
    reason: str | None = None


class NoveltyCreate(BaseModel):
    employee_id: int
    date: datetime.date
    hours: float
    type: NoveltyType
    comment: str | None = None


class WorkConfigUpdate(BaseModel):
    diurnal_start: str
    diurnal_end: str
    daily_regular_hours: float | None = Field(default=None, gt=0, le=24)
