# app/routes/assigned_shifts.py
"""
Assigned shift ingress. One assignment per employee and date.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, ensure_employee_in_franchise, require_franchise_access
from app.core.errors import ConflictError, ShiftNotFound
from app.core.hours import SqlAlchemyHoursRepository
from app.core.hours.repository import to_assigned_shift
from app.core.logging_config import get_logger
from app.core.models import AssignedShift as AssignedShiftSnapshot
from app.core.time_utils import format_hhmm
from app.core.validators import validate_assigned_timing, validate_period
from app.database.database import AssignedShift, Shift, get_db
from app.routes.shared import AssignedShiftCreate, get_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/assigned-shifts", tags=["assigned_shifts"])


@router.post("", response_model=AssignedShiftSnapshot, status_code=201)
def create_assigned_shift(
    payload: AssignedShiftCreate,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    """
    Assign a shift to an employee on a date.

    Raises:
        ConflictError: if the employee already has an assignment that day
    """
    ensure_employee_in_franchise(db, payload.employee_id, claims)
    validate_assigned_timing(payload.start_time, payload.end_time, payload.lunch_minutes)

    if payload.shift_id is not None and db.get(Shift, payload.shift_id) is None:
        raise ShiftNotFound(f"shift {payload.shift_id} not found")

    existing = (
        db.query(AssignedShift)
        .filter(AssignedShift.employee_id == payload.employee_id, AssignedShift.date == payload.date)
        .first()
    )
    if existing is not None:
        raise ConflictError(f"employee {payload.employee_id} already has a shift on {payload.date.isoformat()}")

    row = AssignedShift(
        employee_id=payload.employee_id,
        shift_id=payload.shift_id,
        date=payload.date,
        start_time=format_hhmm(payload.start_time),
        end_time=format_hhmm(payload.end_time),
        lunch_minutes=payload.lunch_minutes,
    )
    db.add(row)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(
            f"employee {payload.employee_id} already has a shift on {payload.date.isoformat()}"
        ) from e
    db.refresh(row)

    logger.info(
        f"Assigned shift for employee {row.employee_id} on {row.date}",
        extra={"extra_fields": {"employee_id": row.employee_id, "user_id": claims.user_id}},
    )
    return to_assigned_shift(row)


@router.get("/monthly", response_model=list[AssignedShiftSnapshot])
def monthly_assigned_shifts(
    employee_id: int = Query(...),
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return repo.assigned_shifts_for_employee_month(employee_id, year, month)
