# app/routes/absences.py
"""
Absence ingress with the per-day and per-month hour limits.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, ensure_employee_in_franchise, require_franchise_access
from app.core.hours import SqlAlchemyHoursRepository
from app.core.hours.repository import month_bounds, to_absence
from app.core.logging_config import get_logger
from app.core.models import Absence as AbsenceSnapshot
from app.core.time_utils import round2
from app.core.validators import validate_absence_hours, validate_period
from app.database.database import Absence, get_db
from app.routes.shared import AbsenceCreate, get_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/absences", tags=["absences"])


def month_absence_total(db: Session, employee_id: int, year: int, month: int) -> float:
    """Hours of absence already recorded for the employee in the month."""
    first, last = month_bounds(year, month)
    total = (
        db.query(func.coalesce(func.sum(Absence.hours), 0.0))
        .filter(Absence.employee_id == employee_id)
        .filter(Absence.date >= first, Absence.date <= last)
        .scalar()
    )
    return float(total or 0.0)


@router.post("", response_model=AbsenceSnapshot, status_code=201)
def create_absence(
    payload: AbsenceCreate,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    """
    Record unworked hours for an employee on a date.

    Raises:
        InvalidAbsence: hours outside (0, 24] or the monthly total over the limit
    """
    ensure_employee_in_franchise(db, payload.employee_id, claims)
    already = month_absence_total(db, payload.employee_id, payload.date.year, payload.date.month)
    validate_absence_hours(payload.hours, already)

    row = Absence(
        employee_id=payload.employee_id,
        date=payload.date,
        hours=payload.hours,
        reason=payload.reason,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info(
        f"Absence of {row.hours}h recorded for employee {row.employee_id} on {row.date}",
        extra={"extra_fields": {"employee_id": row.employee_id, "month_total": already + row.hours}},
    )
    return to_absence(row)


@router.get("/monthly", response_model=list[AbsenceSnapshot])
def monthly_absences(
    employee_id: int = Query(...),
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return repo.absences_for_employee_month(employee_id, year, month)


@router.get("/total-hours")
def total_absence_hours(
    employee_id: int = Query(...),
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return {
        "employee_id": employee_id,
        "year": year,
        "month": month,
        "total_hours": round2(month_absence_total(db, employee_id, year, month)),
    }
