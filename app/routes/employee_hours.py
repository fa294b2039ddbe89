# app/routes/employee_hours.py
"""
Realized hours per employee: monthly, yearly and per-day breakdowns.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, ensure_employee_in_franchise, require_franchise_access
from app.core.hours import SqlAlchemyHoursRepository, aggregate_month, aggregate_year, load_day_hours, working_days
from app.core.models import DayHours, EmployeeHourSummary, EmployeeYearSummary
from app.core.validators import validate_period, validate_year
from app.database.database import get_db
from app.routes.shared import get_repository

router = APIRouter(prefix="/employee-hours", tags=["employee_hours"])


@router.get("/{employee_id}/monthly", response_model=EmployeeHourSummary)
def monthly(
    employee_id: int,
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    """Realized hour summary for one employee and month."""
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return aggregate_month(repo, employee_id, year, month)


@router.get("/{employee_id}/yearly", response_model=EmployeeYearSummary)
def yearly(
    employee_id: int,
    year: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    """Twelve monthly summaries and their total. Failing months are omitted."""
    validate_year(year)
    ensure_employee_in_franchise(db, employee_id, claims)
    return aggregate_year(repo, employee_id, year)


@router.get("/{employee_id}/daily", response_model=list[DayHours])
def daily(
    employee_id: int,
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    """Per-day realized figures for every assigned day of the month."""
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return load_day_hours(repo, employee_id, year, month)


@router.get("/{employee_id}/working-days")
def employee_working_days(
    employee_id: int,
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    """Working days available to the employee in the month (calendar based)."""
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return {
        "employee_id": employee_id,
        "year": year,
        "month": month,
        "working_days": working_days(year, month),
    }
