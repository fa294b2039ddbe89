# app/routes/shift_planning.py
"""
Shift planning: projected extra hours of a template over a month.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, ensure_shift_store_in_franchise, require_franchise_access
from app.core.hours import SqlAlchemyHoursRepository, project_shift, projected_days
from app.core.models import ExtraHourSummary, ProjectedDay, ShiftTemplate
from app.core.validators import validate_period
from app.database.database import get_db
from app.routes.shared import PreviewRequest, get_repository

router = APIRouter(prefix="/shift-planning", tags=["shift_planning"])


def _load_template(
    repo: SqlAlchemyHoursRepository, db: Session, shift_id: int, claims: TokenClaims
) -> ShiftTemplate:
    template = repo.shift_template_by_id(shift_id)
    ensure_shift_store_in_franchise(db, template.store_id, claims)
    return template


@router.post("/preview", response_model=ExtraHourSummary)
def preview(
    payload: PreviewRequest,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    """Extra hours a template would produce if worked every day of the month."""
    validate_period(payload.year, payload.month)
    template = _load_template(repo, db, payload.shift_id, claims)
    return project_shift(template, payload.year, payload.month, repo.active_work_config())


@router.get("/summary", response_model=ExtraHourSummary)
def summary(
    shift_id: int = Query(...),
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    """Same as the preview, addressed by query parameters."""
    validate_period(year, month)
    template = _load_template(repo, db, shift_id, claims)
    return project_shift(template, year, month, repo.active_work_config())


@router.get("/projected-days", response_model=list[ProjectedDay])
def list_projected_days(
    shift_id: int = Query(...),
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    """Per-day projection; days without extra hours are omitted."""
    validate_period(year, month)
    template = _load_template(repo, db, shift_id, claims)
    return projected_days(template, year, month, repo.active_work_config())
