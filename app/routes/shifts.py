# app/routes/shifts.py
"""
Shift template ingress.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, ensure_store_in_franchise, require_franchise_access
from app.core.hours import SqlAlchemyHoursRepository
from app.core.hours.repository import to_shift_template
from app.core.logging_config import get_logger
from app.core.models import ShiftTemplate
from app.core.time_utils import format_hhmm
from app.core.validators import validate_shift_timing
from app.database.database import Shift, ShiftPeriodColumn, get_db
from app.routes.shared import ShiftCreate, get_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/shifts", tags=["shifts"])


@router.post("", response_model=ShiftTemplate, status_code=201)
def create_shift(
    payload: ShiftCreate,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    """Create a shift template for one of the caller's stores."""
    ensure_store_in_franchise(db, payload.store_id, claims)
    hours = validate_shift_timing(payload.start_time, payload.end_time, payload.lunch_minutes)

    shift = Shift(
        store_id=payload.store_id,
        name=payload.name,
        period=ShiftPeriodColumn(payload.period.value),
        start_time=format_hhmm(payload.start_time),
        end_time=format_hhmm(payload.end_time),
        lunch_minutes=payload.lunch_minutes,
        is_active=payload.is_active,
    )
    db.add(shift)
    db.commit()
    db.refresh(shift)

    logger.info(
        f"Shift template {shift.id} created for store {shift.store_id}",
        extra={"extra_fields": {"shift_id": shift.id, "hours": hours, "user_id": claims.user_id}},
    )
    return to_shift_template(shift)


@router.get("/{shift_id}", response_model=ShiftTemplate)
def get_shift(
    shift_id: int,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    template = repo.shift_template_by_id(shift_id)
    ensure_store_in_franchise(db, template.store_id, claims)
    return template


@router.get("/store/{store_id}", response_model=list[ShiftTemplate])
def list_store_shifts(
    store_id: int,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    """Templates of a store, ordered by id."""
    ensure_store_in_franchise(db, store_id, claims)
    rows = db.query(Shift).filter(Shift.store_id == store_id).order_by(Shift.id).all()
    return [to_shift_template(row) for row in rows]
