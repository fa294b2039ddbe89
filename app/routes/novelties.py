# app/routes/novelties.py
"""
Novelty ingress: signed hour adjustments per employee and date.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, ensure_employee_in_franchise, require_franchise_access
from app.core.errors import InvalidNovelty
from app.core.hours import SqlAlchemyHoursRepository
from app.core.hours.repository import to_novelty
from app.core.logging_config import get_logger
from app.core.models import Novelty as NoveltySnapshot
from app.core.validators import validate_period
from app.database.database import Novelty, NoveltyTypeColumn, get_db
from app.routes.shared import NoveltyCreate, get_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/novelties", tags=["novelties"])


@router.post("", response_model=NoveltySnapshot, status_code=201)
def create_novelty(
    payload: NoveltyCreate,
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
):
    ensure_employee_in_franchise(db, payload.employee_id, claims)
    if payload.hours <= 0:
        raise InvalidNovelty("novelty hours must be greater than zero")

    row = Novelty(
        employee_id=payload.employee_id,
        date=payload.date,
        hours=payload.hours,
        type=NoveltyTypeColumn(payload.type.value),
        comment=payload.comment,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info(
        f"Novelty {row.type.value} {row.hours}h recorded for employee {row.employee_id} on {row.date}",
        extra={"extra_fields": {"employee_id": row.employee_id, "user_id": claims.user_id}},
    )
    return to_novelty(row)


@router.get("/monthly", response_model=list[NoveltySnapshot])
def monthly_novelties(
    employee_id: int = Query(...),
    year: int = Query(...),
    month: int = Query(...),
    claims: TokenClaims = Depends(require_franchise_access),
    db: Session = Depends(get_db),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    validate_period(year, month)
    ensure_employee_in_franchise(db, employee_id, claims)
    return repo.novelties_for_employee_month(employee_id, year, month)
