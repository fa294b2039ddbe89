# app/routes/work_config.py
"""
Active work configuration: diurnal band and daily regular hours.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.auth import TokenClaims, require_admin
from app.core.config import DAILY_REGULAR_HOURS
from app.core.hours import SqlAlchemyHoursRepository
from app.core.hours.repository import to_work_config
from app.core.logging_config import get_logger
from app.core.models import WorkConfig as WorkConfigSnapshot
from app.core.time_utils import format_hhmm
from app.core.validators import validate_diurnal_band
from app.database.database import WorkConfig, get_db
from app.routes.shared import WorkConfigUpdate, get_repository

logger = get_logger(__name__)

router = APIRouter(prefix="/work-config", tags=["work_config"])


@router.get("", response_model=WorkConfigSnapshot)
def get_work_config(
    _claims: TokenClaims = Depends(require_admin),
    repo: SqlAlchemyHoursRepository = Depends(get_repository),
):
    return repo.active_work_config()


@router.put("", response_model=WorkConfigSnapshot)
def replace_work_config(
    payload: WorkConfigUpdate,
    claims: TokenClaims = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Replace the active configuration.

    The previous record is deactivated in the same transaction so exactly
    one record is active afterwards.
    """
    validate_diurnal_band(payload.diurnal_start, payload.diurnal_end)

    db.query(WorkConfig).filter(WorkConfig.is_active.is_(True)).update(
        {WorkConfig.is_active: False}, synchronize_session=False
    )
    row = WorkConfig(
        diurnal_start=format_hhmm(payload.diurnal_start),
        diurnal_end=format_hhmm(payload.diurnal_end),
        daily_regular_hours=payload.daily_regular_hours or DAILY_REGULAR_HOURS,
        is_active=True,
    )
    db.add(row)
    db.commit()
    db.refresh(row)

    logger.info(
        f"Work configuration replaced: {row.diurnal_start}-{row.diurnal_end}",
        extra={"extra_fields": {"work_config_id": row.id, "user_id": claims.user_id}},
    )
    return to_work_config(row)
