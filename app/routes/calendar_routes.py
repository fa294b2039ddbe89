# app/routes/calendar_routes.py
"""
Holiday calendar lookups and cache administration.
"""

from fastapi import APIRouter, Depends, Query

from app.auth.auth import TokenClaims, get_current_claims, require_admin
from app.core.hours import cache_stats, clear_calendar_cache, holidays_for, holidays_for_month, month_summary, working_days
from app.core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("/holidays")
def list_holidays(
    year: int = Query(...),
    month: int | None = Query(None),
    _claims: TokenClaims = Depends(get_current_claims),
):
    """Observed holidays of a year, or of one month when ``month`` is given."""
    dates = holidays_for(year) if month is None else holidays_for_month(year, month)
    return {
        "year": year,
        "month": month,
        "count": len(dates),
        "dates": [d.isoformat() for d in dates],
    }


@router.get("/month-summary")
def get_month_summary(
    year: int = Query(...),
    month: int = Query(...),
    _claims: TokenClaims = Depends(get_current_claims),
):
    summary = month_summary(year, month)
    return {**summary, "holidays": [d.isoformat() for d in summary["holidays"]]}


@router.get("/working-days")
def get_working_days(
    year: int = Query(...),
    month: int = Query(...),
    _claims: TokenClaims = Depends(get_current_claims),
):
    return {"year": year, "month": month, "working_days": working_days(year, month)}


@router.post("/clear-cache")
def clear_cache(claims: TokenClaims = Depends(require_admin)):
    """Evict every cached holiday set and month count."""
    before = cache_stats()
    clear_calendar_cache()
    logger.info(
        "Calendar cache cleared",
        extra={"extra_fields": {"user_id": claims.user_id, "evicted": before}},
    )
    return {"cleared": True, "evicted": before}
