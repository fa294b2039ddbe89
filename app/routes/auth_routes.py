# app/routes/auth_routes.py
"""
Authentication routes: token issuance.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth.auth import authenticate_user, build_claims, create_access_token
from app.core.config import ACCESS_TOKEN_EXPIRE_MINUTES
from app.core.logging_config import get_logger
from app.core.request_logging import log_auth_event
from app.database.database import get_db
from app.routes.shared import LoginRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token."""
    user = authenticate_user(db, payload.email, payload.password)
    if user is None:
        log_auth_event("login", payload.email, success=False)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_access_token(build_claims(user))
    log_auth_event("login", user.email, user_id=user.id)

    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }
