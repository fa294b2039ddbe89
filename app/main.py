# app/main.py
"""
FastAPI application entry point.
"""

import os
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import IS_PRODUCTION
from app.core.errors import HoursError
from app.core.logging_config import get_logger, setup_logging
from app.core.request_logging import RequestLoggingMiddleware
from app.core.sentry_config import init_sentry
from app.database.database import create_tables, get_db
from app.routes.absences import router as absences_router
from app.routes.assigned_shifts import router as assigned_shifts_router
from app.routes.auth_routes import router as auth_router
from app.routes.calendar_routes import router as calendar_router
from app.routes.employee_hours import router as employee_hours_router
from app.routes.novelties import router as novelties_router
from app.routes.shift_planning import router as shift_planning_router
from app.routes.shifts import router as shifts_router
from app.routes.work_config import router as work_config_router

VERSION = "0.1.0"

# Setup logging FIRST (before any other imports that might log)
setup_logging()
logger = get_logger(__name__)

# Initialize Sentry for error tracking (production only)
sentry_enabled = init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": IS_PRODUCTION,
                "python_version": sys.version,
                "sentry": sentry_enabled,
            }
        },
    )

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title="Loopi Hours",
    description="Extra-hours computation for retail franchises",
    version=VERSION,
    lifespan=lifespan,
)

# CORS Configuration
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()]

if IS_PRODUCTION:
    # Production: Strict CORS - only allow specified origins
    if not CORS_ORIGINS:
        logger.warning(
            "Production mode but no CORS_ORIGINS set. CORS will block all cross-origin requests. "
            "Set CORS_ORIGINS environment variable if you need to allow specific origins."
        )
    allowed_origins = CORS_ORIGINS
    allowed_methods = ["GET", "POST", "PUT"]
    logger.info(f"CORS configured for production with origins: {allowed_origins}")
else:
    # Development: Permissive CORS for easier testing
    allowed_origins = ["*"]
    allowed_methods = ["*"]
    logger.info("CORS configured for development (permissive)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


# ============ Error rendering ============
# Every error leaves as {"error": "<message>"}.


@app.exception_handler(HoursError)
async def hours_error_handler(request: Request, exc: HoursError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "invalid request")
    else:
        message = "invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "internal server error"})


# Include routers
app.include_router(auth_router)
app.include_router(shift_planning_router)
app.include_router(employee_hours_router)
app.include_router(calendar_router)
app.include_router(shifts_router)
app.include_router(assigned_shifts_router)
app.include_router(absences_router)
app.include_router(novelties_router)
app.include_router(work_config_router)


@app.get("/health", tags=["health"])
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns 200 OK if the database answers, 503 Service Unavailable otherwise.
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed - database connection error: {e}", exc_info=True)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "service": "loopi-hours", "database": "disconnected"},
        )
    return {"status": "healthy", "service": "loopi-hours", "version": VERSION, "database": "connected"}
