# app/core/config.py

import os
import warnings
from typing import Final

# ==========================
# Environment
# ==========================

IS_PRODUCTION: Final[bool] = os.getenv("PRODUCTION", "false").lower() == "true"

_DEFAULT_JWT_SECRET = "your-secret-key-change-this-in-production"

#: HMAC secret used to sign and verify bearer tokens (HS256).
JWT_SECRET: Final[str] = os.getenv("JWT_SECRET", _DEFAULT_JWT_SECRET)

if JWT_SECRET == _DEFAULT_JWT_SECRET:
    if IS_PRODUCTION:
        raise RuntimeError("JWT_SECRET must be set in production!")
    warnings.warn(
        "WARNING: Using default JWT_SECRET! Set JWT_SECRET environment variable for production.",
        RuntimeWarning,
        stacklevel=2,
    )

#: SQLAlchemy database URL.
DB_DSN: Final[str] = os.getenv("DB_DSN", "")

if not DB_DSN and IS_PRODUCTION:
    raise RuntimeError("DB_DSN must be set in production!")

DATABASE_URL: Final[str] = DB_DSN or "sqlite:///./loopi.db"

JWT_ALGORITHM: Final[str] = "HS256"

#: Tokens expire ten minutes after issue.
ACCESS_TOKEN_EXPIRE_MINUTES: Final[int] = 10


# ==========================
# Hours computation
# ==========================

#: Regular hours per day. Anything worked above this is extra time.
DAILY_REGULAR_HOURS: Final[float] = 7.33

#: Diurnal band used when a work configuration is created without one.
DEFAULT_DIURNAL_START: Final[str] = "06:00"
DEFAULT_DIURNAL_END: Final[str] = "21:00"

#: Years accepted by the calendar and the hours engine.
YEAR_MIN: Final[int] = 2000
YEAR_MAX: Final[int] = 2100

#: Bounds for a shift template's gross duration, in hours.
MIN_SHIFT_HOURS: Final[float] = 1.0
MAX_SHIFT_HOURS: Final[float] = 12.0

#: Absence limits per employee.
MAX_ABSENCE_HOURS_PER_DAY: Final[float] = 24.0
MAX_ABSENCE_HOURS_PER_MONTH: Final[float] = 40.0

MINUTES_PER_DAY: Final[int] = 24 * 60


# ==========================
# Time formats
# ==========================

#: Wall-clock format for shift and work-config times ("07:00").
TIME_FORMAT_HM: Final[str] = "%H:%M"
