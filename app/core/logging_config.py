# app/core/logging_config.py
"""
Logging configuration for Loopi Hours.

Structured JSON logs on rotating files in production, colored console
output in development. Modules attach context through
``extra={"extra_fields": {...}}``.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Determine if running in production
IS_PRODUCTION = os.getenv("PRODUCTION", "false").lower() == "true"

# Log directory
LOG_DIR = Path(os.getenv("LOG_DIR", "logs"))

# Log files
APP_LOG_FILE = LOG_DIR / "app.log"
ERROR_LOG_FILE = LOG_DIR / "error.log"

# Record attributes copied into JSON output when present
_CONTEXT_ATTRS = {
    "user_id": "user_id",
    "email": "email",
    "request_id": "request_id",
    "method": "method",
    "path": "path",
    "status_code": "status_code",
    "duration": "duration_ms",
}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per line for log aggregation tools.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        for attr, key in _CONTEXT_ATTRS.items():
            if hasattr(record, attr):
                log_data[key] = getattr(record, attr)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output in development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Color a copy so other handlers keep the plain level name
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.RESET}"
        return super().format(record)


def _rotating_handler(path: Path, max_bytes: int, backups: int, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")
    handler.setLevel(level)
    return handler


def setup_logging() -> None:
    """
    Configure logging for the application.

    In production:
    - JSON format on rotating app and error files
    - INFO level, console only for WARNING and above

    In development:
    - Colored console output at DEBUG level
    - Plain rotating file alongside
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO if IS_PRODUCTION else logging.DEBUG)
    root_logger.handlers.clear()

    if IS_PRODUCTION:
        app_handler = _rotating_handler(APP_LOG_FILE, 10_000_000, 5, logging.INFO)
        app_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(app_handler)

        error_handler = _rotating_handler(ERROR_LOG_FILE, 10_000_000, 10, logging.ERROR)
        error_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(error_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(console_handler)

    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            ColoredFormatter(fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        )
        root_logger.addHandler(console_handler)

        file_handler = _rotating_handler(APP_LOG_FILE, 5_000_000, 2, logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"))
        root_logger.addHandler(file_handler)

    # Configure uvicorn loggers
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(logging.INFO)

    # Suppress noisy loggers
    logging.getLogger("watchfiles").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured (production={IS_PRODUCTION})",
        extra={"extra_fields": {"log_dir": str(LOG_DIR.absolute()), "production": IS_PRODUCTION}},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return logging.getLogger(name)
