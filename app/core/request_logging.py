# app/core/request_logging.py
"""
Request logging middleware and auth event helpers.
"""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging_config import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every HTTP request with timing and status code.

    Each request gets an ``X-Request-ID``. The caller's ``user_id`` is taken
    from the token claims stored on ``request.state`` by the auth dependency.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status_code = response.status_code
            error = None
        except Exception as e:
            status_code = 500
            error = str(e)
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            log_data = {
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration": duration_ms,
            }
            claims = getattr(request.state, "claims", None)
            if claims is not None:
                log_data["user_id"] = claims.user_id
                log_data["franchise_id"] = claims.franchise_id

            extra = {"extra_fields": log_data}
            message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"

            if error:
                logger.error(f"{message} - ERROR: {error}", extra=extra, exc_info=True)
            elif status_code >= 500:
                logger.error(message, extra=extra)
            elif status_code >= 400:
                logger.warning(message, extra=extra)
            elif request.url.path == "/health":
                # Don't log health checks at INFO level (reduces noise)
                logger.debug(message, extra=extra)
            else:
                logger.info(message, extra=extra)

        response.headers["X-Request-ID"] = request_id
        return response


def log_auth_event(
    event_type: str,
    email: str,
    user_id: int | None = None,
    success: bool = True,
    details: dict | None = None,
) -> None:
    """
    Log authentication-related events.

    Args:
        event_type: Type of event (login, token_rejected, ...)
        email: Account involved
        user_id: User ID if known
        success: Whether the event was successful
        details: Additional details to log
    """
    log_data = {"event_type": event_type, "email": email, "success": success}
    if user_id:
        log_data["user_id"] = user_id
    if details:
        log_data.update(details)

    extra = {"extra_fields": log_data}
    if success:
        logger.info(f"Auth event: {event_type} - {email} - SUCCESS", extra=extra)
    else:
        logger.warning(f"Auth event: {event_type} - {email} - FAILED", extra=extra)
