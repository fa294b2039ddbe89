# app/core/sentry_config.py
"""
Sentry configuration for error tracking in production.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from app.core.config import IS_PRODUCTION

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ("cookie", "authorization", "x-api-key")


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Only active in production with ``SENTRY_DSN`` set.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not IS_PRODUCTION:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    environment = os.getenv("SENTRY_ENVIRONMENT", "production")
    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                # Breadcrumbs from INFO, events from ERROR
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", "loopi-hours@0.1.0"),
            environment=environment,
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False

    logger.info(f"Sentry initialized successfully (environment: {environment})")
    return True


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Bearer tokens travel in the Authorization header, so it is always masked.
    """
    request = event.get("request")
    if not request:
        return event

    headers = request.get("headers")
    if headers:
        for name in list(headers):
            if name.lower() in SENSITIVE_HEADERS:
                headers[name] = "[Filtered]"

    query = request.get("query_string")
    if query and ("password" in query.lower() or "token" in query.lower()):
        request["query_string"] = "[Filtered]"

    data = request.get("data")
    if isinstance(data, dict) and "password" in data:
        data["password"] = "[Filtered]"

    return event
