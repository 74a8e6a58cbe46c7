"""
Sentry configuration for error tracking.

Captures unhandled exceptions and failed calls to Google.
"""
import sentry_sdk
import structlog
from sentry_sdk.integrations.fastapi import FastApiIntegration

from google_login.config import settings

logger = structlog.get_logger()


def configure_sentry(config=None):
    """
    Initialize Sentry with the FastAPI integration.

    Requires SENTRY_DSN to be set; otherwise Sentry stays disabled.
    """
    config = config or settings
    dsn = config.SENTRY_DSN

    if not dsn:
        logger.info("sentry_disabled", reason="SENTRY_DSN not set")
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[
            FastApiIntegration(),
        ],
        before_send=scrub_event,
        # Sample rate: capture 10% of transactions for performance monitoring
        traces_sample_rate=0.1,
        environment=config.ENVIRONMENT,
        release=config.APP_VERSION,
    )

    logger.info("sentry_initialized", environment=config.ENVIRONMENT)
    return True


def scrub_event(event, hint):
    """
    Drop the query string from request data before sending an event.

    The OAuth callback query carries the authorization code and state.
    """
    request = event.get("request")
    if request and request.get("query_string"):
        request["query_string"] = "[Filtered]"
    return event


def capture_exception(exc_info=None):
    """
    Capture an exception to Sentry.

    Usage:
        try:
            # some code
        except Exception:
            capture_exception()
    """
    if sentry_sdk.get_client().is_enabled():
        sentry_sdk.capture_exception(exc_info)
