"""
Error reporting for webhook deliveries.

Logs what went wrong with enough detail to diagnose from the logs alone.
Secret values are never part of the output.
"""

import logging
from typing import Any, Optional

from shared.exceptions import ProfileSyncError

from .exceptions import WebhookVerificationError

logger = logging.getLogger(__name__)

AUTHORIZATION_MARKERS = ("401", "unauthorized", "invalid api key")

AUTHORIZATION_HINTS = (
    "Invalid webhook signature",
    "Invalid Supabase service role key",
    "Missing or incorrect environment variables",
)


def has_authorization_marker(message: str) -> bool:
    """Whether an error message looks like an authorization failure."""
    lowered = message.lower()
    return any(marker in lowered for marker in AUTHORIZATION_MARKERS)


def report_error(error: BaseException, context: Optional[dict[str, Any]] = None) -> None:
    """
    Log a failed delivery.

    Args:
        error: The exception that ended processing
        context: Delivery identifiers (webhook ID, event type) to log with it
    """
    name = type(error).__name__
    message = str(error)
    where = ", ".join(f"{k}={v}" for k, v in (context or {}).items() if v is not None)
    suffix = f" [{where}]" if where else ""

    if isinstance(error, WebhookVerificationError):
        logger.warning(f"Webhook rejected: {message} ({error.details.get('reason', 'unknown')}){suffix}")
    elif isinstance(error, ProfileSyncError):
        logger.error(
            f"Webhook processing error: {name} [{error.code}]: {message}{suffix} details={error.details}",
            exc_info=error,
        )
    else:
        logger.error(f"Unexpected webhook processing error: {name}: {message}{suffix}", exc_info=error)

    if has_authorization_marker(message) or _details_mention_authorization(error):
        logger.error("401 Unauthorized error detected. This could be due to:")
        for hint in AUTHORIZATION_HINTS:
            logger.error(f"  - {hint}")


def _details_mention_authorization(error: BaseException) -> bool:
    if not isinstance(error, ProfileSyncError):
        return False
    return any(isinstance(v, str) and has_authorization_marker(v) for v in error.details.values())
