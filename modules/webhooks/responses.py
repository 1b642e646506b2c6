"""
Response mapping for webhook deliveries.

Svix retries any non-2xx answer, so the status code decides whether a
delivery is tried again:

    200  applied, already applied, target missing, or ignored type
    400  signature rejected
    500  configuration or store failure, retried until fixed
"""

from modules.profiles.models import ReconcileAction, ReconcileResult
from shared.exceptions import ConfigurationError, ProfileSyncError

from .exceptions import WebhookVerificationError
from .models import ErrorResponse, WebhookResponse, WebhookResult


def success_response(result: ReconcileResult) -> WebhookResult:
    """Map a reconciliation outcome to a 200 response."""
    detail = None
    if result.action == ReconcileAction.NOT_FOUND:
        detail = f"Profile not found for user_id: {result.user_id}"
    elif result.action == ReconcileAction.IGNORED:
        detail = f"Unhandled event type: {result.event_type}"
    elif result.action == ReconcileAction.STALE:
        detail = f"Stored profile for user_id {result.user_id} is newer than this event"

    body = WebhookResponse(
        success=True,
        action=result.action,
        profile=result.profile,
        detail=detail,
    )
    return WebhookResult(status_code=200, body=body.model_dump(mode="json", exclude_none=True))


def error_response(error: BaseException) -> WebhookResult:
    """Map a failure to a 400 or 500 response."""
    if isinstance(error, WebhookVerificationError):
        return _error(400, ErrorResponse(error=error.message, code=error.code))

    if isinstance(error, ConfigurationError):
        return _error(500, ErrorResponse(error=error.message, code=error.code))

    if isinstance(error, ProfileSyncError):
        return _error(
            500,
            ErrorResponse(error=error.message, code=error.code, detail=error.details.get("db_error")),
        )

    return _error(
        500,
        ErrorResponse(error="Internal server error", code="UNEXPECTED_ERROR", detail=str(error) or None),
    )


def _error(status_code: int, body: ErrorResponse) -> WebhookResult:
    return WebhookResult(status_code=status_code, body=body.model_dump(exclude_none=True))
