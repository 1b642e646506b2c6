"""
Webhooks module exceptions.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ConfigurationError, ValidationError


class WebhookVerificationError(AuthenticationError):
    """
    Raised when a delivery's signature cannot be verified.

    The reason is kept for logs only; the sender always sees the same
    generic message.
    """

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            "Webhook signature verification failed",
            code="WEBHOOK_VERIFICATION_FAILED",
            details={"reason": reason} if reason else {},
        )


class WebhookSecretNotConfiguredError(ConfigurationError):
    """Raised when the signing secret is absent or not a valid Svix secret."""

    def __init__(self, reason: str = "Webhook secret not configured"):
        super().__init__(
            reason,
            code="WEBHOOK_SECRET_NOT_CONFIGURED",
            details={"setting": "CLERK_WEBHOOK_SIGNING_SECRET"},
        )


class MalformedEventError(ValidationError):
    """Raised when a verified body is not a usable event."""

    def __init__(self, message: str, event_type: Optional[str] = None):
        super().__init__(
            message,
            code="MALFORMED_EVENT",
            details={"event_type": event_type} if event_type else {},
        )
