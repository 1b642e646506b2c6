"""
Webhooks module.

Verifies Clerk (Svix-signed) user webhooks, normalizes them into profile
commands and maps reconciliation outcomes to HTTP responses.

Public API:
- IWebhookService: Interface for processing deliveries
- WebhookVerifier: Svix signature verification
- normalize_event: Event to canonical command mapping
- Webhook exceptions: WebhookVerificationError, MalformedEventError, etc.
"""

from .interfaces import IWebhookService
from .models import WebhookEvent, WebhookResponse, WebhookResult
from .normalizer import derive_full_name, normalize_event, sanitize_username
from .verification import WebhookVerifier
from .exceptions import (
    MalformedEventError,
    WebhookSecretNotConfiguredError,
    WebhookVerificationError,
)

__all__ = [
    # Interface
    "IWebhookService",
    # Models
    "WebhookEvent",
    "WebhookResponse",
    "WebhookResult",
    # Components
    "WebhookVerifier",
    "normalize_event",
    "derive_full_name",
    "sanitize_username",
    # Exceptions
    "MalformedEventError",
    "WebhookSecretNotConfiguredError",
    "WebhookVerificationError",
]
