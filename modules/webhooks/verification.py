"""
Webhook signature verification.

Clerk signs deliveries through Svix:

    svix-id:        message ID
    svix-timestamp: epoch seconds
    svix-signature: space separated "v1,<base64 HMAC-SHA256>" entries

The HMAC key is the base64 part of the "whsec_" secret and the signed
content is "{svix-id}.{svix-timestamp}.{raw body}". The unbranded
"webhook-*" header names are accepted as well.
"""

import base64
import binascii
import hashlib
import hmac
import json
import time
from typing import Mapping, Optional

from pydantic import ValidationError

from shared.config import Settings

from .exceptions import (
    MalformedEventError,
    WebhookSecretNotConfiguredError,
    WebhookVerificationError,
)
from .models import WebhookEvent

SECRET_PREFIX = "whsec_"
SIGNATURE_VERSION = "v1"
DEFAULT_TOLERANCE_SECONDS = 300


def _get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    n = name.lower()
    for k, v in headers.items():
        if k.lower() == n:
            return v
    return None


def _get_svix_header(headers: Mapping[str, str], suffix: str) -> Optional[str]:
    return _get_header(headers, f"svix-{suffix}") or _get_header(headers, f"webhook-{suffix}")


def get_message_id(headers: Mapping[str, str]) -> Optional[str]:
    """The delivery's message ID, for logging. Unverified."""
    return _get_svix_header(headers, "id")


class WebhookVerifier:
    """
    Verifies Svix-signed webhook deliveries.

    Construction fails with WebhookSecretNotConfiguredError when the
    secret is missing or malformed, so configuration problems never
    look like bad signatures.
    """

    def __init__(self, secret: str, tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS):
        if not secret:
            raise WebhookSecretNotConfiguredError()
        self._key = self._decode_secret(secret)
        self._tolerance = tolerance_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "WebhookVerifier":
        """Build a verifier from the configured signing secret."""
        return cls(
            settings.clerk_webhook_signing_secret,
            tolerance_seconds=settings.webhook_tolerance_seconds,
        )

    @staticmethod
    def _decode_secret(secret: str) -> bytes:
        encoded = secret[len(SECRET_PREFIX):] if secret.startswith(SECRET_PREFIX) else secret
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise WebhookSecretNotConfiguredError("Webhook secret is not valid base64")

    def sign(self, message_id: str, timestamp: int, body: bytes) -> str:
        """
        Compute the base64 signature for a delivery.

        Exposed so tests and local tooling can produce valid deliveries.
        """
        content = f"{message_id}.{timestamp}.".encode("utf-8") + body
        mac = hmac.new(self._key, content, hashlib.sha256).digest()
        return base64.b64encode(mac).decode("ascii")

    def verify(
        self,
        headers: Mapping[str, str],
        body: bytes,
        now: Optional[float] = None,
    ) -> WebhookEvent:
        """
        Verify a delivery and parse its envelope.

        Args:
            headers: Request headers (any case)
            body: Raw request body, exactly as received
            now: Current epoch seconds, defaults to time.time()

        Returns:
            The parsed WebhookEvent

        Raises:
            WebhookVerificationError: If headers are missing, the timestamp is
                outside the tolerance, or no signature matches
            MalformedEventError: If the verified body is not a valid envelope
        """
        message_id = _get_svix_header(headers, "id")
        timestamp_header = _get_svix_header(headers, "timestamp")
        signature_header = _get_svix_header(headers, "signature")

        if not message_id or not timestamp_header or not signature_header:
            raise WebhookVerificationError("missing signature headers")

        try:
            timestamp = int(timestamp_header)
        except ValueError:
            raise WebhookVerificationError("invalid timestamp header")

        now = time.time() if now is None else now
        if abs(now - timestamp) > self._tolerance:
            raise WebhookVerificationError("timestamp outside tolerance")

        expected = self.sign(message_id, timestamp, body)
        if not self._matches(signature_header, expected):
            raise WebhookVerificationError("no matching signature")

        return self._parse(body)

    def _matches(self, signature_header: str, expected: str) -> bool:
        for entry in signature_header.split():
            version, _, signature = entry.partition(",")
            if version != SIGNATURE_VERSION or not signature:
                continue
            if hmac.compare_digest(signature.encode("ascii", "ignore"), expected.encode("ascii")):
                return True
        return False

    def _parse(self, body: bytes) -> WebhookEvent:
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise MalformedEventError("Webhook body is not valid JSON")

        if not isinstance(payload, dict):
            raise MalformedEventError("Webhook body is not a JSON object")

        try:
            return WebhookEvent.model_validate(payload)
        except ValidationError as e:
            raise MalformedEventError(
                f"Webhook envelope is invalid: {e.error_count()} error(s)",
                event_type=payload.get("type") if isinstance(payload.get("type"), str) else None,
            )
