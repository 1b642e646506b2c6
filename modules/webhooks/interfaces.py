"""
Webhooks module interface.
"""

from typing import Mapping, Protocol, runtime_checkable

from .models import WebhookResult


@runtime_checkable
class IWebhookService(Protocol):
    """
    Interface for processing identity-provider webhook deliveries.
    """

    async def handle(self, headers: Mapping[str, str], body: bytes) -> WebhookResult:
        """
        Verify, normalize and reconcile one delivery.

        Never raises: every failure is reported and mapped to a response
        the sender's retry policy understands.

        Args:
            headers: Request headers, including the signature headers
            body: Raw request body

        Returns:
            WebhookResult with status code and JSON body
        """
        ...
