"""
Webhook processing service.

Runs one delivery through verification, normalization and reconciliation
and turns the outcome into a transport response.
"""

import logging
from typing import Callable, Mapping

from modules.profiles.interfaces import IProfileService

from .interfaces import IWebhookService
from .models import WebhookResult
from .normalizer import normalize_event
from .reporting import report_error
from .responses import error_response, success_response
from .verification import WebhookVerifier, get_message_id

logger = logging.getLogger(__name__)


class WebhookService(IWebhookService):
    """
    Processes Clerk user webhooks.

    Collaborators are passed as providers and built per delivery. The
    profile service is only requested after the signature check passes,
    and a provider that raises ConfigurationError becomes a 500 response.
    """

    def __init__(
        self,
        verifier: Callable[[], WebhookVerifier],
        profiles: Callable[[], IProfileService],
    ):
        self._verifier = verifier
        self._profiles = profiles

    async def handle(self, headers: Mapping[str, str], body: bytes) -> WebhookResult:
        context = {"webhook_id": get_message_id(headers), "event_type": None}

        try:
            event = self._verifier().verify(headers, body)
            context["event_type"] = event.type
            logger.info(
                f"Received webhook with ID {context['webhook_id']} and event type of {event.type}"
            )

            command = normalize_event(event)
            result = await self._profiles().apply(command)
        except Exception as e:
            report_error(e, context)
            return error_response(e)

        if result.succeeded:
            logger.info(f"Webhook {context['webhook_id']} reconciled: {result.action.value}")
        return success_response(result)
