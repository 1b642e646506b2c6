"""
Webhook endpoints.

Receives Clerk user events. Authentication is the Svix signature, not a
bearer token.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.dependencies import get_webhook_service

from .interfaces import IWebhookService

router = APIRouter()


@router.post("/clerk")
@router.post("/clerk/user", include_in_schema=False)
async def receive_clerk_webhook(
    request: Request,
    service: IWebhookService = Depends(get_webhook_service),
) -> JSONResponse:
    """
    Receive a Clerk user.created / user.updated / user.deleted event.

    Responses:
    - 200: applied, already applied, target profile missing, or event type ignored
    - 400: signature verification failed
    - 500: configuration or database failure (Clerk retries)
    """
    body = await request.body()
    result = await service.handle(request.headers, body)
    return JSONResponse(status_code=result.status_code, content=result.body)
