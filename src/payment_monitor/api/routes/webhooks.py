"""Webhook endpoints for external service integrations.

Provides endpoints for:
- Stripe payment-failure events (payment_intent.payment_failed,
  invoice.payment_failed, charge.failed)

These endpoints do NOT require authentication as they receive signed
payloads from Stripe.
"""

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from payment_monitor.api.dependencies import get_webhook_handler
from payment_monitor.api.models import ErrorResponse, WebhookResponse
from payment_monitor.services.webhook_handler import WebhookHandler

router = APIRouter(tags=["webhooks"])

STRIPE_SIGNATURE_HEADER = "Stripe-Signature"


@router.post(
    "/webhook/stripe",
    summary="Receive Stripe webhook events",
    description="""
Endpoint for Stripe webhook events. Handles:
- payment_intent.payment_failed
- invoice.payment_failed
- charge.failed

Each failure triggers an alert email and a Failed Payments row in Airtable.
Other event types are acknowledged without processing.

**No authentication required** - signature is verified using the Stripe webhook secret.
""",
    response_model=WebhookResponse,
    responses={
        400: {"description": "Invalid or missing signature", "model": ErrorResponse},
        500: {"description": "Airtable write or normalization failed", "model": ErrorResponse},
    },
)
async def stripe_webhook(
    request: Request,
    handler: WebhookHandler = Depends(get_webhook_handler),
) -> WebhookResponse:
    """Handle an incoming Stripe webhook event."""
    # Raw body: parsing before verification would invalidate the signature
    payload = await request.body()
    signature = request.headers.get(STRIPE_SIGNATURE_HEADER)

    # Gmail and Airtable clients are blocking
    await run_in_threadpool(handler.handle, payload, signature)
    return WebhookResponse(received=True)
