"""Normalize Stripe payment-failure events into PaymentFailure records.

Three event shapes are supported:
- payment_intent.payment_failed: failure reason from last_payment_error
- invoice.payment_failed: Stripe exposes no reason, fixed literals are used
- charge.failed: failure reason directly on the charge

failed_at always comes from the event's own ``created`` time.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from payment_monitor.models.errors import ErrorCode, MonitorError
from payment_monitor.models.payment_failure import PaymentFailure, iso_timestamp
from payment_monitor.models.stripe_events import (
    SUPPORTED_EVENT_TYPES,
    ChargeFailedEvent,
    InvoicePaymentFailedEvent,
    PaymentFailureEvent,
    PaymentIntentFailedEvent,
    payment_failure_event_adapter,
)
from payment_monitor.utils.presentation import UNKNOWN

INVOICE_FAILURE_CODE = "invoice_payment_failed"
INVOICE_FAILURE_MESSAGE = "Invoice payment failed"


def parse_event(event: Mapping[str, Any]) -> PaymentFailureEvent:
    """Validate a raw Stripe event into one of the supported event models.

    Args:
        event: Parsed webhook event payload.

    Returns:
        The typed event.

    Raises:
        MonitorError: UNSUPPORTED_EVENT_TYPE for any other event type,
            MALFORMED_EVENT when required payment fields are missing.
    """
    event_type = event.get("type")
    if event_type not in SUPPORTED_EVENT_TYPES:
        raise MonitorError(
            ErrorCode.UNSUPPORTED_EVENT_TYPE,
            details={"event_type": str(event_type)},
        )

    try:
        return payment_failure_event_adapter.validate_python(dict(event))
    except ValidationError as e:
        raise MonitorError(
            ErrorCode.MALFORMED_EVENT,
            details={"event_type": str(event_type), "errors": str(e.error_count())},
        ) from e


def normalize(event: Mapping[str, Any]) -> PaymentFailure:
    """Map a verified Stripe event into the canonical PaymentFailure record.

    Args:
        event: Parsed webhook event payload of a supported type.

    Returns:
        PaymentFailure with amount in minor units and currency as received.

    Raises:
        MonitorError: If the event is unsupported or malformed.
    """
    parsed = parse_event(event)
    failed_at = iso_timestamp(parsed.created)

    match parsed:
        case PaymentIntentFailedEvent(data=data):
            intent = data.object
            error = intent.last_payment_error
            return PaymentFailure(
                payment_id=intent.id,
                customer_email=intent.receipt_email or UNKNOWN,
                amount=intent.amount,
                currency=intent.currency,
                failure_code=error.code if error else None,
                failure_message=error.message if error else None,
                failed_at=failed_at,
            )
        case InvoicePaymentFailedEvent(data=data):
            invoice = data.object
            return PaymentFailure(
                payment_id=invoice.id,
                customer_email=invoice.customer_email or UNKNOWN,
                amount=invoice.amount_due,
                currency=invoice.currency,
                failure_code=INVOICE_FAILURE_CODE,
                failure_message=INVOICE_FAILURE_MESSAGE,
                failed_at=failed_at,
            )
        case ChargeFailedEvent(data=data):
            charge = data.object
            billing_email = charge.billing_details.email if charge.billing_details else None
            return PaymentFailure(
                payment_id=charge.id,
                customer_email=charge.receipt_email or billing_email or UNKNOWN,
                amount=charge.amount,
                currency=charge.currency,
                failure_code=charge.failure_code,
                failure_message=charge.failure_message,
                failed_at=failed_at,
            )

    # parse_event only returns the three models above
    raise MonitorError(ErrorCode.UNSUPPORTED_EVENT_TYPE)
