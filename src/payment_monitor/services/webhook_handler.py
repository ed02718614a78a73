"""Webhook handler for processing Stripe payment-failure events.

Provides business logic for handling webhook events separate from
HTTP routing concerns:
- Signature verification against the raw request body
- Filtering to the supported payment-failure event types
- Normalize -> email alert -> Airtable record, strictly in that order

It also runs the self-test pipeline that feeds a synthetic record to both
sinks without a Stripe event.
"""

import time
from collections.abc import Mapping
from typing import Any

from payment_monitor.models.errors import ErrorCode, MonitorError
from payment_monitor.models.payment_failure import PaymentFailure, iso_timestamp
from payment_monitor.models.stripe_events import SUPPORTED_EVENT_TYPES
from payment_monitor.services.alert_dispatcher import AlertDispatcher
from payment_monitor.services.audit_log import AuditLog
from payment_monitor.services.event_normalizer import normalize
from payment_monitor.services.stripe_service import StripeService, StripeServiceError
from payment_monitor.services.tracking_recorder import TrackingRecorder
from payment_monitor.utils.logging import get_logger, log_webhook_event

logger = get_logger(__name__)


def build_test_failure() -> PaymentFailure:
    """Synthetic payment failure used by the self-test endpoint."""
    return PaymentFailure(
        payment_id=f"test_{time.time_ns() // 1_000_000}",
        customer_email="test@example.com",
        amount=2500,
        currency="usd",
        failure_code="card_declined",
        failure_message="Your card was declined.",
        failed_at=iso_timestamp(),
    )


class WebhookHandler:
    """Orchestrates verification, filtering and delivery of failure events."""

    def __init__(
        self,
        *,
        stripe_service: StripeService,
        dispatcher: AlertDispatcher,
        recorder: TrackingRecorder,
        audit_log: AuditLog,
    ) -> None:
        self._stripe = stripe_service
        self._dispatcher = dispatcher
        self._recorder = recorder
        self._audit_log = audit_log

    def verify(self, payload: bytes, signature: str | None) -> dict[str, Any]:
        """Verify the Stripe signature and return the parsed event.

        Args:
            payload: Raw, unparsed request body
            signature: Stripe-Signature header value, if present

        Returns:
            Parsed event dictionary.

        Raises:
            MonitorError: INVALID_WEBHOOK_SIGNATURE on any verification failure.
        """
        try:
            if not signature:
                raise StripeServiceError("Missing Stripe-Signature header")
            return self._stripe.verify_webhook_signature(payload, signature)
        except StripeServiceError as e:
            self._audit_log.append(f"Webhook signature verification failed: {e}")
            raise MonitorError(
                ErrorCode.INVALID_WEBHOOK_SIGNATURE,
                details={"message": str(e)},
            ) from e

    @staticmethod
    def is_supported(event: Mapping[str, Any]) -> bool:
        return event.get("type") in SUPPORTED_EVENT_TYPES

    def deliver(self, record: PaymentFailure) -> str:
        """Send the alert, then create the tracking row.

        Returns:
            Airtable record ID.

        Raises:
            Exception: Whatever the tracking recorder raises.
        """
        self._dispatcher.send_alert(record)
        return self._recorder.record_failure(record)

    def process(self, event: Mapping[str, Any]) -> PaymentFailure:
        """Normalize a supported event and deliver it to both sinks.

        Args:
            event: Verified event of a supported type

        Returns:
            The normalized record.

        Raises:
            MonitorError: PROCESSING_FAILED if normalization or the Airtable
                write fails.
        """
        event_type = event.get("type")
        event_id = event.get("id")

        try:
            record = normalize(event)
            self.deliver(record)
            self._audit_log.append(
                f"Successfully processed failed payment: {record.payment_id}"
            )
        except Exception as e:
            self._audit_log.append(f"Error processing failed payment: {e}")
            self._audit_log.append(f"Error processing webhook: {e}")
            log_webhook_event(logger, event_type, event_id, result="error", error=str(e))
            raise MonitorError(
                ErrorCode.PROCESSING_FAILED,
                details={"message": str(e)},
            ) from e

        self._audit_log.append(f"Webhook processed: {event_type}")
        log_webhook_event(
            logger,
            event_type,
            event_id,
            payment_id=record.payment_id,
            result="success",
        )
        return record

    def handle(self, payload: bytes, signature: str | None) -> PaymentFailure | None:
        """Full ingress pipeline for one webhook delivery.

        Returns:
            The processed record, or None when the event type is ignored.

        Raises:
            MonitorError: On verification (400) or processing (500) failure.
        """
        event = self.verify(payload, signature)

        if not self.is_supported(event):
            log_webhook_event(
                logger, event.get("type"), event.get("id"), result="skipped"
            )
            return None

        return self.process(event)

    def run_self_test(self) -> PaymentFailure:
        """Deliver a synthetic failure to both sinks, bypassing verification.

        Raises:
            Exception: Whatever the tracking recorder raises.
        """
        record = build_test_failure()
        self.deliver(record)
        return record
