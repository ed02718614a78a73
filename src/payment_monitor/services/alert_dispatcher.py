"""Email alerts for failed payments.

Alert delivery is best-effort: failures are written to the audit log and
never propagate, so the Airtable record is always attempted afterwards.
"""

from payment_monitor.models.payment_failure import PaymentFailure
from payment_monitor.services.audit_log import AuditLog
from payment_monitor.services.gmail_service import EmailSender
from payment_monitor.utils.logging import get_logger, log_payment_failure
from payment_monitor.utils.presentation import (
    display_currency,
    display_value,
    format_major_units,
)

logger = get_logger(__name__)


def build_subject(record: PaymentFailure) -> str:
    return f"Payment Failed Alert - {record.customer_email}"


def build_body(record: PaymentFailure) -> str:
    """Render the plain-text alert body for a payment failure."""
    return "\n".join(
        [
            "Payment Failure Detected!",
            "",
            "Details:",
            f"- Payment ID: {record.payment_id}",
            f"- Customer: {display_value(record.customer_email)}",
            f"- Amount: ${format_major_units(record.amount)} {display_currency(record.currency)}",
            f"- Failure Code: {display_value(record.failure_code)}",
            f"- Failure Message: {display_value(record.failure_message)}",
            f"- Date: {record.failed_at}",
            "",
            "Please review and take appropriate action.",
        ]
    )


class AlertDispatcher:
    """Sends a payment-failure alert email to the configured recipient."""

    def __init__(self, sender: EmailSender, audit_log: AuditLog, recipient: str) -> None:
        self._sender = sender
        self._audit_log = audit_log
        self._recipient = recipient

    def send_alert(self, record: PaymentFailure) -> None:
        """Email an alert for the record. Never raises."""
        try:
            self._sender.send(
                to=self._recipient,
                subject=build_subject(record),
                body=build_body(record),
            )
        except Exception as e:
            self._audit_log.append(f"Error sending Gmail alert: {e}")
            log_payment_failure(
                logger,
                "send_alert",
                payment_id=record.payment_id,
                result="error",
                error=str(e),
            )
            return

        self._audit_log.append(f"Gmail alert sent for payment {record.payment_id}")
        log_payment_failure(
            logger,
            "send_alert",
            payment_id=record.payment_id,
            amount_cents=record.amount,
            currency=record.currency,
            result="success",
        )
