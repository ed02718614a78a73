"""Durable tracking of failed payments in Airtable.

Unlike email alerts, a failed Airtable write is re-raised after being
logged so the webhook responds with 500 and Stripe redelivers the event.
"""

from typing import Any

from payment_monitor.models.payment_failure import PaymentFailure, iso_timestamp
from payment_monitor.services.airtable_service import RecordTable
from payment_monitor.services.audit_log import AuditLog
from payment_monitor.utils.logging import get_logger, log_payment_failure
from payment_monitor.utils.presentation import (
    display_currency,
    display_value,
    major_units,
)

logger = get_logger(__name__)

INITIAL_STATUS = "New"


def build_fields(record: PaymentFailure, created_at: str | None = None) -> dict[str, Any]:
    """Build the Airtable row for a payment failure.

    Args:
        record: Canonical payment failure
        created_at: Row creation timestamp (default: now)

    Returns:
        Mapping of Airtable column name to value.
    """
    return {
        "Payment ID": record.payment_id,
        "Customer Email": display_value(record.customer_email),
        "Amount": major_units(record.amount),
        "Currency": display_currency(record.currency),
        "Failure Code": display_value(record.failure_code),
        "Failure Message": display_value(record.failure_message),
        "Failed At": record.failed_at,
        "Status": INITIAL_STATUS,
        "Created At": created_at or iso_timestamp(),
    }


class TrackingRecorder:
    """Creates one Failed Payments row per payment failure."""

    def __init__(self, table: RecordTable, audit_log: AuditLog) -> None:
        self._table = table
        self._audit_log = audit_log

    def record_failure(self, record: PaymentFailure) -> str:
        """Create the tracking row and return its Airtable record ID.

        Raises:
            Exception: Any Airtable error, after it has been logged.
        """
        try:
            created = self._table.create(build_fields(record))
        except Exception as e:
            self._audit_log.append(f"Error adding to Airtable: {e}")
            log_payment_failure(
                logger,
                "record_failure",
                payment_id=record.payment_id,
                result="error",
                error=str(e),
            )
            raise

        record_id = created["id"]
        self._audit_log.append(f"Added to Airtable: {record_id}")
        log_payment_failure(
            logger,
            "record_failure",
            payment_id=record.payment_id,
            result="success",
            airtable_record_id=record_id,
        )
        return record_id
