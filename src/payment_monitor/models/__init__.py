"""Data models for the payment monitor."""

from .errors import ERROR_MESSAGES, ErrorCode, ErrorResponse, MonitorError
from .payment_failure import LogEntry, PaymentFailure, iso_timestamp
from .stripe_events import (
    CHARGE_FAILED,
    INVOICE_PAYMENT_FAILED,
    PAYMENT_INTENT_FAILED,
    SUPPORTED_EVENT_TYPES,
    ChargeFailedEvent,
    InvoicePaymentFailedEvent,
    PaymentFailureEvent,
    PaymentIntentFailedEvent,
)

__all__ = [
    "CHARGE_FAILED",
    "ERROR_MESSAGES",
    "INVOICE_PAYMENT_FAILED",
    "PAYMENT_INTENT_FAILED",
    "SUPPORTED_EVENT_TYPES",
    "ChargeFailedEvent",
    "ErrorCode",
    "ErrorResponse",
    "InvoicePaymentFailedEvent",
    "LogEntry",
    "MonitorError",
    "PaymentFailure",
    "PaymentFailureEvent",
    "PaymentIntentFailedEvent",
    "iso_timestamp",
]
