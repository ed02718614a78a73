"""Pytest configuration and fixtures for payment monitor tests.

This module provides reusable fixtures for testing:
- Mocked Gmail sender and Airtable table collaborators
- Services wired to a fresh AuditLog per test
- Sample Stripe payment-failure events
- A TestClient with service dependencies overridden
"""

import hashlib
import hmac
import json
import os
import time
from typing import Any, Generator
from unittest.mock import MagicMock

import pytest

# === Environment Setup ===

# Set environment variables for testing before imports
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-1")
os.environ.setdefault("ENVIRONMENT", "test")

if not os.environ.get("AWS_PROFILE") and not os.environ.get("AWS_ACCESS_KEY_ID"):
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")

from payment_monitor.api.dependencies import (  # noqa: E402
    get_audit_log,
    get_webhook_handler,
    reset_services,
)
from payment_monitor.services.alert_dispatcher import AlertDispatcher  # noqa: E402
from payment_monitor.services.audit_log import AuditLog  # noqa: E402
from payment_monitor.services.stripe_service import StripeService  # noqa: E402
from payment_monitor.services.tracking_recorder import TrackingRecorder  # noqa: E402
from payment_monitor.services.webhook_handler import WebhookHandler  # noqa: E402

TEST_WEBHOOK_SECRET = "whsec_test_secret_for_testing"
TEST_ALERT_EMAIL = "alerts@example.com"
TEST_AIRTABLE_RECORD_ID = "recTEST123ABC"


# === Helper Functions ===


def make_stripe_signature(
    payload: bytes,
    secret: str = TEST_WEBHOOK_SECRET,
    timestamp: int | None = None,
) -> str:
    """Create a valid Stripe webhook signature.

    Stripe signatures use HMAC-SHA256 with format: t={timestamp},v1={signature}
    """
    timestamp = timestamp if timestamp is not None else int(time.time())
    signed_payload = f"{timestamp}.{payload.decode('utf-8')}"
    signature = hmac.new(
        secret.encode("utf-8"),
        signed_payload.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


def encode_event(event: dict[str, Any]) -> bytes:
    return json.dumps(event).encode("utf-8")


# === Service State ===


@pytest.fixture(autouse=True)
def reset_service_singletons() -> Generator[None, None, None]:
    """Clear cached services and settings before and after each test."""
    reset_services()
    yield
    reset_services()


# === Collaborator Fixtures ===


@pytest.fixture
def audit_log() -> AuditLog:
    return AuditLog()


@pytest.fixture
def mock_email_sender() -> MagicMock:
    """Gmail sender stand-in; send() succeeds unless a side_effect is set."""
    sender = MagicMock()
    sender.send.return_value = None
    return sender


@pytest.fixture
def mock_airtable_table() -> MagicMock:
    """Airtable table stand-in returning a created record."""
    table = MagicMock()
    table.create.return_value = {
        "id": TEST_AIRTABLE_RECORD_ID,
        "createdTime": "2024-01-01T00:00:00.000Z",
        "fields": {},
    }
    return table


@pytest.fixture
def dispatcher(mock_email_sender: MagicMock, audit_log: AuditLog) -> AlertDispatcher:
    return AlertDispatcher(mock_email_sender, audit_log, recipient=TEST_ALERT_EMAIL)


@pytest.fixture
def recorder(mock_airtable_table: MagicMock, audit_log: AuditLog) -> TrackingRecorder:
    return TrackingRecorder(mock_airtable_table, audit_log)


@pytest.fixture
def stripe_service() -> StripeService:
    return StripeService(webhook_secret=TEST_WEBHOOK_SECRET)


@pytest.fixture
def webhook_handler(
    stripe_service: StripeService,
    dispatcher: AlertDispatcher,
    recorder: TrackingRecorder,
    audit_log: AuditLog,
) -> WebhookHandler:
    return WebhookHandler(
        stripe_service=stripe_service,
        dispatcher=dispatcher,
        recorder=recorder,
        audit_log=audit_log,
    )


@pytest.fixture
def client(
    webhook_handler: WebhookHandler,
    audit_log: AuditLog,
) -> Generator[Any, None, None]:
    """TestClient with the webhook handler and audit log overridden."""
    from fastapi.testclient import TestClient

    from payment_monitor.api.main import app

    app.dependency_overrides[get_webhook_handler] = lambda: webhook_handler
    app.dependency_overrides[get_audit_log] = lambda: audit_log
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# === Sample Event Fixtures ===


@pytest.fixture
def payment_intent_failed_event() -> dict[str, Any]:
    """Sample payment_intent.payment_failed webhook event."""
    return {
        "id": "evt_test_pi_failed_123",
        "type": "payment_intent.payment_failed",
        "created": 1704067200,  # 2024-01-01 00:00:00 UTC
        "data": {
            "object": {
                "id": "pi_3ABC123DEF456",
                "object": "payment_intent",
                "amount": 112500,
                "currency": "eur",
                "receipt_email": "guest@example.com",
                "last_payment_error": {
                    "code": "card_declined",
                    "message": "Your card was declined.",
                },
            }
        },
    }


@pytest.fixture
def invoice_payment_failed_event() -> dict[str, Any]:
    """Sample invoice.payment_failed webhook event."""
    return {
        "id": "evt_test_invoice_failed_456",
        "type": "invoice.payment_failed",
        "created": 1704153600,  # 2024-01-02 00:00:00 UTC
        "data": {
            "object": {
                "id": "in_1XYZ789",
                "object": "invoice",
                "amount_due": 4999,
                "currency": "usd",
                "customer_email": "billing@example.com",
            }
        },
    }


@pytest.fixture
def charge_failed_event() -> dict[str, Any]:
    """Sample charge.failed event with the email only on billing details."""
    return {
        "id": "evt_test_charge_failed_789",
        "type": "charge.failed",
        "created": 1704240000,  # 2024-01-03 00:00:00 UTC
        "data": {
            "object": {
                "id": "ch_3DEF456GHI789",
                "object": "charge",
                "amount": 2500,
                "currency": "usd",
                "receipt_email": None,
                "billing_details": {"email": "a@b.com", "name": "Jane Doe"},
                "failure_code": "insufficient_funds",
                "failure_message": "Your card has insufficient funds.",
            }
        },
    }
