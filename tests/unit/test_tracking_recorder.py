"""Unit tests for the Airtable tracking recorder.

The pyairtable Table is replaced by a MagicMock; no Airtable API calls
are made.
"""

from typing import Any
from unittest.mock import MagicMock

import pytest

from payment_monitor.models.payment_failure import PaymentFailure
from payment_monitor.services.airtable_service import AirtableConfigError, FailedPaymentsTable
from payment_monitor.services.audit_log import AuditLog
from payment_monitor.services.tracking_recorder import TrackingRecorder, build_fields

from tests.conftest import TEST_AIRTABLE_RECORD_ID


@pytest.fixture
def record() -> PaymentFailure:
    return PaymentFailure(
        payment_id="ch_3DEF456GHI789",
        customer_email="a@b.com",
        amount=2500,
        currency="usd",
        failure_code=None,
        failure_message=None,
        failed_at="2024-01-03T00:00:00.000Z",
    )


class TestBuildFields:
    def test_row_uses_presentation_values(self, record: PaymentFailure):
        fields = build_fields(record, created_at="2024-01-03T00:00:05.000Z")

        assert fields == {
            "Payment ID": "ch_3DEF456GHI789",
            "Customer Email": "a@b.com",
            "Amount": 25.0,
            "Currency": "USD",
            "Failure Code": "Unknown",
            "Failure Message": "Unknown",
            "Failed At": "2024-01-03T00:00:00.000Z",
            "Status": "New",
            "Created At": "2024-01-03T00:00:05.000Z",
        }

    def test_created_at_defaults_to_now_not_failed_at(self, record: PaymentFailure):
        fields = build_fields(record)

        assert fields["Created At"] != record.failed_at
        assert fields["Created At"].endswith("Z")

    def test_amount_rounds_to_two_decimals(self, record: PaymentFailure):
        odd = record.model_copy(update={"amount": 1999})

        assert build_fields(odd)["Amount"] == 19.99

    def test_record_is_not_mutated(self, record: PaymentFailure):
        build_fields(record)

        assert record.amount == 2500
        assert record.currency == "usd"


class TestRecordFailure:
    def test_returns_created_record_id(
        self,
        recorder: TrackingRecorder,
        mock_airtable_table: MagicMock,
        record: PaymentFailure,
    ):
        assert recorder.record_failure(record) == TEST_AIRTABLE_RECORD_ID
        mock_airtable_table.create.assert_called_once()

    def test_success_is_logged_with_record_id(
        self, recorder: TrackingRecorder, audit_log: AuditLog, record: PaymentFailure
    ):
        recorder.record_failure(record)

        assert [e.message for e in audit_log.snapshot()] == [
            f"Added to Airtable: {TEST_AIRTABLE_RECORD_ID}"
        ]

    def test_failure_is_logged_and_reraised(
        self,
        recorder: TrackingRecorder,
        mock_airtable_table: MagicMock,
        audit_log: AuditLog,
        record: PaymentFailure,
    ):
        mock_airtable_table.create.side_effect = RuntimeError("422 INVALID_VALUE_FOR_COLUMN")

        with pytest.raises(RuntimeError, match="INVALID_VALUE_FOR_COLUMN"):
            recorder.record_failure(record)

        assert [e.message for e in audit_log.snapshot()] == [
            "Error adding to Airtable: 422 INVALID_VALUE_FOR_COLUMN"
        ]


class TestFailedPaymentsTable:
    def test_missing_api_key_fails_on_first_write(self, audit_log: AuditLog, record: PaymentFailure):
        recorder = TrackingRecorder(FailedPaymentsTable(None, "appTEST"), audit_log)

        with pytest.raises(AirtableConfigError):
            recorder.record_failure(record)

        assert "AIRTABLE_API_KEY is not configured" in audit_log.snapshot()[-1].message

    def test_opens_table_once(self, monkeypatch: pytest.MonkeyPatch):
        api_cls = MagicMock()
        table = api_cls.return_value.table.return_value
        table.create.return_value = {"id": "rec1"}
        monkeypatch.setattr("payment_monitor.services.airtable_service.Api", api_cls)

        failed_payments = FailedPaymentsTable("pat_test", "appTEST")
        fields: dict[str, Any] = {"Payment ID": "pi_1"}
        failed_payments.create(fields)
        failed_payments.create(fields)

        api_cls.assert_called_once_with("pat_test")
        api_cls.return_value.table.assert_called_once_with("appTEST", "Failed Payments")
        assert table.create.call_count == 2
