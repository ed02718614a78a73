"""Canonical payment-failure record and audit log entry models."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


def iso_timestamp(value: dt.datetime | float | int | None = None) -> str:
    """Render a UTC ISO-8601 timestamp with millisecond precision.

    Args:
        value: A datetime, epoch seconds, or None for the current time.

    Returns:
        Timestamp string such as ``2024-01-01T00:00:00.000Z``.
    """
    if value is None:
        moment = dt.datetime.now(dt.UTC)
    elif isinstance(value, dt.datetime):
        moment = value.astimezone(dt.UTC)
    else:
        moment = dt.datetime.fromtimestamp(value, tz=dt.UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PaymentFailure(BaseModel):
    """Uniform record every supported Stripe failure event is normalized into.

    Amounts stay in minor currency units and currency stays as received;
    each sink renders its own presentation of the record.
    """

    model_config = ConfigDict(frozen=True)

    payment_id: str = Field(
        ...,
        description="Stripe object ID of the failed payment",
        examples=["pi_3ABC123DEF456", "in_1XYZ", "ch_3ABC123DEF456"],
    )
    customer_email: str = Field(
        default="Unknown",
        description="Customer email, 'Unknown' when Stripe did not supply one",
    )
    amount: int = Field(
        ...,
        description="Amount in minor currency units (cents)",
        examples=[2500],
    )
    currency: str = Field(
        ...,
        description="ISO 4217 currency code as received (lowercase)",
        examples=["usd", "eur"],
    )
    failure_code: str | None = Field(
        default=None,
        description="Stripe failure code, if any",
        examples=["card_declined"],
    )
    failure_message: str | None = Field(
        default=None,
        description="Stripe failure message, if any",
    )
    failed_at: str = Field(
        ...,
        description="ISO-8601 time the event was created at Stripe",
        examples=["2024-01-01T00:00:00.000Z"],
    )


class LogEntry(BaseModel):
    """A single timestamped audit log message."""

    model_config = ConfigDict(frozen=True)

    timestamp: str
    message: str
