"""Stripe webhook event shapes handled by the payment monitor.

Only the fields the normalizer reads are modelled; everything else in the
Stripe payload is ignored.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"
INVOICE_PAYMENT_FAILED = "invoice.payment_failed"
CHARGE_FAILED = "charge.failed"

SUPPORTED_EVENT_TYPES: frozenset[str] = frozenset(
    {PAYMENT_INTENT_FAILED, INVOICE_PAYMENT_FAILED, CHARGE_FAILED}
)


class _StripeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


# === Payment objects ===


class LastPaymentError(_StripeModel):
    code: str | None = None
    message: str | None = None


class PaymentIntentObject(_StripeModel):
    id: str
    receipt_email: str | None = None
    amount: int
    currency: str
    last_payment_error: LastPaymentError | None = None


class InvoiceObject(_StripeModel):
    id: str
    customer_email: str | None = None
    amount_due: int
    currency: str


class BillingDetails(_StripeModel):
    email: str | None = None


class ChargeObject(_StripeModel):
    id: str
    receipt_email: str | None = None
    billing_details: BillingDetails | None = None
    amount: int
    currency: str
    failure_code: str | None = None
    failure_message: str | None = None


class PaymentIntentData(_StripeModel):
    object: PaymentIntentObject


class InvoiceData(_StripeModel):
    object: InvoiceObject


class ChargeData(_StripeModel):
    object: ChargeObject


# === Events ===


class PaymentIntentFailedEvent(_StripeModel):
    """payment_intent.payment_failed"""

    id: str | None = None
    type: Literal["payment_intent.payment_failed"]
    created: int
    data: PaymentIntentData


class InvoicePaymentFailedEvent(_StripeModel):
    """invoice.payment_failed"""

    id: str | None = None
    type: Literal["invoice.payment_failed"]
    created: int
    data: InvoiceData


class ChargeFailedEvent(_StripeModel):
    """charge.failed"""

    id: str | None = None
    type: Literal["charge.failed"]
    created: int
    data: ChargeData


PaymentFailureEvent = Annotated[
    Union[PaymentIntentFailedEvent, InvoicePaymentFailedEvent, ChargeFailedEvent],
    Field(discriminator="type"),
]

payment_failure_event_adapter: TypeAdapter[PaymentFailureEvent] = TypeAdapter(
    PaymentFailureEvent
)
