"""API request/response models.

Domain models (PaymentFailure, LogEntry) live in payment_monitor.models;
this module holds the HTTP envelope shapes only.
"""

from pydantic import BaseModel, ConfigDict, Field

from payment_monitor.models.errors import ErrorResponse
from payment_monitor.models.payment_failure import LogEntry, PaymentFailure

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LogsResponse",
    "SelfTestErrorResponse",
    "SelfTestResponse",
    "ServiceDescriptor",
    "WebhookResponse",
]


class WebhookResponse(BaseModel):
    """Acknowledgement returned to Stripe."""

    received: bool = True


class ServiceDescriptor(BaseModel):
    """Service status and available endpoints."""

    name: str
    status: str
    endpoints: dict[str, str]


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: str


class LogsResponse(BaseModel):
    logs: list[LogEntry]


class SelfTestResponse(BaseModel):
    """Result of a successful manual self-test."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Test completed"
    test_data: PaymentFailure = Field(..., alias="testData")


class SelfTestErrorResponse(BaseModel):
    success: bool = False
    error: str
