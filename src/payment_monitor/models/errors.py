"""Standard error codes for the payment monitor.

All service-layer failures that surface over HTTP are raised as
MonitorError and converted to an ErrorResponse by the API exception
handlers.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """Error codes returned in ErrorResponse bodies."""

    # Webhook ingress (ERR_WEBHOOK_001-ERR_WEBHOOK_002)
    INVALID_WEBHOOK_SIGNATURE = "ERR_WEBHOOK_001"
    PROCESSING_FAILED = "ERR_WEBHOOK_002"

    # Event normalization (ERR_EVENT_001-ERR_EVENT_002)
    UNSUPPORTED_EVENT_TYPE = "ERR_EVENT_001"
    MALFORMED_EVENT = "ERR_EVENT_002"


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.INVALID_WEBHOOK_SIGNATURE: "Invalid webhook signature",
    ErrorCode.PROCESSING_FAILED: "Failed to process payment failure event",
    ErrorCode.UNSUPPORTED_EVENT_TYPE: "Event type is not a supported payment failure",
    ErrorCode.MALFORMED_EVENT: "Event payload is missing required payment fields",
}


class ErrorResponse(BaseModel):
    """JSON body returned for failed requests."""

    model_config = ConfigDict(strict=True)

    success: bool = False
    error_code: ErrorCode
    message: str
    details: Optional[dict[str, str]] = None


class MonitorError(Exception):
    """Exception raised by monitor operations.

    Can be caught and converted to an ErrorResponse for HTTP responses.
    """

    def __init__(
        self,
        code: ErrorCode,
        details: Optional[dict[str, str]] = None,
    ):
        self.code = code
        self.message = ERROR_MESSAGES[code]
        self.details = details
        super().__init__(self.message)

    def to_error_response(self) -> ErrorResponse:
        """Convert this exception to an ErrorResponse."""
        return ErrorResponse(
            error_code=self.code,
            message=self.message,
            details=self.details,
        )
