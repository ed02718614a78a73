"""FastAPI exception handlers for converting MonitorError to HTTP responses.

The ErrorCode-to-HTTP status mapping:
- 400 Bad Request: Webhook signature could not be verified
- 500 Internal Server Error: Anything else, including normalization and
  tracking-table failures (the handler wraps those as PROCESSING_FAILED)

Usage:
    from payment_monitor.api.exceptions import register_exception_handlers
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from payment_monitor.models.errors import ErrorCode, MonitorError

ERROR_CODE_TO_HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.INVALID_WEBHOOK_SIGNATURE: HTTP_400_BAD_REQUEST,
    ErrorCode.PROCESSING_FAILED: HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status_for_error(code: ErrorCode) -> int:
    """Get HTTP status code for an ErrorCode, defaulting to 500."""
    return ERROR_CODE_TO_HTTP_STATUS.get(code, HTTP_500_INTERNAL_SERVER_ERROR)


async def monitor_error_handler(request: Request, exc: MonitorError) -> JSONResponse:
    """Convert a MonitorError into a JSON ErrorResponse.

    Args:
        request: The incoming request (unused but required by FastAPI)
        exc: The MonitorError exception

    Returns:
        JSONResponse with error details and appropriate status code.
    """
    return JSONResponse(
        status_code=get_http_status_for_error(exc.code),
        content=exc.to_error_response().model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(MonitorError, monitor_error_handler)  # type: ignore[arg-type]
