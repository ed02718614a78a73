"""Operational endpoints: service descriptor, health, recent logs, self-test.

These endpoints are unauthenticated and intended for operators.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from payment_monitor.api.dependencies import get_audit_log, get_webhook_handler
from payment_monitor.api.models import (
    HealthResponse,
    LogsResponse,
    SelfTestErrorResponse,
    SelfTestResponse,
    ServiceDescriptor,
)
from payment_monitor.models.payment_failure import iso_timestamp
from payment_monitor.services.audit_log import AuditLog
from payment_monitor.services.webhook_handler import WebhookHandler
from payment_monitor.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["monitor"])

SERVICE_NAME = "Payment Monitor"
RECENT_LOG_COUNT = 20

ENDPOINTS: dict[str, str] = {
    "GET /": "Status and available endpoints",
    "GET /health": "Health check",
    "GET /logs": "View recent logs",
    "POST /test": "Manual test run",
    "POST /webhook/stripe": "Stripe webhook endpoint",
}


@router.get("/", response_model=ServiceDescriptor, summary="Service status")
async def describe_service() -> ServiceDescriptor:
    return ServiceDescriptor(name=SERVICE_NAME, status="running", endpoints=ENDPOINTS)


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health() -> HealthResponse:
    return HealthResponse(status="healthy", timestamp=iso_timestamp())


@router.get("/logs", response_model=LogsResponse, summary="Recent audit log entries")
async def recent_logs(audit_log: AuditLog = Depends(get_audit_log)) -> LogsResponse:
    """Return the most recent audit log entries, oldest first."""
    return LogsResponse(logs=audit_log.snapshot(RECENT_LOG_COUNT))


@router.post(
    "/test",
    response_model=SelfTestResponse,
    response_model_by_alias=True,
    summary="Manual self-test",
    responses={500: {"model": SelfTestErrorResponse}},
)
async def run_self_test(
    handler: WebhookHandler = Depends(get_webhook_handler),
) -> SelfTestResponse | JSONResponse:
    """Send a synthetic payment failure through both sinks.

    Validates Gmail and Airtable connectivity without waiting for a real
    Stripe event. Alert failures are only logged; Airtable failures
    return 500.
    """
    try:
        record = await run_in_threadpool(handler.run_self_test)
    except Exception as e:
        logger.exception("Self-test failed: %s", e)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=SelfTestErrorResponse(error=str(e)).model_dump(),
        )

    return SelfTestResponse(test_data=record)
