"""FastAPI application for the payment monitor.

This package provides REST endpoints for:
- Stripe webhook ingress (POST /webhook/stripe)
- Operational endpoints (GET /, GET /health, GET /logs, POST /test)
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from mangum import Mangum

from payment_monitor import __version__
from payment_monitor.api.dependencies import get_audit_log
from payment_monitor.api.exceptions import register_exception_handlers
from payment_monitor.api.middleware.correlation import CorrelationIdMiddleware
from payment_monitor.api.routes.monitor import router as monitor_router
from payment_monitor.api.routes.webhooks import router as webhooks_router
from payment_monitor.config import get_settings
from payment_monitor.utils.logging import configure_logging

logger = logging.getLogger(__name__)
configure_logging(logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Record the startup in the audit log of the serving process."""
    audit_log = app.dependency_overrides.get(get_audit_log, get_audit_log)()
    audit_log.append(f"Payment Monitor started on port {get_settings().port}")
    yield


app = FastAPI(
    title="Payment Monitor",
    description="Stripe payment-failure alerts and Airtable tracking",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(CorrelationIdMiddleware)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.include_router(monitor_router)
app.include_router(webhooks_router)


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int | None = None, reload: bool = False) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: PORT setting, 3000)
        reload: Enable hot reload for development (default: False)
    """
    import uvicorn

    if port is not None:
        # Reload workers rebuild settings from the environment
        os.environ["PORT"] = str(port)
        get_settings.cache_clear()
    port = get_settings().port

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run("payment_monitor.api.main:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
