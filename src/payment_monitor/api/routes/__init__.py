"""API routes package.

Routers are organized by concern:

- monitor: Service descriptor, health, logs and self-test endpoints
- webhooks: Stripe webhook ingress

All routers are registered in main.py without a prefix.
"""

from payment_monitor.api.routes.monitor import router as monitor_router
from payment_monitor.api.routes.webhooks import router as webhooks_router

__all__ = [
    "monitor_router",
    "webhooks_router",
]
