"""FastAPI dependency injection providers for shared services.

This module provides factory functions for service instances using @lru_cache
so each process holds a single instance of every service. Services are lazily
instantiated on first use.

Usage in routes:
    from payment_monitor.api.dependencies import get_webhook_handler

    @router.post("/webhook/stripe")
    async def stripe_webhook(
        handler: WebhookHandler = Depends(get_webhook_handler),
    ):
        ...

Service Dependency Graph:
    Settings (get_settings)
    AuditLog (process-wide ring buffer)
    WebhookHandler
        ├── StripeService
        ├── AlertDispatcher
        │       └── GmailSender
        └── TrackingRecorder
                └── FailedPaymentsTable

Testing:
    Override get_webhook_handler / get_audit_log via app.dependency_overrides,
    or call reset_services() to clear cached instances between tests.
"""

from functools import lru_cache

from payment_monitor.config import get_settings
from payment_monitor.services.airtable_service import FailedPaymentsTable
from payment_monitor.services.alert_dispatcher import AlertDispatcher
from payment_monitor.services.audit_log import AuditLog
from payment_monitor.services.gmail_service import GmailSender
from payment_monitor.services.stripe_service import StripeService
from payment_monitor.services.tracking_recorder import TrackingRecorder
from payment_monitor.services.webhook_handler import WebhookHandler


@lru_cache
def get_audit_log() -> AuditLog:
    """Get the process-wide AuditLog instance."""
    return AuditLog()


@lru_cache
def get_stripe_service() -> StripeService:
    """Get cached StripeService configured with the webhook signing secret."""
    return StripeService(webhook_secret=get_settings().stripe_webhook_secret)


@lru_cache
def get_alert_dispatcher() -> AlertDispatcher:
    """Get cached AlertDispatcher sending through Gmail."""
    settings = get_settings()
    sender = GmailSender(
        client_id=settings.gmail_client_id,
        client_secret=settings.gmail_client_secret,
        refresh_token=settings.gmail_refresh_token,
    )
    return AlertDispatcher(sender, get_audit_log(), recipient=settings.alert_email)


@lru_cache
def get_tracking_recorder() -> TrackingRecorder:
    """Get cached TrackingRecorder writing to the Failed Payments table."""
    settings = get_settings()
    table = FailedPaymentsTable(settings.airtable_api_key, settings.airtable_base_id)
    return TrackingRecorder(table, get_audit_log())


@lru_cache
def get_webhook_handler() -> WebhookHandler:
    """Get cached WebhookHandler wired with all delivery services.

    Returns:
        WebhookHandler sharing the process-wide AuditLog.
    """
    return WebhookHandler(
        stripe_service=get_stripe_service(),
        dispatcher=get_alert_dispatcher(),
        recorder=get_tracking_recorder(),
        audit_log=get_audit_log(),
    )


def reset_services() -> None:
    """Clear all cached service instances and settings.

    Call this in test fixtures to ensure clean state between tests.
    """
    get_webhook_handler.cache_clear()
    get_tracking_recorder.cache_clear()
    get_alert_dispatcher.cache_clear()
    get_stripe_service.cache_clear()
    get_audit_log.cache_clear()
    get_settings.cache_clear()
