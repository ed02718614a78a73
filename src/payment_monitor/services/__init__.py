"""Backend services for the payment monitor."""

from .alert_dispatcher import AlertDispatcher
from .audit_log import AuditLog
from .event_normalizer import normalize
from .ssm_service import SSMService, SSMServiceError, get_ssm_service
from .stripe_service import StripeService, StripeServiceError
from .tracking_recorder import TrackingRecorder
from .webhook_handler import WebhookHandler

__all__ = [
    "AlertDispatcher",
    "AuditLog",
    "normalize",
    "SSMService",
    "SSMServiceError",
    "get_ssm_service",
    "StripeService",
    "StripeServiceError",
    "TrackingRecorder",
    "WebhookHandler",
]
