"""Runtime configuration for the payment monitor.

Values come from environment variables. Secrets that are missing from the
environment can be resolved from SSM Parameter Store under
``/payment-monitor/{environment}/{field_name}`` by setting
``SSM_SECRETS_ENABLED=true``.
"""

import logging
import os
from functools import lru_cache
from typing import ClassVar, Mapping

from pydantic import BaseModel, ConfigDict, Field

from payment_monitor.services.ssm_service import SSMServiceError, get_ssm_service

logger = logging.getLogger(__name__)

DEFAULT_AIRTABLE_BASE_ID = "appUNIsu8KgvOlmi0"
DEFAULT_ALERT_EMAIL = "admin@example.com"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process configuration loaded once at startup."""

    model_config = ConfigDict(frozen=True)

    # Field name -> environment variable
    ENV_VARS: ClassVar[dict[str, str]] = {
        "port": "PORT",
        "environment": "ENVIRONMENT",
        "stripe_secret_key": "STRIPE_SECRET_KEY",
        "stripe_webhook_secret": "STRIPE_WEBHOOK_SECRET",
        "airtable_api_key": "AIRTABLE_API_KEY",
        "airtable_base_id": "AIRTABLE_BASE_ID",
        "gmail_client_id": "GMAIL_CLIENT_ID",
        "gmail_client_secret": "GMAIL_CLIENT_SECRET",
        "gmail_refresh_token": "GMAIL_REFRESH_TOKEN",
        "alert_email": "ALERT_EMAIL",
    }

    SECRET_FIELDS: ClassVar[tuple[str, ...]] = (
        "stripe_secret_key",
        "stripe_webhook_secret",
        "airtable_api_key",
        "gmail_client_id",
        "gmail_client_secret",
        "gmail_refresh_token",
    )

    port: int = Field(default=3000, description="HTTP listening port")
    environment: str = Field(default="dev", description="Deployment environment")
    stripe_secret_key: str | None = None
    stripe_webhook_secret: str | None = None
    airtable_api_key: str | None = None
    airtable_base_id: str = DEFAULT_AIRTABLE_BASE_ID
    gmail_client_id: str | None = None
    gmail_client_secret: str | None = None
    gmail_refresh_token: str | None = None
    alert_email: str = DEFAULT_ALERT_EMAIL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Populated Settings instance.
        """
        environ = os.environ if environ is None else environ

        values: dict[str, str] = {}
        for field_name, env_var in cls.ENV_VARS.items():
            value = environ.get(env_var)
            if value:
                values[field_name] = value

        if environ.get("SSM_SECRETS_ENABLED", "").lower() in _TRUTHY:
            environment = values.get("environment", "dev")
            for field_name in cls.SECRET_FIELDS:
                if field_name not in values:
                    secret = _load_secret_from_ssm(environment, field_name)
                    if secret is not None:
                        values[field_name] = secret

        return cls(**values)


def _load_secret_from_ssm(environment: str, field_name: str) -> str | None:
    name = f"/payment-monitor/{environment}/{field_name}"
    try:
        return get_ssm_service().get_parameter(name)
    except SSMServiceError as e:
        logger.warning("Secret %s not available from SSM: %s", field_name, e)
        return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the process-wide Settings instance."""
    return Settings.from_env()
