"""Stripe webhook signature verification.

Verifies the Stripe-Signature header against the raw request body with
the Stripe SDK and returns the decoded event payload.
"""

import logging
from typing import Any

import stripe

logger = logging.getLogger(__name__)

# Seconds a signed timestamp stays valid (Stripe SDK default)
DEFAULT_TOLERANCE = 300


class StripeServiceError(Exception):
    """Raised when a Stripe operation fails."""

    pass


class StripeService:
    """Service for Stripe webhook handling.

    Usage:
        stripe_svc = StripeService(webhook_secret="whsec_...")
        event = stripe_svc.verify_webhook_signature(payload, signature)
    """

    def __init__(
        self,
        webhook_secret: str | None,
        *,
        tolerance: int = DEFAULT_TOLERANCE,
    ) -> None:
        self._webhook_secret = webhook_secret
        self._tolerance = tolerance

    def verify_webhook_signature(self, payload: bytes, signature: str) -> dict[str, Any]:
        """Verify a webhook signature and parse the event.

        Args:
            payload: Raw request body bytes (must not be re-serialized).
            signature: Stripe-Signature header value.

        Returns:
            Parsed Stripe event dictionary.

        Raises:
            StripeServiceError: If the secret is missing, the signature is
                invalid, or the payload is not valid JSON.
        """
        if not self._webhook_secret:
            raise StripeServiceError("Webhook secret is not configured")

        try:
            event = stripe.Webhook.construct_event(
                payload, signature, self._webhook_secret, self._tolerance
            )
        except stripe.SignatureVerificationError as e:
            logger.warning("Invalid webhook signature: %s", str(e))
            raise StripeServiceError(f"Invalid webhook signature: {e}") from e
        except (ValueError, AttributeError) as e:
            # Undecodable body, bad JSON, or JSON that is not an object
            raise StripeServiceError(f"Invalid webhook payload: {e}") from e

        parsed = event.to_dict()
        logger.info("Webhook signature verified for event: %s", parsed.get("id"))
        return parsed
