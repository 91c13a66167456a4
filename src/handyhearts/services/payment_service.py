"""
Payment Service - creates payment intents and verifies Stripe webhooks.

The charge amount is always the pricing engine total, verbatim. Runs in
"offline" mode (no Stripe calls) unless PAYMENT_MODE=stripe and a secret
key is configured.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

import stripe

from ..config.settings import get_settings, Settings
from ..engine.models import PriceBreakdown

logger = logging.getLogger(__name__)


class PaymentProviderError(RuntimeError):
    """Raised when the payment processor rejects or fails a request."""


class WebhookVerificationError(ValueError):
    """Raised when a webhook payload cannot be authenticated."""


@dataclass
class PaymentIntentResult:
    """What the client needs to confirm a payment."""
    intent_id: str
    client_secret: Optional[str]
    amount_cents: int
    currency: str
    mode: str  # "stripe" or "offline"


class PaymentService:
    """Thin wrapper around the Stripe PaymentIntent and Webhook APIs."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @property
    def mode(self) -> str:
        return "stripe" if self.settings.stripe_enabled else "offline"

    def create_intent(self, breakdown: PriceBreakdown, metadata: Optional[dict] = None) -> PaymentIntentResult:
        """
        Create a payment intent for a quote's total.

        Args:
            breakdown: Quote computed from the server's catalog record
            metadata: String key/values attached to the intent

        Returns:
            PaymentIntentResult with the client secret (None when offline)
        """
        amount = breakdown.total_cents
        currency = self.settings.payment_currency
        metadata = {k: str(v) for k, v in (metadata or {}).items() if v is not None}

        if self.mode == "offline":
            intent_id = f"pi_offline_{uuid.uuid4().hex[:24]}"
            logger.info("Offline payment intent %s for %d %s", intent_id, amount, currency)
            return PaymentIntentResult(
                intent_id=intent_id,
                client_secret=None,
                amount_cents=amount,
                currency=currency,
                mode="offline",
            )

        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                metadata=metadata,
                automatic_payment_methods={"enabled": True},
                api_key=self.settings.stripe_secret_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe rejected payment intent for %d %s: %s", amount, currency, e)
            raise PaymentProviderError(str(e)) from e

        logger.info("Created payment intent %s for %d %s", intent["id"], amount, currency)
        return PaymentIntentResult(
            intent_id=intent["id"],
            client_secret=intent["client_secret"],
            amount_cents=amount,
            currency=currency,
            mode="stripe",
        )

    def construct_event(self, payload: bytes, signature: Optional[str]):
        """Verify a webhook signature and parse the event."""
        secret = self.settings.stripe_webhook_secret
        if not secret:
            raise WebhookVerificationError("Webhook secret is not configured")
        if not signature:
            raise WebhookVerificationError("Missing stripe-signature header")

        try:
            return stripe.Webhook.construct_event(payload, signature, secret)
        except stripe.SignatureVerificationError as e:
            logger.warning("Webhook signature verification failed: %s", e)
            raise WebhookVerificationError(str(e)) from e
        except ValueError as e:
            logger.warning("Webhook payload is not valid JSON: %s", e)
            raise WebhookVerificationError(f"Invalid payload: {e}") from e
