# =============================================================================
# lib/stripe_client.py - Stripe Payments Wrapper
# =============================================================================
# Wraps the handful of Stripe calls the marketplace and subscription flows
# need: customers, products/prices, subscriptions and payment intents.
#
# Amounts are stored in the database as decimal dollars and converted to
# integer cents only at this boundary.
#
# Usage:
#   from lib.stripe_client import StripeClient
#   if StripeClient.is_configured():
#       intent = StripeClient.create_payment_intent(49.99, customer_id="cus_...")
# =============================================================================

from __future__ import annotations

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

import stripe

from app.config import settings
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


class StripeClientError(ApplicationError):
    """Error during a Stripe API call."""

    status_code = 502

    def __init__(self, message: str, code: str = "STRIPE_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


def to_cents(amount: float | Decimal | str) -> int:
    """Convert a dollar amount to integer cents, rounding half-up."""
    cents = Decimal(str(amount)) * 100
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _field(obj: Any, key: str) -> Any:
    """Read a key from a Stripe object or plain dict, returning None when absent."""
    if obj is None:
        return None
    try:
        return obj[key]
    except (KeyError, TypeError, AttributeError):
        return getattr(obj, key, None)


class StripeClient:
    """
    Class-method wrapper around the stripe SDK.

    Every call raises StripeClientError on failure so routers can turn it
    into a 502 response.
    """

    @staticmethod
    def is_configured() -> bool:
        return settings.stripe_enabled

    @classmethod
    def _ensure_configured(cls) -> None:
        if not cls.is_configured():
            raise StripeClientError(
                message="Stripe is not configured",
                code="STRIPE_NOT_CONFIGURED",
                suggestion="Set STRIPE_SECRET_KEY in your .env file",
            )
        stripe.api_key = settings.STRIPE_SECRET_KEY

    @staticmethod
    def _wrap(action: str, error: Exception) -> StripeClientError:
        logger.error(f"Stripe {action} failed: {error}")
        return StripeClientError(
            message=f"Stripe {action} failed: {error}",
            code="STRIPE_REQUEST_FAILED",
            suggestion="Check the Stripe dashboard for details",
            details={"action": action}
        )

    # -------------------------------------------------------------------------
    # Customers
    # -------------------------------------------------------------------------

    @classmethod
    def create_customer(
        cls,
        email: str | None,
        name: str | None = None,
        user_id: str | None = None,
    ) -> str:
        """Create a Stripe customer and return its ID."""
        cls._ensure_configured()
        try:
            customer = stripe.Customer.create(
                email=email,
                name=name,
                metadata={"userId": user_id} if user_id else {},
            )
        except stripe.StripeError as e:
            raise cls._wrap("customer creation", e)

        logger.info(f"Created Stripe customer {customer.id} for user {user_id}")
        return customer.id

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    @classmethod
    def create_product_with_price(
        cls,
        name: str,
        description: str | None,
        amount: float,
        interval: str | None = None,
    ) -> tuple[str, str]:
        """
        Create a product and a price for it.

        Args:
            interval: "month"/"year" for recurring prices, None for one-off

        Returns:
            Tuple of (product_id, price_id)
        """
        cls._ensure_configured()
        try:
            product = stripe.Product.create(name=name, description=description or None)
            price_kwargs: dict[str, Any] = {
                "product": product.id,
                "unit_amount": to_cents(amount),
                "currency": settings.STRIPE_CURRENCY,
            }
            if interval:
                price_kwargs["recurring"] = {"interval": interval}
            price = stripe.Price.create(**price_kwargs)
        except stripe.StripeError as e:
            raise cls._wrap("product creation", e)

        return product.id, price.id

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    @classmethod
    def create_subscription(cls, customer_id: str, price_id: str) -> dict[str, Any]:
        """
        Create an incomplete subscription awaiting the first payment.

        Returns:
            Dict with `id`, `status` and `client_secret` (for the frontend
            to confirm the first invoice's payment)
        """
        cls._ensure_configured()
        try:
            subscription = stripe.Subscription.create(
                customer=customer_id,
                items=[{"price": price_id}],
                payment_behavior="default_incomplete",
                expand=["latest_invoice.payment_intent"],
            )
        except stripe.StripeError as e:
            raise cls._wrap("subscription creation", e)

        invoice = _field(subscription, "latest_invoice")
        payment_intent = _field(invoice, "payment_intent")
        return {
            "id": subscription.id,
            "status": _field(subscription, "status"),
            "client_secret": _field(payment_intent, "client_secret"),
        }

    @classmethod
    def cancel_subscription(cls, subscription_id: str) -> None:
        cls._ensure_configured()
        try:
            stripe.Subscription.cancel(subscription_id)
        except stripe.StripeError as e:
            raise cls._wrap("subscription cancellation", e)

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    @classmethod
    def create_payment_intent(
        cls,
        amount: float,
        customer_id: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Create a payment intent for a one-off purchase.

        Returns:
            Dict with `id` and `client_secret`
        """
        cls._ensure_configured()
        try:
            intent = stripe.PaymentIntent.create(
                amount=to_cents(amount),
                currency=settings.STRIPE_CURRENCY,
                customer=customer_id,
                metadata=metadata or {},
                automatic_payment_methods={"enabled": True},
            )
        except stripe.StripeError as e:
            raise cls._wrap("payment intent creation", e)

        return {"id": intent.id, "client_secret": intent.client_secret}
