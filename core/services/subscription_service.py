# =============================================================================
# core/services/subscription_service.py - Subscription Business Logic
# =============================================================================
# Plans and user subscriptions. Billing goes through Stripe when it is
# configured; without Stripe keys subscriptions are still recorded, just
# without Stripe IDs or a client secret (useful for local development).
# =============================================================================

import logging
from typing import Any

import pandas as pd

from app.exceptions import AlreadySubscribedError, PermissionDeniedError, ResourceNotFoundError
from core.models.subscription import PlanInterval, SubscriptionPlanCreate, SubscriptionStatus
from lib.stripe_client import StripeClient
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now, utc_now_iso

logger = logging.getLogger(__name__)


def billing_period_end(start, interval: str):
    """End of the first billing period: one calendar month or year after start."""
    offset = pd.DateOffset(years=1) if interval == PlanInterval.YEAR.value else pd.DateOffset(months=1)
    return (pd.Timestamp(start) + offset).to_pydatetime()


class SubscriptionService:
    """Service for subscription plans and user subscriptions."""

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    @staticmethod
    def list_plans(active_only: bool = True) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows(
            "subscription_plans",
            filters={"is_active": True} if active_only else None,
            order_by="price",
            desc=False,
        )

    @staticmethod
    def get_plan(plan_id: int) -> dict[str, Any]:
        plan = SupabaseClient.fetch_by_id("subscription_plans", plan_id)
        if plan is None:
            raise ResourceNotFoundError("Subscription plan", plan_id)
        return plan

    @staticmethod
    def create_plan(plan: SubscriptionPlanCreate) -> dict[str, Any]:
        """Create a plan, with a recurring Stripe price when Stripe is configured."""
        data = plan.model_dump(mode="json")

        if StripeClient.is_configured():
            _, price_id = StripeClient.create_product_with_price(
                name=plan.name,
                description=plan.description,
                amount=plan.price,
                interval=plan.interval.value,
            )
            data["stripe_price_id"] = price_id

        created = SupabaseClient.insert_row("subscription_plans", data)
        logger.info(f"Created subscription plan {created.get('id')}: {plan.name}")
        return created

    # -------------------------------------------------------------------------
    # User subscriptions
    # -------------------------------------------------------------------------

    @staticmethod
    def get_user_subscriptions(user_id: str) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows("user_subscriptions", filters={"user_id": user_id})

    @staticmethod
    def _get_or_create_customer(user_id: str, email: str | None) -> str:
        """Stripe customer for a user, created once and stored on the users row."""
        user = SupabaseClient.fetch_by_id("users", user_id) or {}
        if user.get("stripe_customer_id"):
            return user["stripe_customer_id"]

        customer_id = StripeClient.create_customer(
            email=user.get("email") or email,
            name=user.get("username"),
            user_id=user_id,
        )
        if user:
            SupabaseClient.update_row("users", user_id, {"stripe_customer_id": customer_id})
        return customer_id

    @staticmethod
    def subscribe(user_id: str, plan_id: int, email: str | None = None) -> dict[str, Any]:
        """
        Subscribe a user to a plan.

        Returns:
            {"subscription": row, "client_secret": str | None}

        Raises:
            ResourceNotFoundError: If the plan doesn't exist
            AlreadySubscribedError: If the user already has an active subscription
            StripeClientError: If Stripe rejects the request
        """
        plan = SubscriptionService.get_plan(plan_id)

        active = SupabaseClient.fetch_rows(
            "user_subscriptions",
            filters={"user_id": user_id, "status": SubscriptionStatus.ACTIVE.value},
            limit=1,
        )
        if active:
            raise AlreadySubscribedError(active[0]["id"])

        customer_id = None
        stripe_subscription: dict[str, Any] = {}
        if StripeClient.is_configured():
            customer_id = SubscriptionService._get_or_create_customer(user_id, email)
            if plan.get("stripe_price_id"):
                stripe_subscription = StripeClient.create_subscription(customer_id, plan["stripe_price_id"])
            else:
                logger.warning(f"Plan {plan_id} has no Stripe price; recording subscription without billing")

        start = utc_now()
        subscription = SupabaseClient.insert_row("user_subscriptions", {
            "user_id": user_id,
            "plan_id": plan_id,
            "status": SubscriptionStatus.ACTIVE.value,
            "current_period_start": start.isoformat(),
            "current_period_end": billing_period_end(start, plan.get("interval", "month")).isoformat(),
            "cancel_at_period_end": False,
            "stripe_customer_id": customer_id,
            "stripe_subscription_id": stripe_subscription.get("id"),
        })

        logger.info(f"User {user_id} subscribed to plan {plan_id}")
        return {
            "subscription": subscription,
            "client_secret": stripe_subscription.get("client_secret"),
        }

    @staticmethod
    def cancel(user_id: str, subscription_id: int) -> dict[str, Any]:
        """
        Cancel one of the user's subscriptions.

        Raises:
            ResourceNotFoundError: If the subscription doesn't exist
            PermissionDeniedError: If it belongs to someone else
        """
        subscription = SupabaseClient.fetch_by_id("user_subscriptions", subscription_id)
        if subscription is None:
            raise ResourceNotFoundError("Subscription", subscription_id)
        if str(subscription.get("user_id")) != str(user_id):
            raise PermissionDeniedError("You can only cancel your own subscriptions")

        if subscription.get("stripe_subscription_id") and StripeClient.is_configured():
            StripeClient.cancel_subscription(subscription["stripe_subscription_id"])

        updated = SupabaseClient.update_row("user_subscriptions", subscription_id, {
            "status": SubscriptionStatus.CANCELED.value,
            "cancel_at_period_end": True,
            "updated_at": utc_now_iso(),
        })
        logger.info(f"User {user_id} canceled subscription {subscription_id}")
        return updated or subscription
