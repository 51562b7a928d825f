# =============================================================================
# tests/test_commerce.py - Marketplace & Subscription Service Tests
# =============================================================================
# SupabaseClient and StripeClient are mocked at each service module.
# =============================================================================

from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from app.exceptions import (
    AlreadySubscribedError,
    InvalidRequestError,
    PermissionDeniedError,
    ResourceNotFoundError,
)
from core.models.marketplace import MarketplaceItemUpdate
from core.services.marketplace_service import MarketplaceService
from core.services.subscription_service import SubscriptionService, billing_period_end


MARKETPLACE = "core.services.marketplace_service"
SUBSCRIPTIONS = "core.services.subscription_service"


def echo_insert(table, row):
    return {"id": 1, **row}


# =============================================================================
# Marketplace
# =============================================================================

class TestPurchase:

    @patch(f"{MARKETPLACE}.StripeClient")
    @patch(f"{MARKETPLACE}.SupabaseClient")
    def test_pending_order_without_stripe(self, mock_db, mock_stripe, user):
        mock_stripe.is_configured.return_value = False
        mock_db.fetch_by_id.return_value = {"id": 4, "price": "19.99", "is_available": True}
        mock_db.insert_row.side_effect = echo_insert

        result = MarketplaceService.purchase(user, 4, quantity=3)

        order = result["order"]
        assert order["status"] == "pending"
        assert order["total_price"] == 59.97
        assert order["buyer_id"] == user.id
        assert order["stripe_payment_intent_id"] is None
        assert result["client_secret"] is None

    @patch(f"{MARKETPLACE}.StripeClient")
    @patch(f"{MARKETPLACE}.SupabaseClient")
    def test_payment_intent_with_stripe(self, mock_db, mock_stripe, user):
        mock_stripe.is_configured.return_value = True
        mock_stripe.create_payment_intent.return_value = {"id": "pi_1", "client_secret": "secret"}
        mock_db.fetch_by_id.side_effect = lambda table, row_id: (
            {"id": 4, "price": 10, "is_available": True} if table == "marketplace_items"
            else {"id": user.id, "stripe_customer_id": "cus_1"}
        )
        mock_db.insert_row.side_effect = echo_insert

        result = MarketplaceService.purchase(user, 4)

        assert result["client_secret"] == "secret"
        assert result["order"]["stripe_payment_intent_id"] == "pi_1"
        mock_stripe.create_customer.assert_not_called()
        assert mock_stripe.create_payment_intent.call_args.kwargs["customer_id"] == "cus_1"

    @patch(f"{MARKETPLACE}.SupabaseClient")
    def test_unavailable_item(self, mock_db, user):
        mock_db.fetch_by_id.return_value = {"id": 4, "price": 10, "is_available": False}

        with pytest.raises(InvalidRequestError):
            MarketplaceService.purchase(user, 4)

    @patch(f"{MARKETPLACE}.SupabaseClient")
    def test_missing_item(self, mock_db, user):
        mock_db.fetch_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            MarketplaceService.purchase(user, 4)


class TestUpdateItem:

    @patch(f"{MARKETPLACE}.SupabaseClient")
    def test_other_seller_forbidden(self, mock_db, user):
        mock_db.fetch_by_id.return_value = {"id": 4, "seller_id": "someone-else"}

        with pytest.raises(PermissionDeniedError):
            MarketplaceService.update_item(user, 4, MarketplaceItemUpdate(price=12))

    @patch(f"{MARKETPLACE}.SupabaseClient")
    def test_admin_may_edit(self, mock_db, admin):
        mock_db.fetch_by_id.return_value = {"id": 4, "seller_id": "someone-else"}
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}

        updated = MarketplaceService.update_item(admin, 4, MarketplaceItemUpdate(price=12))

        assert updated["price"] == 12


# =============================================================================
# Subscriptions
# =============================================================================

class TestBillingPeriod:

    def test_month_clamps_to_month_end(self):
        start = datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)
        assert billing_period_end(start, "month") == datetime(2026, 2, 28, 12, 0, tzinfo=timezone.utc)

    def test_year(self):
        start = datetime(2024, 2, 29, tzinfo=timezone.utc)
        assert billing_period_end(start, "year") == datetime(2025, 2, 28, tzinfo=timezone.utc)


class TestSubscribe:

    @patch(f"{SUBSCRIPTIONS}.StripeClient")
    @patch(f"{SUBSCRIPTIONS}.SupabaseClient")
    def test_subscribe_without_stripe(self, mock_db, mock_stripe, sample_plan):
        mock_stripe.is_configured.return_value = False
        mock_db.fetch_by_id.return_value = sample_plan
        mock_db.fetch_rows.return_value = []
        mock_db.insert_row.side_effect = echo_insert

        result = SubscriptionService.subscribe("u1", sample_plan["id"])

        subscription = result["subscription"]
        assert subscription["status"] == "active"
        assert subscription["stripe_subscription_id"] is None
        assert subscription["cancel_at_period_end"] is False
        assert result["client_secret"] is None

    @patch(f"{SUBSCRIPTIONS}.StripeClient")
    @patch(f"{SUBSCRIPTIONS}.SupabaseClient")
    def test_subscribe_creates_customer_once(self, mock_db, mock_stripe, sample_plan):
        plan = {**sample_plan, "stripe_price_id": "price_1"}
        mock_stripe.is_configured.return_value = True
        mock_stripe.create_customer.return_value = "cus_new"
        mock_stripe.create_subscription.return_value = {"id": "sub_1", "client_secret": "secret"}
        mock_db.fetch_by_id.side_effect = lambda table, row_id: (
            plan if table == "subscription_plans" else {"id": "u1", "email": "u1@example.com"}
        )
        mock_db.fetch_rows.return_value = []
        mock_db.insert_row.side_effect = echo_insert

        result = SubscriptionService.subscribe("u1", plan["id"])

        assert result["client_secret"] == "secret"
        assert result["subscription"]["stripe_customer_id"] == "cus_new"
        mock_db.update_row.assert_called_once_with("users", "u1", {"stripe_customer_id": "cus_new"})
        mock_stripe.create_subscription.assert_called_once_with("cus_new", "price_1")

    @patch(f"{SUBSCRIPTIONS}.SupabaseClient")
    def test_already_subscribed(self, mock_db, sample_plan):
        mock_db.fetch_by_id.return_value = sample_plan
        mock_db.fetch_rows.return_value = [{"id": 9, "status": "active"}]

        with pytest.raises(AlreadySubscribedError):
            SubscriptionService.subscribe("u1", sample_plan["id"])

        mock_db.insert_row.assert_not_called()

    @patch(f"{SUBSCRIPTIONS}.SupabaseClient")
    def test_unknown_plan(self, mock_db):
        mock_db.fetch_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            SubscriptionService.subscribe("u1", 99)


class TestCancel:

    @patch(f"{SUBSCRIPTIONS}.SupabaseClient")
    def test_cannot_cancel_others(self, mock_db):
        mock_db.fetch_by_id.return_value = {"id": 9, "user_id": "someone-else"}

        with pytest.raises(PermissionDeniedError):
            SubscriptionService.cancel("u1", 9)

    @patch(f"{SUBSCRIPTIONS}.StripeClient")
    @patch(f"{SUBSCRIPTIONS}.SupabaseClient")
    def test_cancel_own(self, mock_db, mock_stripe):
        mock_stripe.is_configured.return_value = True
        mock_db.fetch_by_id.return_value = {"id": 9, "user_id": "u1", "stripe_subscription_id": "sub_1"}
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}

        updated = SubscriptionService.cancel("u1", 9)

        assert updated["status"] == "canceled"
        assert updated["cancel_at_period_end"] is True
        mock_stripe.cancel_subscription.assert_called_once_with("sub_1")
