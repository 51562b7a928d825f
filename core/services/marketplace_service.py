# =============================================================================
# core/services/marketplace_service.py - Marketplace Business Logic
# =============================================================================
# Listings created by sellers and one-off purchases paid through Stripe
# payment intents. Orders start as `pending`; the frontend confirms payment
# with the returned client secret.
# =============================================================================

import logging
from typing import Any

from app.auth.models import AuthUser
from app.exceptions import InvalidRequestError, PermissionDeniedError, ResourceNotFoundError
from core.models.marketplace import MarketplaceItemCreate, MarketplaceItemUpdate, OrderStatus
from lib.stripe_client import StripeClient
from lib.supabase_client import SupabaseClient
from lib.utils import round_half_up, utc_now_iso

logger = logging.getLogger(__name__)


class MarketplaceService:
    """Service for marketplace listings and orders."""

    @staticmethod
    def list_items(available_only: bool = True) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows(
            "marketplace_items",
            filters={"is_available": True} if available_only else None,
        )

    @staticmethod
    def get_item(item_id: int) -> dict[str, Any]:
        item = SupabaseClient.fetch_by_id("marketplace_items", item_id)
        if item is None:
            raise ResourceNotFoundError("Marketplace item", item_id)
        return item

    @staticmethod
    def create_item(seller_id: str, item: MarketplaceItemCreate) -> dict[str, Any]:
        """Create a listing owned by seller_id, mirrored as a Stripe product when configured."""
        data = item.model_dump(mode="json")
        data["seller_id"] = seller_id

        if StripeClient.is_configured():
            product_id, price_id = StripeClient.create_product_with_price(
                name=item.name,
                description=item.description,
                amount=item.price,
            )
            data["stripe_product_id"] = product_id
            data["stripe_price_id"] = price_id

        created = SupabaseClient.insert_row("marketplace_items", data)
        logger.info(f"Seller {seller_id} listed marketplace item {created.get('id')}")
        return created

    @staticmethod
    def update_item(user: AuthUser, item_id: int, update: MarketplaceItemUpdate) -> dict[str, Any]:
        """
        Edit a listing.

        Raises:
            ResourceNotFoundError: If the item doesn't exist
            PermissionDeniedError: Unless the caller is the seller or an admin
        """
        item = MarketplaceService.get_item(item_id)
        if str(item.get("seller_id")) != user.id and not user.is_admin:
            raise PermissionDeniedError("Only the seller or an admin can edit this item")

        data = update.model_dump(exclude_unset=True, mode="json")
        if not data:
            raise InvalidRequestError("No fields to update")

        data["updated_at"] = utc_now_iso()
        return SupabaseClient.update_row("marketplace_items", item_id, data) or item

    @staticmethod
    def purchase(user: AuthUser, item_id: int, quantity: int = 1) -> dict[str, Any]:
        """
        Start a purchase: create a pending order and a payment intent.

        Returns:
            {"order": row, "client_secret": str | None}

        Raises:
            ResourceNotFoundError: If the item doesn't exist
            InvalidRequestError: If the item isn't available
            StripeClientError: If Stripe rejects the payment intent
        """
        item = MarketplaceService.get_item(item_id)
        if not item.get("is_available"):
            raise InvalidRequestError(
                "Item is not available for purchase",
                details={"item_id": item_id},
            )

        total_price = round_half_up(float(item["price"]) * quantity, 2)

        payment: dict[str, Any] = {}
        if StripeClient.is_configured():
            user_row = SupabaseClient.fetch_by_id("users", user.id) or {}
            customer_id = user_row.get("stripe_customer_id")
            if not customer_id:
                customer_id = StripeClient.create_customer(email=user.email, user_id=user.id)
                if user_row:
                    SupabaseClient.update_row("users", user.id, {"stripe_customer_id": customer_id})
            payment = StripeClient.create_payment_intent(
                amount=total_price,
                customer_id=customer_id,
                metadata={"item_id": str(item_id), "buyer_id": user.id, "quantity": str(quantity)},
            )

        order = SupabaseClient.insert_row("marketplace_orders", {
            "buyer_id": user.id,
            "item_id": item_id,
            "quantity": quantity,
            "total_price": total_price,
            "status": OrderStatus.PENDING.value,
            "stripe_payment_intent_id": payment.get("id"),
        })
        logger.info(f"User {user.id} started order {order.get('id')} for item {item_id} x{quantity}")
        return {"order": order, "client_secret": payment.get("client_secret")}

    @staticmethod
    def list_user_orders(user_id: str) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows("marketplace_orders", filters={"buyer_id": user_id})
