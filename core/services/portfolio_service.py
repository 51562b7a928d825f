# =============================================================================
# core/services/portfolio_service.py - Portfolio Business Logic
# =============================================================================
# Case studies shown on the marketing site. Listed by display_order (higher
# first), then newest first.
# =============================================================================

import logging
from typing import Any

from app.exceptions import InvalidRequestError, ResourceNotFoundError
from core.models.portfolio import PortfolioItemCreate, PortfolioItemUpdate
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

ORDERING = ["display_order", "created_at"]


class PortfolioService:

    @staticmethod
    def list_items(
        industry: str | None = None,
        featured: bool | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows(
            "portfolio_items",
            filters={"industry_type": industry, "featured": featured},
            order_by=ORDERING,
            desc=True,
            limit=limit,
        )

    @staticmethod
    def get_item(item_id: int) -> dict[str, Any]:
        item = SupabaseClient.fetch_by_id("portfolio_items", item_id)
        if item is None:
            raise ResourceNotFoundError("Portfolio item", item_id)
        return item

    @staticmethod
    def create_item(item: PortfolioItemCreate) -> dict[str, Any]:
        created = SupabaseClient.insert_row("portfolio_items", item.model_dump(mode="json"))
        logger.info(f"Created portfolio item {created.get('id')}: {item.title}")
        return created

    @staticmethod
    def update_item(item_id: int, update: PortfolioItemUpdate) -> dict[str, Any]:
        data = update.model_dump(exclude_unset=True, mode="json")
        if not data:
            raise InvalidRequestError("No fields to update")

        data["updated_at"] = utc_now_iso()
        item = SupabaseClient.update_row("portfolio_items", item_id, data)
        if item is None:
            raise ResourceNotFoundError("Portfolio item", item_id)
        return item

    @staticmethod
    def delete_item(item_id: int) -> None:
        if not SupabaseClient.delete_row("portfolio_items", item_id):
            raise ResourceNotFoundError("Portfolio item", item_id)
        logger.info(f"Deleted portfolio item {item_id}")
