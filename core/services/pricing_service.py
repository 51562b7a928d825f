# =============================================================================
# core/services/pricing_service.py - Price Recommendation Business Logic
# =============================================================================
# Reads and admin review of price recommendations and price history.
# Generating and applying recommendations lives in agents/price_optimizer.py.
# =============================================================================

import logging
from typing import Any

from app.exceptions import InvalidRequestError, ResourceNotFoundError
from core.models.subscription import RecommendationReview, RecommendationStatus
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)


class PricingService:
    """Service for price recommendation review and history."""

    @staticmethod
    def list_recommendations(status: str | None = None) -> list[dict[str, Any]]:
        filters = {"status": status} if status and status != "all" else None
        return SupabaseClient.fetch_rows("price_recommendations", filters=filters)

    @staticmethod
    def get_recommendation(recommendation_id: int) -> dict[str, Any]:
        recommendation = SupabaseClient.fetch_by_id("price_recommendations", recommendation_id)
        if recommendation is None:
            raise ResourceNotFoundError("Price recommendation", recommendation_id)
        return recommendation

    @staticmethod
    def review_recommendation(
        recommendation_id: int,
        review: RecommendationReview,
        reviewer_id: str,
    ) -> dict[str, Any]:
        """
        Record an admin decision on a recommendation.

        Raises:
            ResourceNotFoundError: If the recommendation doesn't exist
            InvalidRequestError: If the status is `applied` or the
                recommendation was already applied
        """
        if review.status == RecommendationStatus.APPLIED:
            raise InvalidRequestError(
                "Recommendations are applied through the apply endpoint",
                suggestion="POST /recommendations/{id}/apply",
            )

        current = PricingService.get_recommendation(recommendation_id)
        if current.get("status") == RecommendationStatus.APPLIED.value:
            raise InvalidRequestError(
                "Recommendation has already been applied",
                details={"id": recommendation_id},
            )

        now = utc_now_iso()
        updated = SupabaseClient.update_row("price_recommendations", recommendation_id, {
            "status": review.status.value,
            "review_notes": review.review_notes,
            "reviewed_at": now,
            "reviewed_by_user_id": reviewer_id,
            "updated_at": now,
        })
        logger.info(f"Recommendation {recommendation_id} marked {review.status.value} by {reviewer_id}")
        return updated or current

    @staticmethod
    def get_price_history(plan_id: int | None = None) -> list[dict[str, Any]]:
        """Price changes, newest first; all plans when plan_id is None."""
        return SupabaseClient.fetch_rows(
            "subscription_price_history",
            filters={"plan_id": plan_id},
            order_by="applied_at",
        )
