# =============================================================================
# app/routers/price_optimization.py - Price Optimization API
# =============================================================================
# Plans are public; everything about recommendations is admin-only.
#
# Recommendation flow:
#   POST /recommendations/generate          -> pending
#   PATCH /recommendations/{id}/status      -> approved | rejected
#   POST /recommendations/{id}/apply        -> applied (plan price changes)
# =============================================================================

import logging

from fastapi import APIRouter, Query

from agents.price_optimizer import PriceOptimizerAgent
from app.dependencies import AdminUser
from core.models.common import ApiResponse, ok
from core.models.subscription import (
    GenerateRecommendationRequest,
    RecommendationReview,
    RecommendationStatus,
)
from core.services.pricing_service import PricingService
from core.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/api/price-optimization", tags=["Price Optimization"])
logger = logging.getLogger(__name__)


@router.get("/plans", response_model=ApiResponse)
def list_plans():
    """Active subscription plans (public)."""
    return ok(SubscriptionService.list_plans())


@router.get("/recommendations", response_model=ApiResponse)
def list_recommendations(
    user: AdminUser,
    status: RecommendationStatus | None = Query(default=None),
):
    recommendations = PricingService.list_recommendations(status.value if status else None)
    return ok(recommendations, f"Found {len(recommendations)} recommendations")


@router.get("/recommendations/{recommendation_id}", response_model=ApiResponse)
def get_recommendation(recommendation_id: int, user: AdminUser):
    return ok(PricingService.get_recommendation(recommendation_id))


@router.post("/recommendations/generate", response_model=ApiResponse, status_code=201)
def generate_recommendation(request: GenerateRecommendationRequest, user: AdminUser):
    """Analyze a plan and store a pending price recommendation."""
    recommendation = PriceOptimizerAgent().generate_price_recommendation(request.plan_id)
    return ok(recommendation, "Price recommendation generated")


@router.patch("/recommendations/{recommendation_id}/status", response_model=ApiResponse)
def review_recommendation(recommendation_id: int, review: RecommendationReview, user: AdminUser):
    """Approve or reject a recommendation (stamps reviewer and time)."""
    recommendation = PricingService.review_recommendation(recommendation_id, review, reviewer_id=user.id)
    return ok(recommendation, f"Recommendation {review.status.value}")


@router.post("/recommendations/{recommendation_id}/apply", response_model=ApiResponse)
def apply_recommendation(recommendation_id: int, user: AdminUser):
    """Apply an approved recommendation to its plan."""
    plan = PriceOptimizerAgent().apply_price_recommendation(recommendation_id, user_id=user.id)
    return ok(plan, "Price recommendation applied")


@router.get("/plans/{plan_id}/history", response_model=ApiResponse)
def plan_price_history(plan_id: int, user: AdminUser):
    SubscriptionService.get_plan(plan_id)
    return ok(PricingService.get_price_history(plan_id))


@router.get("/history", response_model=ApiResponse)
def price_history(user: AdminUser, plan_id: int | None = Query(default=None, ge=1)):
    return ok(PricingService.get_price_history(plan_id))


@router.post("/analyze-all", response_model=ApiResponse)
def analyze_all_plans(user: AdminUser):
    """Generate recommendations for every active plan without a recent one."""
    generated = PriceOptimizerAgent().schedule_automatic_price_analysis()
    return ok(generated, f"Generated {len(generated)} price recommendations")
