# =============================================================================
# core/models/subscription.py - Subscription & Pricing Schemas
# =============================================================================
# Plans are priced in decimal dollars. Price recommendations are produced by
# the price optimizer and walk through:
#   pending -> approved -> applied
#   pending -> rejected
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class PlanInterval(str, Enum):
    MONTH = "month"
    YEAR = "year"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELED = "canceled"
    PAST_DUE = "past_due"


class RecommendationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    APPLIED = "applied"


class SubscriptionPlanCreate(BaseModel):
    """New subscription plan (admin only)."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Pro"])
    description: str | None = Field(default=None, max_length=2000)
    price: float = Field(..., ge=0, description="Price per interval in dollars")
    interval: PlanInterval = Field(default=PlanInterval.MONTH)
    features: list[str] = Field(default_factory=list)
    is_active: bool = True


class SubscribeRequest(BaseModel):
    plan_id: int = Field(..., ge=1)


class CancelSubscriptionRequest(BaseModel):
    subscription_id: int = Field(..., ge=1)


class GenerateRecommendationRequest(BaseModel):
    plan_id: int = Field(..., ge=1, description="Plan to analyze")


class RecommendationReview(BaseModel):
    """Admin decision on a pending recommendation."""

    # "applied" is only reachable through POST /recommendations/{id}/apply
    status: RecommendationStatus = Field(..., description="pending, approved or rejected")
    review_notes: str | None = Field(default=None, max_length=2000)
