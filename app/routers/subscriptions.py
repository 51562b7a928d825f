# =============================================================================
# app/routers/subscriptions.py - Subscriptions API
# =============================================================================
# Plans are public; subscribing and canceling act on the caller's own
# subscriptions. Billing goes through Stripe when it is configured.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import AdminUser, CurrentUser
from core.models.common import ApiResponse, ok
from core.models.subscription import (
    CancelSubscriptionRequest,
    SubscribeRequest,
    SubscriptionPlanCreate,
)
from core.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/api/subscriptions", tags=["Subscriptions"])
logger = logging.getLogger(__name__)


@router.get("/plans", response_model=ApiResponse)
def list_plans():
    return ok(SubscriptionService.list_plans())


@router.get("/plans/{plan_id}", response_model=ApiResponse)
def get_plan(plan_id: int):
    return ok(SubscriptionService.get_plan(plan_id))


@router.post("/plans", response_model=ApiResponse, status_code=201)
def create_plan(plan: SubscriptionPlanCreate, user: AdminUser):
    """Create a plan (admin only). A recurring Stripe price is created when Stripe is configured."""
    return ok(SubscriptionService.create_plan(plan), "Subscription plan created")


@router.post("/subscribe", response_model=ApiResponse)
def subscribe(request: SubscribeRequest, user: CurrentUser):
    """
    Subscribe the caller to a plan.

    Returns the subscription and the Stripe client secret (null without
    Stripe) the frontend needs to confirm the first payment.

    - 404 if the plan doesn't exist
    - 400 if the caller already has an active subscription
    """
    result = SubscriptionService.subscribe(user.id, request.plan_id, email=user.email)
    return ok(result, "Subscription created")


@router.post("/cancel", response_model=ApiResponse)
def cancel_subscription(request: CancelSubscriptionRequest, user: CurrentUser):
    subscription = SubscriptionService.cancel(user.id, request.subscription_id)
    return ok(subscription, "Subscription canceled")


@router.get("/user", response_model=ApiResponse)
def my_subscriptions(user: CurrentUser):
    return ok(SubscriptionService.get_user_subscriptions(user.id))
