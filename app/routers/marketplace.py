# =============================================================================
# app/routers/marketplace.py - Marketplace API
# =============================================================================
# Public browsing, seller listings (moderated) and Stripe-backed purchases.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from agents.content_generator import suggest_listing_description
from agents.content_moderator import moderate_content
from app.dependencies import CurrentUser
from core.models.common import ApiResponse, ok
from core.models.marketplace import (
    ListingSuggestionRequest,
    MarketplaceItemCreate,
    MarketplaceItemUpdate,
    PurchaseRequest,
)
from core.services.marketplace_service import MarketplaceService

router = APIRouter(prefix="/api/marketplace", tags=["Marketplace"])
logger = logging.getLogger(__name__)

moderate_listing = moderate_content("description", title_field="name", default_type="marketplace_item")


# Collection routes answer with and without the trailing slash
@router.get("", response_model=ApiResponse)
@router.get("/", response_model=ApiResponse, include_in_schema=False)
def list_items():
    """Items currently available for purchase."""
    return ok(MarketplaceService.list_items())


# Static paths are registered before /{item_id}
@router.get("/orders/user", response_model=ApiResponse)
def list_my_orders(user: CurrentUser):
    return ok(MarketplaceService.list_user_orders(user.id))


@router.post("/purchase", response_model=ApiResponse)
def purchase_item(request: PurchaseRequest, user: CurrentUser):
    """
    Start a purchase.

    Returns the pending order and the Stripe client secret the frontend
    uses to confirm payment.
    """
    result = MarketplaceService.purchase(user, request.item_id, request.quantity)
    return ok(result, "Order created")


@router.post("/suggest-listing", response_model=ApiResponse)
def suggest_listing(request: ListingSuggestionRequest):
    """AI-written listing description (falls back to a template)."""
    return ok(suggest_listing_description(request))


@router.get("/{item_id}", response_model=ApiResponse)
def get_item(item_id: int):
    return ok(MarketplaceService.get_item(item_id))


@router.post(
    "",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[Depends(moderate_listing)],
)
@router.post(
    "/",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[Depends(moderate_listing)],
    include_in_schema=False,
)
def create_item(item: MarketplaceItemCreate, user: CurrentUser):
    created = MarketplaceService.create_item(user.id, item)
    return ok(created, "Item listed")


@router.patch(
    "/{item_id}",
    response_model=ApiResponse,
    dependencies=[Depends(moderate_listing)],
)
def update_item(item_id: int, update: MarketplaceItemUpdate, user: CurrentUser):
    """Edit a listing (seller or admin only)."""
    return ok(MarketplaceService.update_item(user, item_id, update), "Item updated")
