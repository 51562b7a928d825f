# =============================================================================
# app/routers/portfolio.py - Portfolio API
# =============================================================================
# Public showcase of past projects; editing is admin-only.
# =============================================================================

from fastapi import APIRouter, Query, Response

from app.dependencies import AdminUser
from core.models.common import ApiResponse, ok
from core.models.portfolio import PortfolioItemCreate, PortfolioItemUpdate
from core.services.portfolio_service import PortfolioService

router = APIRouter(prefix="/api/portfolio", tags=["Portfolio"])


@router.get("", response_model=ApiResponse)
@router.get("/", response_model=ApiResponse, include_in_schema=False)
def list_portfolio():
    """All portfolio items, highest display_order first."""
    return ok(PortfolioService.list_items())


@router.get("/featured", response_model=ApiResponse)
def list_featured(limit: int = Query(default=6, ge=1, le=50)):
    return ok(PortfolioService.list_items(featured=True, limit=limit))


@router.get("/industry/{industry}", response_model=ApiResponse)
def list_by_industry(industry: str):
    return ok(PortfolioService.list_items(industry=industry))


@router.get("/{item_id}", response_model=ApiResponse)
def get_portfolio_item(item_id: int):
    return ok(PortfolioService.get_item(item_id))


@router.post("", response_model=ApiResponse, status_code=201)
@router.post("/", response_model=ApiResponse, status_code=201, include_in_schema=False)
def create_portfolio_item(item: PortfolioItemCreate, user: AdminUser):
    return ok(PortfolioService.create_item(item), "Portfolio item created")


@router.put("/{item_id}", response_model=ApiResponse)
def update_portfolio_item(item_id: int, update: PortfolioItemUpdate, user: AdminUser):
    """Partial update; omitted fields are left unchanged."""
    return ok(PortfolioService.update_item(item_id, update), "Portfolio item updated")


@router.delete("/{item_id}", status_code=204)
def delete_portfolio_item(item_id: int, user: AdminUser):
    PortfolioService.delete_item(item_id)
    return Response(status_code=204)
