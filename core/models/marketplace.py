# =============================================================================
# core/models/marketplace.py - Marketplace Schemas
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MarketplaceItemCreate(BaseModel):
    """
    New marketplace listing.

    The seller is always the authenticated caller, never a body field.
    """

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    price: float = Field(..., gt=0, description="Unit price in dollars")
    category: str = Field(..., min_length=1, max_length=100)
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    is_available: bool = True


class MarketplaceItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, gt=0)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    tags: list[str] | None = None
    images: list[str] | None = None
    is_available: bool | None = None


class PurchaseRequest(BaseModel):
    item_id: int = Field(..., ge=1)
    quantity: int = Field(default=1, ge=1, le=100)


class ListingSuggestionRequest(BaseModel):
    """Input for the AI listing description helper."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1)
    key_points: list[str] = Field(default_factory=list)
    target_audience: str | None = None
