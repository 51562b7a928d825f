# =============================================================================
# agents/models/quote.py - Website Quote Schema
# =============================================================================

from __future__ import annotations

from pydantic import BaseModel, Field


class QuoteLineItem(BaseModel):
    feature: str
    market_price: float
    our_price: float


class Quote(BaseModel):
    """
    A website build quote.

    market_price is what agencies typically charge; discounted_price is what
    we charge.
    """

    base_price: float
    market_price: float
    discounted_price: float
    breakdown: list[QuoteLineItem] = Field(default_factory=list)
    business_insights: str = ""
    time_estimate: str = ""
    is_fallback: bool = Field(default=False, description="True when computed locally without AI")
