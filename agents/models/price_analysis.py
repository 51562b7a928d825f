# =============================================================================
# agents/models/price_analysis.py - Price Optimizer Schemas
# =============================================================================
# Inputs (user metrics, market trends, competitors) and the model's
# recommendation. The whole PriceAnalysis is stored in
# price_recommendations.analysis_data for the admin dashboard.
# =============================================================================

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class UserMetrics(BaseModel):
    total_users: int = 0
    active_users: int = 0
    average_session_duration: float = 0.0
    churn_rate: float = Field(default=0.0, description="Cancelled in last 30 days / active * 100")
    conversion_rate: float = 0.0
    plan_distribution: dict[str, int] = Field(default_factory=dict)


class MarketTrend(BaseModel):
    factor: str
    impact: float = Field(..., ge=0, le=1)
    description: str


class CompetitorPrice(BaseModel):
    competitor: str
    price: float
    features: list[str]
    comparison: str


class ProjectedImpact(BaseModel):
    revenue: float = 0
    user_retention: float = 0
    new_subscriptions: float = 0


class PriceAnalysis(BaseModel):
    """
    The model's pricing recommendation.

    market_trends / user_metrics / competitive_analysis hold the model's own
    commentary and are free-form.
    """

    current_price: float
    recommended_price: float = Field(..., ge=0)
    market_trends: list[Any] = Field(default_factory=list)
    user_metrics: Any = Field(default_factory=list)
    competitive_analysis: Any = Field(default_factory=list)
    projected_impact: ProjectedImpact = Field(default_factory=ProjectedImpact)
    reasoning: str = ""
    confidence_score: float = Field(default=0, ge=0, le=1)

    model_config = {"extra": "allow"}

    @property
    def market_factors(self) -> list[str]:
        """Names of the market factors the model discussed."""
        factors = []
        for trend in self.market_trends:
            if isinstance(trend, dict) and trend.get("factor"):
                factors.append(str(trend["factor"]))
            elif isinstance(trend, str):
                factors.append(trend)
        return factors
