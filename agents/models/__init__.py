# =============================================================================
# agents/models/ - Agent Output Schemas
# =============================================================================
# Pydantic models for what each agent gets back from the model:
# - bug_analysis.py: LogAnalysis, FeedbackAnalysis
# - price_analysis.py: PriceAnalysis and its inputs
# - moderation_result.py: ModerationResult
# - quote.py: Quote
#
# Model output is validated against these before anything is stored.
# =============================================================================

from agents.models.bug_analysis import FeedbackAnalysis, LogAnalysis
from agents.models.moderation_result import ModerationResult
from agents.models.price_analysis import (
    CompetitorPrice,
    MarketTrend,
    PriceAnalysis,
    ProjectedImpact,
    UserMetrics,
)
from agents.models.quote import Quote, QuoteLineItem

__all__ = [
    "LogAnalysis",
    "FeedbackAnalysis",
    "ModerationResult",
    "UserMetrics",
    "MarketTrend",
    "CompetitorPrice",
    "ProjectedImpact",
    "PriceAnalysis",
    "Quote",
    "QuoteLineItem",
]
