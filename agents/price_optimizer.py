# =============================================================================
# agents/price_optimizer.py - AI Price Optimizer
# =============================================================================
# Produces price recommendations for subscription plans. A recommendation is
# never applied automatically: it is stored as `pending`, an admin approves
# or rejects it, and only approved recommendations can be applied.
#
# Inputs to the model:
# - the plan itself
# - user metrics computed from subscriptions, sessions and content views
# - market trend factors and a competitor price table
#
# Usage:
#   from agents.price_optimizer import PriceOptimizerAgent
#   recommendation = PriceOptimizerAgent().generate_price_recommendation(plan_id=3)
# =============================================================================

from __future__ import annotations

import json
import logging
from datetime import timedelta
from typing import Any

import pandas as pd
from pydantic import ValidationError

from app.config import settings
from app.exceptions import ElevionException, RecommendationNotApprovedError, ResourceNotFoundError
from agents.models.price_analysis import (
    CompetitorPrice,
    MarketTrend,
    PriceAnalysis,
    UserMetrics,
)
from agents.prompts.pricing import PRICING_SYSTEM_PROMPT, build_pricing_prompt
from core.models.subscription import RecommendationStatus, SubscriptionStatus
from lib.supabase_client import SupabaseClient
from lib.utils import ApplicationError, iso_ago, parse_timestamp, round_half_up, utc_now, utc_now_iso
from lib.xai_client import XAIClient

logger = logging.getLogger(__name__)


# Recommendations expire if nobody reviews them
RECOMMENDATION_TTL = timedelta(days=7)

# A plan with a pending recommendation younger than this is skipped
ANALYSIS_COOLDOWN = timedelta(days=7)

# Cancellations in this window count towards churn
CHURN_WINDOW = timedelta(days=30)

FALLBACK_REASONING = "Unable to generate recommendation due to API error."


MARKET_TRENDS: list[MarketTrend] = [
    MarketTrend(
        factor="Inflation rate",
        impact=0.75,
        description="Current annual inflation rate is affecting purchasing power.",
    ),
    MarketTrend(
        factor="Web development market growth",
        impact=0.85,
        description="The web development market is growing at 18% annually.",
    ),
    MarketTrend(
        factor="Small business tech adoption",
        impact=0.8,
        description="Small businesses are increasing tech spending by 12%.",
    ),
    MarketTrend(
        factor="Seasonal trends",
        impact=0.65,
        description="Q2 typically shows 7% higher conversion rates than Q1.",
    ),
    MarketTrend(
        factor="AI service pricing",
        impact=0.9,
        description="AI-enhanced services command a 25-40% premium over basic services.",
    ),
]

# competitor -> (basic, pro, other tier prices, features)
_COMPETITOR_TABLE: list[tuple[str, tuple[float, float, float], list[str]]] = [
    ("WebGenius", (19.99, 49.99, 99.99), ["Responsive Design", "CMS Integration", "SEO Optimization"]),
    ("SiteBuilder Pro", (14.99, 39.99, 79.99), ["Template Library", "Analytics Dashboard", "Email Marketing"]),
    ("DigitalCraft", (24.99, 59.99, 119.99), ["Custom Code Access", "Advanced Security", "Premium Support"]),
    ("AIWebSolutions", (29.99, 69.99, 149.99), ["AI Content Generation", "Smart Layout Suggestions", "Automated SEO"]),
]

_COMPETITOR_COMPARISONS = {
    "SiteBuilder Pro": "Less comprehensive services but competitive pricing",
    "DigitalCraft": "Higher price point but includes additional technical support",
    "AIWebSolutions": "Similar AI offerings but at a significant premium",
}


def get_market_trends() -> list[MarketTrend]:
    return list(MARKET_TRENDS)


def get_competitive_analysis(plan_name: str) -> list[CompetitorPrice]:
    """Competitor prices for the tier matching the plan name (Basic, Pro or other)."""
    if "Basic" in plan_name:
        tier = 0
    elif "Pro" in plan_name:
        tier = 1
    else:
        tier = 2

    competitors = []
    for name, prices, features in _COMPETITOR_TABLE:
        if name == "WebGenius":
            comparison = (
                "Similar features but higher price point" if tier == 0
                else "Fewer AI features but established brand"
            )
        else:
            comparison = _COMPETITOR_COMPARISONS[name]
        competitors.append(CompetitorPrice(
            competitor=name,
            price=prices[tier],
            features=features,
            comparison=comparison,
        ))
    return competitors


def calculate_percent_change(current_price: float, recommended_price: float) -> float:
    """Percent change from current to recommended; 0 when the current price is 0."""
    if not current_price:
        return 0.0
    return round_half_up((recommended_price - current_price) / current_price * 100, 2)


def fallback_analysis(current_price: float) -> PriceAnalysis:
    """Keep the current price when the model can't be reached."""
    return PriceAnalysis(
        current_price=current_price,
        recommended_price=current_price,
        reasoning=FALLBACK_REASONING,
        confidence_score=0,
    )


# =============================================================================
# Price Optimizer Agent
# =============================================================================

class PriceOptimizerAgent:
    """
    Generates, applies and schedules price recommendations.

    Example:
        agent = PriceOptimizerAgent()
        rec = agent.generate_price_recommendation(plan_id=1)
        # admin approves via the API, then:
        agent.apply_price_recommendation(rec["id"], user_id=admin.id)
    """

    def __init__(self, model: str | None = None, temperature: float = 0.2):
        self.model = model or settings.XAI_MODEL
        self.temperature = temperature

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    def get_user_metrics(self, plan_id: int) -> UserMetrics:
        """Aggregate subscription, session and content metrics for one plan."""
        subscriptions = pd.DataFrame(
            SupabaseClient.fetch_rows(
                "user_subscriptions",
                columns="id,plan_id,status,updated_at",
                order_by=None,
            ),
            columns=["id", "plan_id", "status", "updated_at"],
        )
        sessions = pd.DataFrame(
            SupabaseClient.fetch_rows("user_sessions", columns="session_duration", order_by=None),
            columns=["session_duration"],
        )
        content_views = pd.DataFrame(
            SupabaseClient.fetch_rows("content_view_metrics", columns="conversion_rate", order_by=None),
            columns=["conversion_rate"],
        )
        active_plans = SupabaseClient.fetch_rows(
            "subscription_plans",
            filters={"is_active": True},
            columns="id,name",
            order_by="id",
            desc=False,
        )

        on_plan = subscriptions[subscriptions["plan_id"] == plan_id]
        active = subscriptions[subscriptions["status"] == SubscriptionStatus.ACTIVE.value]
        active_users = int((on_plan["status"] == SubscriptionStatus.ACTIVE.value).sum())

        updated_at = pd.to_datetime(on_plan["updated_at"], utc=True, errors="coerce")
        churn_cutoff = pd.Timestamp(utc_now() - CHURN_WINDOW)
        cancelled = int(
            ((on_plan["status"] == SubscriptionStatus.CANCELED.value) & (updated_at > churn_cutoff)).sum()
        )
        churn_rate = cancelled / active_users * 100 if active_users > 0 else 0.0

        active_counts = active.groupby("plan_id").size()
        plan_distribution = {
            plan["name"]: int(active_counts.get(plan["id"], 0))
            for plan in active_plans
        }

        def column_mean(df: pd.DataFrame, column: str) -> float:
            values = pd.to_numeric(df[column], errors="coerce").dropna()
            return float(values.mean()) if not values.empty else 0.0

        return UserMetrics(
            total_users=len(subscriptions),
            active_users=active_users,
            average_session_duration=column_mean(sessions, "session_duration"),
            churn_rate=churn_rate,
            conversion_rate=column_mean(content_views, "conversion_rate"),
            plan_distribution=plan_distribution,
        )

    # -------------------------------------------------------------------------
    # Recommendation lifecycle
    # -------------------------------------------------------------------------

    def analyze_plan(self, plan: dict[str, Any], user_metrics: UserMetrics) -> PriceAnalysis:
        """Ask the model for a recommendation; falls back to the current price."""
        current_price = float(plan["price"])
        plan_data = {
            "id": plan["id"],
            "name": plan["name"],
            "description": plan.get("description"),
            "current_price": current_price,
            "interval": plan.get("interval"),
            "features": plan.get("features") or [],
        }
        prompt = build_pricing_prompt(
            plan=plan_data,
            user_metrics=user_metrics.model_dump(),
            market_trends=[t.model_dump() for t in get_market_trends()],
            competitors=[c.model_dump() for c in get_competitive_analysis(plan["name"])],
        )

        try:
            data = XAIClient.generate_json(
                prompt=prompt,
                system_prompt=PRICING_SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
                max_tokens=2000,
            )
            data.setdefault("current_price", current_price)
            return PriceAnalysis.model_validate(data)
        except (ApplicationError, ValidationError) as e:
            logger.error(f"Price analysis failed for plan {plan['id']}, keeping current price: {e}")
            return fallback_analysis(current_price)

    def generate_price_recommendation(self, plan_id: int) -> dict[str, Any]:
        """
        Analyze a plan and store a pending recommendation.

        Raises:
            ResourceNotFoundError: If the plan doesn't exist
        """
        plan = SupabaseClient.fetch_by_id("subscription_plans", plan_id)
        if plan is None:
            raise ResourceNotFoundError("Subscription plan", plan_id)

        analysis = self.analyze_plan(plan, self.get_user_metrics(plan_id))
        current_price = float(plan["price"])

        recommendation = SupabaseClient.insert_row("price_recommendations", {
            "plan_id": plan_id,
            "current_price": current_price,
            "recommended_price": analysis.recommended_price,
            "percent_change": calculate_percent_change(current_price, analysis.recommended_price),
            "analysis_data": analysis.model_dump(mode="json"),
            "status": RecommendationStatus.PENDING.value,
            "expires_at": (utc_now() + RECOMMENDATION_TTL).isoformat(),
        })
        logger.info(
            f"Price recommendation {recommendation.get('id')} for plan {plan_id}: "
            f"{current_price} -> {analysis.recommended_price}"
        )
        return recommendation

    def apply_price_recommendation(self, recommendation_id: int, user_id: str) -> dict[str, Any]:
        """
        Apply an approved recommendation to its plan.

        Writes a price history row, updates the plan price and marks the
        recommendation `applied`.

        Returns:
            The updated plan row

        Raises:
            ResourceNotFoundError: If the recommendation or plan doesn't exist
            RecommendationNotApprovedError: If the recommendation isn't approved
        """
        recommendation = SupabaseClient.fetch_by_id("price_recommendations", recommendation_id)
        if recommendation is None:
            raise ResourceNotFoundError("Price recommendation", recommendation_id)
        if recommendation.get("status") != RecommendationStatus.APPROVED.value:
            raise RecommendationNotApprovedError(recommendation_id, recommendation.get("status"))

        plan = SupabaseClient.fetch_by_id("subscription_plans", recommendation["plan_id"])
        if plan is None:
            raise ResourceNotFoundError("Subscription plan", recommendation["plan_id"])

        analysis = PriceAnalysis.model_validate(
            recommendation.get("analysis_data")
            or fallback_analysis(float(plan["price"])).model_dump()
        )

        SupabaseClient.insert_row("subscription_price_history", {
            "plan_id": plan["id"],
            "previous_price": float(plan["price"]),
            "new_price": float(recommendation["recommended_price"]),
            "change_reason": f"Applied recommendation ID {recommendation_id}",
            "ai_analysis": {
                "market_factors": analysis.market_factors,
                "competitive_analysis": json.dumps(analysis.competitive_analysis, default=str),
                "user_impact": json.dumps(analysis.user_metrics, default=str),
                "recommended_adjustment": float(recommendation.get("percent_change") or 0),
                "confidence": analysis.confidence_score,
            },
            "changed_by_user_id": user_id,
            "is_automatic": False,
            "applied_at": utc_now_iso(),
        })

        updated_plan = SupabaseClient.update_row(
            "subscription_plans",
            plan["id"],
            {"price": float(recommendation["recommended_price"]), "updated_at": utc_now_iso()},
        )
        SupabaseClient.update_row(
            "price_recommendations",
            recommendation_id,
            {"status": RecommendationStatus.APPLIED.value, "updated_at": utc_now_iso()},
        )

        logger.info(f"Applied price recommendation {recommendation_id} to plan {plan['id']}")
        return updated_plan or plan

    def schedule_automatic_price_analysis(self) -> list[dict[str, Any]]:
        """
        Generate a recommendation for every active plan that hasn't had one lately.

        A plan is skipped when it has a `pending` recommendation created in
        the last 7 days. Failing plans are logged and skipped.
        """
        plans = SupabaseClient.fetch_rows(
            "subscription_plans",
            filters={"is_active": True},
            order_by="id",
            desc=False,
        )
        recent = SupabaseClient.fetch_rows(
            "price_recommendations",
            filters={"status": RecommendationStatus.PENDING.value},
            columns="id,plan_id,created_at",
            since=("created_at", iso_ago(seconds=ANALYSIS_COOLDOWN.total_seconds())),
        )
        cutoff = utc_now() - ANALYSIS_COOLDOWN
        recent_plan_ids = {
            rec["plan_id"] for rec in recent
            if (parse_timestamp(rec.get("created_at")) or cutoff) > cutoff
        }

        generated = []
        for plan in plans:
            if plan["id"] in recent_plan_ids:
                logger.info(f"Skipping analysis for plan {plan['id']}, recent recommendation exists")
                continue
            try:
                generated.append(self.generate_price_recommendation(plan["id"]))
            except (ApplicationError, ElevionException) as e:
                logger.error(f"Automatic price analysis failed for plan {plan['id']}: {e}")

        return generated
