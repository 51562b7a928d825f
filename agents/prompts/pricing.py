# =============================================================================
# agents/prompts/pricing.py - Price Optimizer Prompt
# =============================================================================

from __future__ import annotations

import json
from typing import Any


PRICING_SYSTEM_PROMPT = """
You are an AI pricing strategist specializing in SaaS and subscription business models.
Analyze the provided data about a subscription plan, user metrics, market trends, and competitive intelligence to generate
an optimal price recommendation. Focus on maximizing revenue while maintaining competitiveness and customer value.
Your response should be a detailed JSON object with pricing recommendations, reasoning, and projected impacts.
""".strip()


def build_pricing_prompt(
    plan: dict[str, Any],
    user_metrics: dict[str, Any],
    market_trends: list[dict[str, Any]],
    competitors: list[dict[str, Any]],
) -> str:
    """Build the user prompt for one plan's price recommendation."""

    def dump(value: Any) -> str:
        return json.dumps(value, indent=2, default=str)

    return f"""
Please analyze the following subscription plan and market data to generate a price recommendation:

SUBSCRIPTION PLAN DATA:
{dump(plan)}

USER METRICS:
{dump(user_metrics)}

MARKET TRENDS:
{dump(market_trends)}

COMPETITIVE ANALYSIS:
{dump(competitors)}

Based on this data, determine the optimal price point for this subscription plan.

Return a JSON object with these keys:
{{
  "current_price": number,
  "recommended_price": number,
  "market_trends": [{{"factor": string, "impact": number, "analysis": string}}],
  "user_metrics": [{{"metric": string, "value": number, "influence": string}}],
  "competitive_analysis": [{{"competitor": string, "price": number, "position": string}}],
  "projected_impact": {{"revenue": number, "user_retention": number, "new_subscriptions": number}},
  "reasoning": "Detailed reasoning for the recommendation",
  "confidence_score": number between 0 and 1
}}

projected_impact values are percentage changes (e.g. 5.5 means +5.5%).
""".strip()
