# =============================================================================
# agents/prompts/quote.py - Website Quote Prompt
# =============================================================================

from __future__ import annotations

from core.models.content import QuoteRequest


QUOTE_SYSTEM_PROMPT = """
You are a web development pricing expert at Elevion, a premier web development company.
Your goal is to generate accurate price quotes for potential clients based on their business type and selected features.
Always provide competitive pricing (60% of market average) while ensuring we make a reasonable profit.
""".strip()


def build_quote_prompt(request: QuoteRequest) -> str:
    lines = [f"Generate a detailed quote for a {request.business_type} business"]
    if request.business_name:
        lines[0] += f' called "{request.business_name}"'
    lines[0] += "."
    if request.business_description:
        lines.append(f"Business description: {request.business_description}")
    if request.current_website:
        lines.append(f"Current website: {request.current_website}")

    features = "\n".join(
        f"- {feature.name} (base cost: ${feature.base_price})"
        for feature in request.selected_features
    )

    return "\n".join(lines) + f"""

Selected features:
{features}

Please include:
1. Base price for all selected features
2. The estimated market price (what competitors would charge)
3. Our discounted price (60% of market price)
4. A breakdown of each feature with market price and our price
5. Business-specific insights based on the business type and selected features
6. An estimated timeline for completion

Return the results as a JSON object with the following structure:
{{
  "base_price": number,
  "market_price": number,
  "discounted_price": number,
  "breakdown": [{{"feature": string, "market_price": number, "our_price": number}}],
  "business_insights": string,
  "time_estimate": string
}}
"""
