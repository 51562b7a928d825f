# =============================================================================
# agents/quote_generator.py - Website Quote Generator
# =============================================================================
# Prices a website build from the features a prospect selected. The model
# estimates market rates and writes business insights; if it can't, the quote
# is computed locally with a fixed markup so the prospect always gets a price.
#
# Fallback pricing:
#   base       = 1000 setup + sum(feature base prices)
#   market     = base * 1.3
#   discounted = base * 0.6
#   timeline   = ceil(features * 1.5) weeks
# All amounts are rounded half-up to whole dollars.
# =============================================================================

from __future__ import annotations

import logging
import math

from pydantic import ValidationError

from agents.models.quote import Quote, QuoteLineItem
from agents.prompts.quote import QUOTE_SYSTEM_PROMPT, build_quote_prompt
from core.models.content import QuoteRequest
from lib.utils import ApplicationError, round_half_up
from lib.xai_client import XAIClient

logger = logging.getLogger(__name__)


SETUP_FEE = 1000
MARKET_MARKUP = 1.3
OUR_RATE = 0.6
WEEKS_PER_FEATURE = 1.5


def calculate_fallback_quote(request: QuoteRequest) -> Quote:
    """Heuristic quote used when the model is unavailable."""
    base_price = SETUP_FEE + sum(feature.base_price for feature in request.selected_features)

    return Quote(
        base_price=base_price,
        market_price=round_half_up(base_price * MARKET_MARKUP),
        discounted_price=round_half_up(base_price * OUR_RATE),
        breakdown=[
            QuoteLineItem(
                feature=feature.name,
                market_price=round_half_up(feature.base_price * MARKET_MARKUP),
                our_price=round_half_up(feature.base_price * OUR_RATE),
            )
            for feature in request.selected_features
        ],
        business_insights=(
            f"Based on standard industry pricing for {request.business_type} "
            "websites with your selected features."
        ),
        time_estimate=f"{math.ceil(len(request.selected_features) * WEEKS_PER_FEATURE)} weeks",
        is_fallback=True,
    )


def generate_quote(request: QuoteRequest) -> Quote:
    """Generate a quote. Never raises; any model failure yields the heuristic quote."""
    try:
        data = XAIClient.generate_json(
            prompt=build_quote_prompt(request),
            system_prompt=QUOTE_SYSTEM_PROMPT,
            max_tokens=1500,
        )
        return Quote.model_validate(data)
    except (ApplicationError, ValidationError) as e:
        logger.error(f"Error generating AI quote, using fallback pricing: {e}")
        return calculate_fallback_quote(request)
