# =============================================================================
# app/routers/quote.py - Website Quote API
# =============================================================================

from fastapi import APIRouter

from agents.quote_generator import generate_quote
from core.models.common import ApiResponse, ok
from core.models.content import QuoteRequest

router = APIRouter(prefix="/api/quote", tags=["Quote"])


@router.post("/generate-quote", response_model=ApiResponse)
def generate_website_quote(request: QuoteRequest):
    """
    Price a website build from the selected features.

    Always answers: when the AI is unavailable the quote is computed
    locally and flagged with is_fallback.
    """
    quote = generate_quote(request)
    message = "Quote generated (standard pricing)" if quote.is_fallback else "Quote generated"
    return ok(quote.model_dump(), message)
