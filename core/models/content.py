# =============================================================================
# core/models/content.py - AI Content & Quote Request Schemas
# =============================================================================
# Inputs for the AI writing helpers (/api/ai-content) and the website quote
# generator (/api/quote). Required lists must be non-empty.
# =============================================================================

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# AI Content Generator
# -----------------------------------------------------------------------------

class BlogIdeasRequest(BaseModel):
    keywords: list[str] = Field(..., min_length=1)
    audience: str | None = None
    industry: str | None = None
    count: int = Field(default=5, ge=1, le=20)


class ProductDescriptionRequest(BaseModel):
    product_name: str = Field(..., min_length=1)
    features: list[str] = Field(..., min_length=1)
    benefits: list[str] | None = None
    target_audience: str | None = None
    tone: str = "professional"
    word_count: int = Field(default=150, ge=25, le=1000)


class SocialContentRequest(BaseModel):
    key_messages: list[str] = Field(..., min_length=1)
    platforms: list[str] = Field(default_factory=lambda: ["twitter", "linkedin", "facebook"])
    tone: str = "professional"
    industry: str | None = None


class EmailTemplateRequest(BaseModel):
    type: str = Field(default="marketing", examples=["marketing", "transactional"])
    subject: str | None = None
    key_points: list[str] = Field(..., min_length=1)
    audience: str | None = None
    call_to_action: str | None = None
    company_name: str = "Elevion"


# -----------------------------------------------------------------------------
# Quote Generator
# -----------------------------------------------------------------------------

class SelectedFeature(BaseModel):
    name: str = Field(..., min_length=1)
    base_price: float = Field(..., ge=0, description="List price of the feature in dollars")


class QuoteRequest(BaseModel):
    business_type: str = Field(..., min_length=1, examples=["restaurant"])
    business_name: str | None = None
    business_description: str | None = None
    current_website: str | None = None
    selected_features: list[SelectedFeature] = Field(..., min_length=1)
