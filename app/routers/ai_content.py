# =============================================================================
# app/routers/ai_content.py - AI Content Generator API
# =============================================================================
# Marketing copy helpers. On AI failure each endpoint answers 500 with a
# locally built `fallback` in the error body (see ContentGenerationError).
# =============================================================================

from fastapi import APIRouter

from agents.content_generator import (
    generate_blog_ideas,
    generate_email_template,
    generate_product_description,
    generate_social_content,
)
from core.models.common import ApiResponse, ok
from core.models.content import (
    BlogIdeasRequest,
    EmailTemplateRequest,
    ProductDescriptionRequest,
    SocialContentRequest,
)

router = APIRouter(prefix="/api/ai-content", tags=["AI Content"])


@router.post("/blog-ideas", response_model=ApiResponse)
def blog_ideas(request: BlogIdeasRequest):
    return ok({"ideas": generate_blog_ideas(request)}, "Blog ideas generated")


@router.post("/product-description", response_model=ApiResponse)
def product_description(request: ProductDescriptionRequest):
    description = generate_product_description(request)
    return ok({"description": description}, "Product description generated")


@router.post("/social-content", response_model=ApiResponse)
def social_content(request: SocialContentRequest):
    """One post per requested platform."""
    return ok({"posts": generate_social_content(request)}, "Social media content generated")


@router.post("/email-template", response_model=ApiResponse)
def email_template(request: EmailTemplateRequest):
    """
    Draft an email.

    The subject is taken from the model's "Subject:" line when it writes
    one, otherwise from the request.
    """
    return ok({"email": generate_email_template(request)}, "Email template generated")
