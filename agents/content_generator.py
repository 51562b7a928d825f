# =============================================================================
# agents/content_generator.py - AI Marketing Content Generator
# =============================================================================
# One model call per request. When the call fails the caller still gets
# usable copy: each generator raises ContentGenerationError carrying a
# locally templated fallback, which the API returns alongside the error.
#
# Usage:
#   from agents.content_generator import generate_blog_ideas
#   ideas = generate_blog_ideas(BlogIdeasRequest(keywords=["seo"]))
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any

from app.config import settings
from app.exceptions import ContentGenerationError
from agents.prompts.content import (
    CONTENT_SYSTEM_PROMPT,
    DEFAULT_AUDIENCE,
    DEFAULT_INDUSTRY,
    HASHTAG_SYSTEM_PROMPT,
    LISTING_SYSTEM_PROMPT,
    SOCIAL_POST_SYSTEM_PROMPT,
    build_blog_ideas_prompt,
    build_email_template_prompt,
    build_listing_prompt,
    build_platform_content_prompt,
    build_product_description_prompt,
    build_social_content_prompt,
)
from core.models.content import (
    BlogIdeasRequest,
    EmailTemplateRequest,
    ProductDescriptionRequest,
    SocialContentRequest,
)
from core.models.marketplace import ListingSuggestionRequest
from core.models.social import GeneratedContentType
from lib.utils import ApplicationError
from lib.xai_client import XAIClient

logger = logging.getLogger(__name__)


TWITTER_FALLBACK_LIMIT = 240
LINKEDIN_FALLBACK_QUESTION = " What challenges is your business facing online?"
DEFAULT_CALL_TO_ACTION = (
    "Schedule a free consultation today by replying to this email "
    "or calling us at (555) 123-4567."
)

_SUBJECT_RE = re.compile(r"Subject(?:\s+line)?:\s*(.*?)(?:\n|$)", re.IGNORECASE)


def _error_text(error: Exception) -> str:
    return error.message if isinstance(error, ApplicationError) else str(error)


# =============================================================================
# Fallbacks
# =============================================================================

FALLBACK_BLOG_IDEAS: list[dict[str, Any]] = [
    {
        "headline": "5 Essential Web Design Elements Every Small Business Website Needs",
        "description": (
            "Discover the key design elements that can transform your small business website from "
            "ordinary to extraordinary. Learn how professional layouts, responsive design, and "
            "strategic CTAs can drive conversions and enhance user experience."
        ),
        "keywords": ["web design", "small business website", "user experience"],
        "estimated_word_count": 1200,
    },
    {
        "headline": "How to Choose the Right Web Development Partner for Your Small Business",
        "description": (
            "Finding the perfect web development partner can be challenging. This guide walks you "
            "through the essential questions to ask, red flags to watch for, and how to evaluate "
            "portfolios to ensure you select a developer who understands your unique business needs."
        ),
        "keywords": ["web development", "small business", "website partner"],
        "estimated_word_count": 1500,
    },
    {
        "headline": "The ROI of Professional Web Development: Why It's Worth the Investment",
        "description": (
            "Explore the tangible and intangible returns of investing in professional web development "
            "for your small business. We break down the financial benefits, time savings, and "
            "competitive advantages that come with a properly developed website."
        ),
        "keywords": ["web development ROI", "website investment", "small business growth"],
        "estimated_word_count": 1300,
    },
]


def fallback_product_description(request: ProductDescriptionRequest) -> str:
    return (
        f"{request.product_name} is designed specifically for {request.target_audience or DEFAULT_AUDIENCE} "
        f"who need a reliable web solution. Featuring {', '.join(request.features[:3])}, this product "
        "streamlines your online presence while saving you time and resources. With an intuitive "
        f"interface and professional design, {request.product_name} helps you stand out from "
        "competitors and attract more customers. Try it today and transform your digital experience."
    )


def fallback_social_posts(request: SocialContentRequest) -> list[dict[str, Any]]:
    industry = request.industry or DEFAULT_INDUSTRY
    industry_tag = "#" + re.sub(r"\s+", "", request.industry) if request.industry else "#WebDevelopment"
    content = (
        f"Looking to enhance your online presence? Our {industry} solutions help small businesses "
        f"stand out in a crowded market. {request.key_messages[0]}"
    )

    posts = []
    for platform in request.platforms:
        text = content
        if platform == "twitter":
            text = text[:TWITTER_FALLBACK_LIMIT]
        elif platform == "linkedin":
            text += LINKEDIN_FALLBACK_QUESTION
        posts.append({
            "platform": platform,
            "content": text,
            "hashtags": [industry_tag, "#SmallBusiness", "#DigitalSolutions"],
        })
    return posts


def fallback_email(request: EmailTemplateRequest) -> dict[str, str]:
    company = request.company_name
    key_points = "\n".join(f"• {point}" for point in request.key_points)
    body = (
        f"Dear {request.audience or 'Business Owner'},\n\n"
        f"We hope this email finds you well. At {company}, we understand the challenges that small "
        "businesses face in establishing a strong online presence.\n\n"
        f"{key_points}\n\n"
        "We'd love to discuss how we can help you achieve your business goals through our "
        "customized web solutions.\n\n"
        f"{request.call_to_action or DEFAULT_CALL_TO_ACTION}\n\n"
        "Best regards,\n"
        f"The {company} Team"
    )
    return {
        "subject": request.subject or f"Transform Your Business with {company}'s Web Solutions",
        "body": body,
    }


def fallback_listing_description(name: str) -> str:
    return (
        f"{name} - Professional web development service tailored to meet your business needs. "
        "Our team of experts will create a custom solution that helps your business thrive online "
        "with modern design and powerful functionality. We focus on responsive design, user "
        "experience, and performance optimization to ensure your website stands out from the "
        "competition."
    )


# =============================================================================
# Generators
# =============================================================================

def generate_blog_ideas(request: BlogIdeasRequest) -> list[dict[str, Any]]:
    """
    Raises:
        ContentGenerationError: With the static ideas as fallback
    """
    try:
        data = XAIClient.generate_json(
            prompt=build_blog_ideas_prompt(request),
            system_prompt=CONTENT_SYSTEM_PROMPT,
            model=settings.XAI_MODEL,
            max_tokens=2000,
        )
        ideas = data.get("ideas")
        if not isinstance(ideas, list):
            raise ValueError("response has no 'ideas' list")
        return ideas
    except (ApplicationError, ValueError) as e:
        logger.error(f"Blog ideas generation failed: {e}")
        raise ContentGenerationError(
            "Blog ideas generation failed",
            error=_error_text(e),
            fallback={"ideas": FALLBACK_BLOG_IDEAS},
        )


def generate_product_description(request: ProductDescriptionRequest) -> str:
    try:
        return XAIClient.generate_text(
            prompt=build_product_description_prompt(request),
            system_prompt=CONTENT_SYSTEM_PROMPT,
            model=settings.XAI_MODEL,
            max_tokens=max(300, request.word_count * 3),
        )
    except ApplicationError as e:
        logger.error(f"Product description generation failed: {e}")
        raise ContentGenerationError(
            "Product description generation failed",
            error=_error_text(e),
            fallback={"description": fallback_product_description(request)},
        )


def generate_social_content(request: SocialContentRequest) -> list[dict[str, Any]]:
    try:
        data = XAIClient.generate_json(
            prompt=build_social_content_prompt(request),
            system_prompt=CONTENT_SYSTEM_PROMPT,
            model=settings.XAI_MODEL,
            max_tokens=1500,
        )
        posts = data.get("posts")
        if not isinstance(posts, list):
            raise ValueError("response has no 'posts' list")
        return posts
    except (ApplicationError, ValueError) as e:
        logger.error(f"Social content generation failed: {e}")
        raise ContentGenerationError(
            "Social content generation failed",
            error=_error_text(e),
            fallback={"posts": fallback_social_posts(request)},
        )


def extract_email_subject(content: str, default_subject: str | None = None) -> dict[str, str]:
    """
    Split model output into subject and body.

    The first "Subject:" or "Subject line:" line becomes the subject and is
    removed from the body. Without one, the whole text is the body.
    """
    match = _SUBJECT_RE.search(content)
    if match and match.group(1).strip():
        return {
            "subject": match.group(1).strip(),
            "body": content.replace(match.group(0), "", 1).strip(),
        }
    return {"subject": default_subject or "", "body": content}


def generate_email_template(request: EmailTemplateRequest) -> dict[str, str]:
    try:
        content = XAIClient.generate_text(
            prompt=build_email_template_prompt(request),
            system_prompt=CONTENT_SYSTEM_PROMPT,
            model=settings.XAI_MODEL,
            max_tokens=1500,
        )
    except ApplicationError as e:
        logger.error(f"Email template generation failed: {e}")
        raise ContentGenerationError(
            "Email template generation failed",
            error=_error_text(e),
            fallback={"email": fallback_email(request)},
        )
    return extract_email_subject(content, request.subject)


def suggest_listing_description(request: ListingSuggestionRequest) -> dict[str, Any]:
    """
    Marketplace listing copy. Falls back silently to a template.

    Returns:
        {"description": str, "fallback": bool}
    """
    try:
        description = XAIClient.generate_text(
            prompt=build_listing_prompt(request),
            system_prompt=LISTING_SYSTEM_PROMPT,
            model=settings.XAI_FAST_MODEL,
            temperature=0.7,
        )
        return {"description": description, "fallback": False}
    except ApplicationError as e:
        logger.warning(f"Listing description generation failed, using template: {e}")
        return {"description": fallback_listing_description(request.name), "fallback": True}


def generate_platform_content(
    content_type: GeneratedContentType,
    platform_name: str,
    topic: str,
    character_limit: int | None = None,
) -> str | list[str]:
    """
    Generate a post, caption or hashtag list for one social platform.

    Raises:
        XAIClientError: If generation fails (no fallback for this one)
    """
    prompt = build_platform_content_prompt(content_type, platform_name, topic, character_limit)

    if content_type == GeneratedContentType.HASHTAGS:
        data = XAIClient.generate_json(prompt=prompt, system_prompt=HASHTAG_SYSTEM_PROMPT)
        hashtags = data.get("hashtags")
        if isinstance(hashtags, list):
            return [str(tag) for tag in hashtags]
        return [str(tag) for value in data.values() if isinstance(value, list) for tag in value]

    return XAIClient.generate_text(prompt=prompt, system_prompt=SOCIAL_POST_SYSTEM_PROMPT)
