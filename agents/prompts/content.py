# =============================================================================
# agents/prompts/content.py - Marketing Content Prompts
# =============================================================================
# Prompts for the AI writing helpers:
# - blog ideas, product descriptions, social posts, email templates
# - marketplace listing descriptions
# - single social posts / captions / hashtags for one platform
# =============================================================================

from __future__ import annotations

from core.models.content import (
    BlogIdeasRequest,
    EmailTemplateRequest,
    ProductDescriptionRequest,
    SocialContentRequest,
)
from core.models.marketplace import ListingSuggestionRequest
from core.models.social import GeneratedContentType

DEFAULT_AUDIENCE = "small business owners"
DEFAULT_INDUSTRY = "web development"


CONTENT_SYSTEM_PROMPT = """
You are a senior marketing copywriter at Elevion, a web development agency for small businesses.
Write clear, persuasive, professional copy. When asked for JSON, return only the JSON object.
""".strip()


LISTING_SYSTEM_PROMPT = (
    "You are an expert web development service copywriter who specializes in creating compelling "
    "marketplace listings. Create a professional, detailed, and persuasive description for the "
    "following web development service. Focus on benefits, key features, and unique selling points. "
    "Keep the description between 100-200 words."
)

SOCIAL_POST_SYSTEM_PROMPT = (
    "You are a social media expert specializing in creating engaging, platform-optimized content."
)

HASHTAG_SYSTEM_PROMPT = "You are a social media expert specializing in hashtag optimization."


def build_blog_ideas_prompt(request: BlogIdeasRequest) -> str:
    return f"""
Generate {request.count} engaging blog post ideas for a {request.industry or DEFAULT_INDUSTRY} company
targeting {request.audience or DEFAULT_AUDIENCE}. Include compelling headlines, brief descriptions
(2-3 sentences), and target keywords. The blog should incorporate these keywords: {', '.join(request.keywords)}.

Format the response as JSON with the following structure:
{{
  "ideas": [
    {{
      "headline": "Compelling headline here",
      "description": "Brief 2-3 sentence description",
      "keywords": ["keyword1", "keyword2"],
      "estimated_word_count": 1200
    }}
  ]
}}
""".strip()


def build_product_description_prompt(request: ProductDescriptionRequest) -> str:
    benefits = ", ".join(request.benefits) if request.benefits else "to be determined from features"
    return f"""
Create a compelling {request.word_count}-word product description for "{request.product_name}".
Target audience: {request.target_audience or DEFAULT_AUDIENCE}.
Tone: {request.tone}.
Features: {', '.join(request.features)}.
Benefits: {benefits}.
Make the description engaging, highlight unique selling points, and include a call to action.
""".strip()


def build_social_content_prompt(request: SocialContentRequest) -> str:
    return f"""
Create social media posts for {', '.join(request.platforms)} based on these key messages:
{'; '.join(request.key_messages)}.
Industry: {request.industry or DEFAULT_INDUSTRY}.
Tone: {request.tone}.
Tailor each post to the specific platform, including appropriate hashtags and formatting.

Return the response as JSON with this structure:
{{
  "posts": [
    {{
      "platform": "platform name",
      "content": "post content",
      "hashtags": ["tag1", "tag2"]
    }}
  ]
}}
""".strip()


def build_email_template_prompt(request: EmailTemplateRequest) -> str:
    return f"""
Create an {request.type} email template for {request.audience or DEFAULT_AUDIENCE}.
Subject line: {request.subject or 'suggest an engaging subject line'}.
Company: {request.company_name}.
Key points to include: {'; '.join(request.key_points)}.
Call to action: {request.call_to_action or 'Schedule a consultation'}.
Include appropriate greeting, body with key points, call to action, and signature.
Format the response with clear sections for subject line and email body.
""".strip()


def build_listing_prompt(request: ListingSuggestionRequest) -> str:
    lines = [f"Create a marketplace listing description for: {request.name}", f"Category: {request.category}"]
    if request.key_points:
        lines.append(f"Highlight: {'; '.join(request.key_points)}")
    if request.target_audience:
        lines.append(f"Target audience: {request.target_audience}")
    return "\n".join(lines)


def build_platform_content_prompt(
    content_type: GeneratedContentType,
    platform_name: str,
    topic: str,
    character_limit: int | None = None,
) -> str:
    """Prompt for one post, caption or hashtag set on a single platform."""
    limit = f" (maximum {character_limit} characters)" if character_limit else ""

    if content_type == GeneratedContentType.POST:
        return (
            f"Generate a compelling social media post for {platform_name}{limit} about {topic}. "
            "Make it engaging, relevant to the platform, and optimized for engagement."
        )
    if content_type == GeneratedContentType.CAPTION:
        return f"Write an engaging caption for an image on {platform_name}{limit} about {topic}."
    return (
        f"Suggest 5-10 relevant and trending hashtags for a {platform_name} post about {topic}. "
        'Format as a JSON object: {"hashtags": ["#tag1", "#tag2"]}.'
    )
