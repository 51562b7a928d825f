# =============================================================================
# tests/test_content_generator.py - AI Content Generator Tests
# =============================================================================
# Model calls are mocked. Each generator either returns model output or
# raises ContentGenerationError carrying a usable fallback.
# =============================================================================

from unittest.mock import patch

import pytest

from agents.content_generator import (
    FALLBACK_BLOG_IDEAS,
    extract_email_subject,
    fallback_social_posts,
    generate_blog_ideas,
    generate_email_template,
    generate_platform_content,
    generate_product_description,
    generate_social_content,
    suggest_listing_description,
)
from app.exceptions import ContentGenerationError
from core.models.content import (
    BlogIdeasRequest,
    EmailTemplateRequest,
    ProductDescriptionRequest,
    SocialContentRequest,
)
from core.models.marketplace import ListingSuggestionRequest
from core.models.social import GeneratedContentType
from lib.xai_client import XAIClientError


# =============================================================================
# Blog ideas
# =============================================================================

class TestBlogIdeas:

    @patch("agents.content_generator.XAIClient")
    def test_returns_ideas(self, mock_xai):
        mock_xai.generate_json.return_value = {"ideas": [{"headline": "SEO for bakeries"}]}

        ideas = generate_blog_ideas(BlogIdeasRequest(keywords=["seo"]))

        assert ideas == [{"headline": "SEO for bakeries"}]

    @patch("agents.content_generator.XAIClient")
    def test_failure_carries_static_ideas(self, mock_xai):
        mock_xai.generate_json.side_effect = XAIClientError("rate limited")

        with pytest.raises(ContentGenerationError) as exc_info:
            generate_blog_ideas(BlogIdeasRequest(keywords=["seo"]))

        error = exc_info.value
        assert error.status_code == 500
        assert error.fallback == {"ideas": FALLBACK_BLOG_IDEAS}
        assert len(error.fallback["ideas"]) == 3
        body = error.to_dict()
        assert body["error"] == "rate limited"
        assert body["fallback"]["ideas"][0]["headline"].startswith("5 Essential")

    @patch("agents.content_generator.XAIClient")
    def test_missing_ideas_key_is_a_failure(self, mock_xai):
        mock_xai.generate_json.return_value = {"headlines": []}

        with pytest.raises(ContentGenerationError) as exc_info:
            generate_blog_ideas(BlogIdeasRequest(keywords=["seo"]))

        assert exc_info.value.error == "response has no 'ideas' list"

    @patch("agents.content_generator.XAIClient")
    def test_error_text_excludes_code_and_suggestion(self, mock_xai):
        mock_xai.generate_text.side_effect = XAIClientError(
            "quota exceeded", code="XAI_RATE_LIMITED", suggestion="Wait a minute"
        )
        request = EmailTemplateRequest(key_points=["Faster sites"])

        with pytest.raises(ContentGenerationError) as exc_info:
            generate_email_template(request)

        assert exc_info.value.to_dict()["error"] == "quota exceeded"


# =============================================================================
# Product description
# =============================================================================

class TestProductDescription:

    @patch("agents.content_generator.XAIClient")
    def test_fallback_mentions_product_and_features(self, mock_xai):
        mock_xai.generate_text.side_effect = XAIClientError("down")
        request = ProductDescriptionRequest(
            product_name="SiteBuilder",
            features=["drag and drop", "SEO tools", "analytics", "hosting"],
        )

        with pytest.raises(ContentGenerationError) as exc_info:
            generate_product_description(request)

        description = exc_info.value.fallback["description"]
        assert description.startswith("SiteBuilder is designed specifically for")
        assert "drag and drop, SEO tools, analytics" in description
        assert "hosting" not in description

    @patch("agents.content_generator.XAIClient")
    def test_returns_model_text(self, mock_xai):
        mock_xai.generate_text.return_value = "A great product."
        request = ProductDescriptionRequest(product_name="SiteBuilder", features=["SEO"])

        assert generate_product_description(request) == "A great product."


# =============================================================================
# Social content
# =============================================================================

class TestSocialContent:

    def test_fallback_platform_variants(self):
        request = SocialContentRequest(
            key_messages=["We build fast websites. " * 10],
            industry="Real Estate",
        )

        posts = {post["platform"]: post for post in fallback_social_posts(request)}

        assert len(posts["twitter"]["content"]) == 240
        assert posts["linkedin"]["content"].endswith("What challenges is your business facing online?")
        assert posts["facebook"]["hashtags"] == ["#RealEstate", "#SmallBusiness", "#DigitalSolutions"]

    def test_fallback_default_hashtag(self):
        posts = fallback_social_posts(SocialContentRequest(key_messages=["Hello"], platforms=["facebook"]))
        assert posts[0]["hashtags"][0] == "#WebDevelopment"

    @patch("agents.content_generator.XAIClient")
    def test_failure_carries_fallback_posts(self, mock_xai):
        mock_xai.generate_json.side_effect = XAIClientError("down")

        with pytest.raises(ContentGenerationError) as exc_info:
            generate_social_content(SocialContentRequest(key_messages=["Hello"]))

        assert [p["platform"] for p in exc_info.value.fallback["posts"]] == ["twitter", "linkedin", "facebook"]


# =============================================================================
# Email templates
# =============================================================================

class TestEmailTemplate:

    def test_extracts_subject_line(self):
        result = extract_email_subject("Subject: Grow online\n\nDear customer,\nHello.")

        assert result["subject"] == "Grow online"
        assert result["body"] == "Dear customer,\nHello."

    def test_extracts_subject_line_variant(self):
        result = extract_email_subject("subject line: Big news\nBody text")
        assert result["subject"] == "Big news"
        assert result["body"] == "Body text"

    def test_no_subject_uses_default(self):
        result = extract_email_subject("Just a body", "Requested subject")
        assert result == {"subject": "Requested subject", "body": "Just a body"}

    @patch("agents.content_generator.XAIClient")
    def test_failure_carries_fallback_email(self, mock_xai):
        mock_xai.generate_text.side_effect = XAIClientError("down")
        request = EmailTemplateRequest(key_points=["Faster sites", "Better SEO"], company_name="Acme")

        with pytest.raises(ContentGenerationError) as exc_info:
            generate_email_template(request)

        email = exc_info.value.fallback["email"]
        assert email["subject"] == "Transform Your Business with Acme's Web Solutions"
        assert "• Faster sites\n• Better SEO" in email["body"]
        assert email["body"].endswith("The Acme Team")
        assert email["body"].startswith("Dear Business Owner,")


# =============================================================================
# Listing suggestion and platform content
# =============================================================================

class TestListingSuggestion:

    @patch("agents.content_generator.XAIClient")
    def test_model_description(self, mock_xai):
        mock_xai.generate_text.return_value = "Custom logos for your brand."

        result = suggest_listing_description(ListingSuggestionRequest(name="Logo pack", category="design"))

        assert result == {"description": "Custom logos for your brand.", "fallback": False}

    @patch("agents.content_generator.XAIClient")
    def test_falls_back_silently(self, mock_xai):
        mock_xai.generate_text.side_effect = XAIClientError("down")

        result = suggest_listing_description(ListingSuggestionRequest(name="Logo pack", category="design"))

        assert result["fallback"] is True
        assert result["description"].startswith("Logo pack - Professional web development service")


class TestPlatformContent:

    @patch("agents.content_generator.XAIClient")
    def test_hashtags_list(self, mock_xai):
        mock_xai.generate_json.return_value = {"hashtags": ["#a", "#b"]}

        result = generate_platform_content(GeneratedContentType.HASHTAGS, "Twitter", "web design")

        assert result == ["#a", "#b"]
        mock_xai.generate_text.assert_not_called()

    @patch("agents.content_generator.XAIClient")
    def test_post_text(self, mock_xai):
        mock_xai.generate_text.return_value = "New post!"

        assert generate_platform_content(GeneratedContentType.POST, "LinkedIn", "launch", 3000) == "New post!"

    @patch("agents.content_generator.XAIClient")
    def test_errors_propagate(self, mock_xai):
        mock_xai.generate_text.side_effect = XAIClientError("down")

        with pytest.raises(XAIClientError):
            generate_platform_content(GeneratedContentType.CAPTION, "Instagram", "launch")
