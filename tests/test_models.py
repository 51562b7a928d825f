# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request and response schemas to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from agents.models import ModerationResult, PriceAnalysis, Quote
from app.auth.models import AuthUser
from core.models import (
    BlogIdeasRequest,
    BugReportUpdate,
    BugStatus,
    ContactSubmissionCreate,
    MarketplaceItemCreate,
    Pagination,
    PostStatus,
    PurchaseRequest,
    QuoteRequest,
    RecommendationReview,
    SocialPostCreate,
    SubscriptionPlanCreate,
    ok,
)


# =============================================================================
# Envelope & Pagination
# =============================================================================

class TestEnvelope:
    """Tests for the shared success envelope."""

    def test_ok_wraps_data(self):
        response = ok({"id": 1}, "Created")

        assert response.success is True
        assert response.message == "Created"
        assert response.data == {"id": 1}

    def test_ok_defaults(self):
        response = ok()

        assert response.message == "OK"
        assert response.data is None


class TestPagination:
    """Tests for Pagination.build page math."""

    def test_pages_round_up(self):
        pagination = Pagination.build(page=1, limit=20, total=41)
        assert pagination.pages == 3

    def test_exact_multiple(self):
        assert Pagination.build(page=2, limit=10, total=30).pages == 3

    def test_empty_result(self):
        pagination = Pagination.build(page=1, limit=20, total=0)

        assert pagination.total == 0
        assert pagination.pages == 0


# =============================================================================
# Request Models
# =============================================================================

class TestContentRequests:
    """Required lists must be non-empty."""

    def test_blog_ideas_defaults(self):
        request = BlogIdeasRequest(keywords=["seo"])

        assert request.count == 5
        assert request.audience is None

    def test_blog_ideas_empty_keywords_rejected(self):
        with pytest.raises(ValidationError):
            BlogIdeasRequest(keywords=[])

    def test_quote_requires_features(self):
        with pytest.raises(ValidationError):
            QuoteRequest(business_type="restaurant", selected_features=[])

    def test_quote_feature_price_not_negative(self):
        with pytest.raises(ValidationError):
            QuoteRequest(
                business_type="restaurant",
                selected_features=[{"name": "Blog", "base_price": -5}],
            )


class TestSocialPostCreate:

    def test_valid_post(self):
        post = SocialPostCreate(platform_id=1, content="Hello world")

        assert post.scheduled_time is None
        assert post.hash_tags == []
        assert post.media_urls == []

    def test_content_over_hard_limit_rejected(self):
        with pytest.raises(ValidationError):
            SocialPostCreate(platform_id=1, content="x" * 3001)

    def test_invalid_media_url_rejected(self):
        with pytest.raises(ValidationError):
            SocialPostCreate(platform_id=1, content="Hi", media_urls=["not a url"])

    def test_status_values(self):
        assert PostStatus("cancelled") == PostStatus.CANCELLED
        with pytest.raises(ValueError):
            PostStatus("deleted")


class TestCommerceModels:

    def test_item_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            MarketplaceItemCreate(name="Logo pack", description="Logos", price=0, category="design")

    def test_purchase_default_quantity(self):
        assert PurchaseRequest(item_id=3).quantity == 1

    def test_plan_defaults_to_monthly(self):
        plan = SubscriptionPlanCreate(name="Basic", price=19.99)

        assert plan.interval.value == "month"
        assert plan.is_active is True

    def test_review_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            RecommendationReview(status="maybe")


class TestContactSubmission:

    def test_valid_submission(self):
        submission = ContactSubmissionCreate(name="Ana", email="ana@example.com", message="Hi there")
        assert submission.company is None

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            ContactSubmissionCreate(name="Ana", email="not-an-email", message="Hi")


class TestBugReportUpdate:

    def test_only_sent_fields_are_set(self):
        update = BugReportUpdate(status="in_progress")

        assert update.status == BugStatus.IN_PROGRESS
        assert update.model_dump(exclude_unset=True) == {"status": BugStatus.IN_PROGRESS}


# =============================================================================
# Agent Models
# =============================================================================

class TestModerationResult:

    def test_allow_default(self):
        result = ModerationResult.allow()

        assert result.is_allowed is True
        assert result.score == 0
        assert result.category is None

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            ModerationResult(is_allowed=False, score=150)


class TestPriceAnalysis:

    def test_market_factors_from_dicts_and_strings(self):
        analysis = PriceAnalysis(
            current_price=49.99,
            recommended_price=54.99,
            market_trends=[{"factor": "Inflation rate", "impact": 0.7}, "AI premium", {"impact": 0.2}],
        )
        assert analysis.market_factors == ["Inflation rate", "AI premium"]

    def test_extra_fields_kept(self):
        analysis = PriceAnalysis(current_price=10, recommended_price=12, notes="seasonal")
        assert analysis.model_dump()["notes"] == "seasonal"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            PriceAnalysis(current_price=10, recommended_price=-1)


class TestQuote:

    def test_defaults(self):
        quote = Quote(base_price=1500, market_price=1950, discounted_price=900)

        assert quote.breakdown == []
        assert quote.is_fallback is False


# =============================================================================
# Auth Models
# =============================================================================

class TestAuthUser:

    def test_default_role(self):
        user = AuthUser(id="abc")

        assert user.role == "user"
        assert user.is_admin is False

    def test_admin(self):
        assert AuthUser(id="abc", role="admin").is_admin is True

    def test_frozen(self):
        user = AuthUser(id="abc")
        with pytest.raises(ValidationError):
            user.role = "admin"
