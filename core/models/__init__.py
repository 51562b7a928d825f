# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request validation:
# - common.py: success envelope and pagination
# - bug_report.py: bug monitoring enums and admin edits
# - subscription.py: plans, subscriptions, price recommendations
# - moderation.py: moderation alerts and manual checks
# - marketplace.py: listings, purchases, orders
# - portfolio.py: portfolio case studies
# - social.py: social posts and AI post generation
# - contact.py: contact form and feedback
# - content.py: AI content and quote requests
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import ApiResponse, PaginatedResponse, Pagination, ok

from .bug_report import (
    AnalysisTimeframe,
    BugReportUpdate,
    BugSeverity,
    BugSource,
    BugStatus,
    LogLevel,
)

from .subscription import (
    CancelSubscriptionRequest,
    GenerateRecommendationRequest,
    PlanInterval,
    RecommendationReview,
    RecommendationStatus,
    SubscribeRequest,
    SubscriptionPlanCreate,
    SubscriptionStatus,
)

from .moderation import AnalyzeContentRequest, ViolationStatus, ViolationUpdate

from .marketplace import (
    ListingSuggestionRequest,
    MarketplaceItemCreate,
    MarketplaceItemUpdate,
    OrderStatus,
    PurchaseRequest,
)

from .portfolio import PortfolioItemCreate, PortfolioItemUpdate

from .social import (
    GeneratedContentType,
    GenerateSocialContentRequest,
    PostStatus,
    SocialPostCreate,
    SocialPostUpdate,
)

from .contact import ContactSubmissionCreate, FeedbackCreate, FeedbackStatus

from .content import (
    BlogIdeasRequest,
    EmailTemplateRequest,
    ProductDescriptionRequest,
    QuoteRequest,
    SelectedFeature,
    SocialContentRequest,
)

__all__ = [
    # Common
    "ApiResponse",
    "PaginatedResponse",
    "Pagination",
    "ok",
    # Bug monitoring
    "AnalysisTimeframe",
    "BugReportUpdate",
    "BugSeverity",
    "BugSource",
    "BugStatus",
    "LogLevel",
    # Subscriptions & pricing
    "CancelSubscriptionRequest",
    "GenerateRecommendationRequest",
    "PlanInterval",
    "RecommendationReview",
    "RecommendationStatus",
    "SubscribeRequest",
    "SubscriptionPlanCreate",
    "SubscriptionStatus",
    # Moderation
    "AnalyzeContentRequest",
    "ViolationStatus",
    "ViolationUpdate",
    # Marketplace
    "ListingSuggestionRequest",
    "MarketplaceItemCreate",
    "MarketplaceItemUpdate",
    "OrderStatus",
    "PurchaseRequest",
    # Portfolio
    "PortfolioItemCreate",
    "PortfolioItemUpdate",
    # Social
    "GeneratedContentType",
    "GenerateSocialContentRequest",
    "PostStatus",
    "SocialPostCreate",
    "SocialPostUpdate",
    # Contact
    "ContactSubmissionCreate",
    "FeedbackCreate",
    "FeedbackStatus",
    # AI content & quotes
    "BlogIdeasRequest",
    "EmailTemplateRequest",
    "ProductDescriptionRequest",
    "QuoteRequest",
    "SelectedFeature",
    "SocialContentRequest",
]
