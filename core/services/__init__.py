# =============================================================================
# core/services/ - Business Logic Services
# =============================================================================
# Service classes sit between the API routers and the database:
# - bug_report_service.py: bug report triage
# - pricing_service.py: price recommendation review and history
# - subscription_service.py: plans and user subscriptions (Stripe)
# - moderation_service.py: moderation dashboard
# - marketplace_service.py: listings and purchases (Stripe)
# - portfolio_service.py: portfolio case studies
# - social_media_service.py: social posts and Buffer publishing
# - contact_service.py: contact form (SendGrid) and feedback
# =============================================================================

from core.services.bug_report_service import BugReportService
from core.services.contact_service import ContactService
from core.services.marketplace_service import MarketplaceService
from core.services.moderation_service import ModerationService
from core.services.portfolio_service import PortfolioService
from core.services.pricing_service import PricingService
from core.services.social_media_service import SocialMediaService, map_interactions
from core.services.subscription_service import SubscriptionService

__all__ = [
    "BugReportService",
    "ContactService",
    "MarketplaceService",
    "ModerationService",
    "PortfolioService",
    "PricingService",
    "SocialMediaService",
    "SubscriptionService",
    "map_interactions",
]
