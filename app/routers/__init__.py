# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - portfolio.py, contact.py, feedback.py: Marketing site content
# - quote.py, ai_content.py: AI writing and pricing helpers
# - marketplace.py, subscriptions.py: Commerce (Stripe)
# - social_media.py: Buffer scheduling and analytics
# - bug_monitoring.py, price_optimization.py, moderation.py: Admin dashboards
#
# Each router carries its own /api/... prefix and is mounted in main.py.
# =============================================================================

from . import ai_content
from . import bug_monitoring
from . import contact
from . import feedback
from . import health
from . import marketplace
from . import moderation
from . import portfolio
from . import price_optimization
from . import quote
from . import social_media
from . import subscriptions

__all__ = [
    "ai_content",
    "bug_monitoring",
    "contact",
    "feedback",
    "health",
    "marketplace",
    "moderation",
    "portfolio",
    "price_optimization",
    "quote",
    "social_media",
    "subscriptions",
]
