# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains thin wrappers around external services:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - xai_client.py: OpenAI-compatible client for the xAI (Grok) API
# - buffer_client.py: Buffer social media scheduling API
# - stripe_client.py: Stripe customers, prices, subscriptions, payments
# - email_client.py: SendGrid notification emails
# - log_handler.py: Persists ERROR logs for the bug monitor
# - utils.py: Shared utilities (error base class, time, rounding)
#
# Each client raises a typed ApplicationError subclass on failure.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, round_half_up, utc_now, utc_now_iso
from lib.xai_client import XAIClient, XAIClientError

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # xAI
    "XAIClient",
    "XAIClientError",
    # Utils
    "ApplicationError",
    "round_half_up",
    "utc_now",
    "utc_now_iso",
]
