# =============================================================================
# agents/ - AI Agents
# =============================================================================
# Every AI feature is a single call to xAI (lib/xai_client.py) that returns
# JSON or text, validated into a Pydantic model before it is stored:
# - bug_monitor.py: error log and feedback triage, bug summary report
# - price_optimizer.py: subscription price recommendations
# - content_moderator.py: pre-publish moderation (fails open)
# - content_generator.py: marketing copy with templated fallbacks
# - quote_generator.py: website quotes with heuristic fallback pricing
#
# Models:
# - models/: output schemas for each agent
#
# Prompts:
# - prompts/: system and user prompts for each agent
# =============================================================================

from agents.bug_monitor import BugMonitorAgent, group_logs_by_pattern, normalize_log_message
from agents.price_optimizer import PriceOptimizerAgent
from agents.content_moderator import analyze_content, moderate_content, record_violation
from agents.quote_generator import generate_quote

__all__ = [
    # Bug monitoring
    "BugMonitorAgent",
    "normalize_log_message",
    "group_logs_by_pattern",
    # Pricing
    "PriceOptimizerAgent",
    # Moderation
    "analyze_content",
    "record_violation",
    "moderate_content",
    # Quotes
    "generate_quote",
]
