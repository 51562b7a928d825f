# =============================================================================
# agents/prompts/ - Prompts for AI Agents
# =============================================================================
# One module per agent:
# - bug_monitor.py: log triage, feedback triage, summary report
# - pricing.py: price recommendation
# - moderation.py: content moderation
# - content.py: marketing copy and social posts
# - quote.py: website quotes
#
# Each module exposes *_SYSTEM_PROMPT constants and build_*_prompt()
# functions that fill in the user prompt.
# =============================================================================

from agents.prompts.bug_monitor import (
    FEEDBACK_ANALYSIS_SYSTEM_PROMPT,
    LOG_ANALYSIS_SYSTEM_PROMPT,
    SUMMARY_REPORT_SYSTEM_PROMPT,
)
from agents.prompts.moderation import MODERATION_SYSTEM_PROMPT
from agents.prompts.pricing import PRICING_SYSTEM_PROMPT
from agents.prompts.quote import QUOTE_SYSTEM_PROMPT

__all__ = [
    "LOG_ANALYSIS_SYSTEM_PROMPT",
    "FEEDBACK_ANALYSIS_SYSTEM_PROMPT",
    "SUMMARY_REPORT_SYSTEM_PROMPT",
    "MODERATION_SYSTEM_PROMPT",
    "PRICING_SYSTEM_PROMPT",
    "QUOTE_SYSTEM_PROMPT",
]
