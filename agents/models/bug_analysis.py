# =============================================================================
# agents/models/bug_analysis.py - Bug Monitor Output Schemas
# =============================================================================
# The LLM is asked to answer with exactly these keys. Validation is lenient
# about extra keys but strict about types, so a malformed answer is rejected
# rather than stored half-parsed.
# =============================================================================

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from core.models.bug_report import BugSeverity


class LogAnalysis(BaseModel):
    """Verdict on one group of similar error logs."""

    is_bug: bool = Field(..., description="True if the pattern indicates a real bug")
    severity: BugSeverity = BugSeverity.MEDIUM
    description: str = Field(default="", description="What is going wrong")
    suggested_fix: str | None = None
    affected_component: str | None = None
    can_auto_fix: bool = False
    auto_fix_code: str | None = None

    # Filled in by the monitor, not the model
    pattern: str | None = None
    occurrences: int = 0
    log_ids: list[int] = Field(default_factory=list)
    bug_report_id: int | None = None


class FeedbackAnalysis(BaseModel):
    """Verdict on one piece of user feedback."""

    is_bug_report: bool
    sentiment: Literal["positive", "neutral", "negative"] = "neutral"
    priority: BugSeverity = BugSeverity.LOW
    category: str = "general"
    description: str = ""
    suggested_action: str | None = None

    feedback_id: int | None = None
    bug_report_id: int | None = None
