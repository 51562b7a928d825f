# =============================================================================
# agents/models/moderation_result.py - Content Moderation Verdict
# =============================================================================

from __future__ import annotations

from pydantic import BaseModel, Field


class ModerationResult(BaseModel):
    """
    Verdict for one piece of content.

    score is 0-100 where higher means more likely to violate policy.
    """

    is_allowed: bool = True
    score: int = Field(default=0, ge=0, le=100)
    category: str | None = None
    reason: str | None = None

    @classmethod
    def allow(cls, reason: str = "Moderation unavailable; content allowed by default") -> "ModerationResult":
        return cls(is_allowed=True, score=0, category=None, reason=reason)
