# =============================================================================
# core/models/moderation.py - Content Moderation Schemas
# =============================================================================
# A blocked piece of content produces one compliance scan row and one alert
# ("violation") row. Admins work the alerts from the moderation dashboard.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class ViolationStatus(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"
    FALSE_POSITIVE = "false_positive"
    ESCALATED = "escalated"


class ViolationUpdate(BaseModel):
    status: ViolationStatus
    admin_notes: str | None = Field(default=None, max_length=5000)


class AnalyzeContentRequest(BaseModel):
    """Manual moderation check from the admin dashboard."""

    content: str = Field(..., min_length=1)
    content_type: str = Field(default="text", max_length=50)
    content_id: str | None = None
    title: str | None = Field(default=None, max_length=300)
