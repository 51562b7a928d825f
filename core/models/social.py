# =============================================================================
# core/models/social.py - Social Media Schemas
# =============================================================================
# Posts are written locally first and pushed to Buffer on publish.
#
# Status flow:
#   draft/scheduled -> (publish) -> scheduled | processing -> posted
#   any unposted state -> cancelled
#   failed: Buffer rejected the post (error_message holds the reason)
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, HttpUrl

# Hard ceiling for any platform; per-platform limits live in api_config
MAX_POST_LENGTH = 3000


class PostStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PROCESSING = "processing"
    POSTED = "posted"
    FAILED = "failed"
    CANCELLED = "cancelled"


class GeneratedContentType(str, Enum):
    POST = "post"
    CAPTION = "caption"
    HASHTAGS = "hashtags"


class SocialPostCreate(BaseModel):
    platform_id: int = Field(..., ge=1)
    content: str = Field(..., min_length=1, max_length=MAX_POST_LENGTH)
    hash_tags: list[str] = Field(default_factory=list)
    media_urls: list[HttpUrl] = Field(default_factory=list)
    scheduled_time: datetime | None = Field(
        default=None,
        description="When set, the post is created as 'scheduled' instead of 'draft'"
    )


class SocialPostUpdate(BaseModel):
    content: str | None = Field(default=None, min_length=1, max_length=MAX_POST_LENGTH)
    hash_tags: list[str] | None = None
    media_urls: list[HttpUrl] | None = None
    scheduled_time: datetime | None = None
    status: PostStatus | None = Field(
        default=None,
        description="draft, scheduled, posted or cancelled"
    )


class GenerateSocialContentRequest(BaseModel):
    platform_id: int = Field(..., ge=1)
    prompt: str = Field(..., min_length=1, max_length=2000)
    content_type: GeneratedContentType = GeneratedContentType.POST
