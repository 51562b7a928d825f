# =============================================================================
# core/services/social_media_service.py - Social Media Business Logic
# =============================================================================
# Social posts are drafted here and published through Buffer. Each platform
# row carries its Buffer profile and character limit in api_config:
#   {"character_limit": 280, "buffer_profile_id": "5f1..."}
#
# Post status flow:
#   draft/scheduled -> processing|scheduled (sent to Buffer) -> posted
#   any unposted    -> cancelled
#   Buffer failure  -> failed (error_message set)
# Posted posts are never edited.
# =============================================================================

import logging
import math
from typing import Any

from agents.content_generator import generate_platform_content
from app.exceptions import InvalidRequestError, ResourceNotFoundError
from core.models.social import (
    GenerateSocialContentRequest,
    PostStatus,
    SocialPostCreate,
    SocialPostUpdate,
)
from lib.buffer_client import BufferClient, BufferClientError
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

PLATFORMS = "social_platforms"
POSTS = "social_posts"

# Buffer interaction keys per platform, mapped onto our metric names
_INTERACTION_KEYS: dict[str, dict[str, str]] = {
    "twitter": {"likes": "favorites", "shares": "retweets", "comments": "replies", "clicks": "clicks"},
    "linkedin": {"likes": "likes", "shares": "shares", "comments": "comments", "clicks": "clicks"},
    "facebook": {"likes": "likes", "shares": "shares", "comments": "comments", "clicks": "clicks"},
}


def map_interactions(
    platform_name: str,
    interactions: dict[str, Any],
    metrics: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Merge Buffer interaction counts into a post's metrics.

    Unknown platforms keep their existing metrics. engagement is
    (likes + shares + comments + clicks) / impressions when impressions > 0.
    """
    merged = dict(metrics or {})
    keys = _INTERACTION_KEYS.get(platform_name)

    if keys:
        for metric, source in keys.items():
            merged[metric] = interactions.get(source) or 0
        if platform_name == "twitter":
            merged["twitter"] = {
                "retweets": interactions.get("retweets") or 0,
                "quotes": interactions.get("quotes") or 0,
            }
        elif platform_name == "linkedin":
            merged["linkedin"] = {"reactions": interactions.get("likes") or 0}

    impressions = merged.get("impressions") or 0
    if impressions > 0:
        total = sum(merged.get(key) or 0 for key in ("likes", "shares", "comments", "clicks"))
        merged["engagement"] = total / impressions

    return merged


def character_limit(platform: dict[str, Any]) -> int | None:
    return (platform.get("api_config") or {}).get("character_limit")


class SocialMediaService:
    """Service for social platforms, posts and Buffer publishing."""

    # -------------------------------------------------------------------------
    # Platforms
    # -------------------------------------------------------------------------

    @staticmethod
    def list_platforms(active_only: bool = True) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows(
            PLATFORMS,
            filters={"is_active": True} if active_only else None,
            order_by="name",
            desc=False,
        )

    @staticmethod
    def get_platform(platform_id: int) -> dict[str, Any]:
        platform = SupabaseClient.fetch_by_id(PLATFORMS, platform_id)
        if platform is None:
            raise ResourceNotFoundError("Platform", platform_id)
        return platform

    # -------------------------------------------------------------------------
    # Posts
    # -------------------------------------------------------------------------

    @staticmethod
    def list_posts(
        platform_id: int | None = None,
        status: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        rows, total = SupabaseClient.fetch_rows_with_count(
            POSTS,
            filters={"platform_id": platform_id, "status": status},
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        total_pages = math.ceil(total / page_size) if total else 0
        return rows, {
            "page": page,
            "page_size": page_size,
            "total_items": total,
            "total_pages": total_pages,
            "has_more": page < total_pages,
        }

    @staticmethod
    def get_post(post_id: int) -> dict[str, Any]:
        post = SupabaseClient.fetch_by_id(POSTS, post_id)
        if post is None:
            raise ResourceNotFoundError("Post", post_id)
        return post

    @staticmethod
    def _check_length(content: str, platform: dict[str, Any]) -> None:
        limit = character_limit(platform)
        if limit and len(content) > limit:
            raise InvalidRequestError(
                f"Content exceeds the {limit} character limit for {platform.get('display_name') or platform.get('name')}",
                suggestion="Shorten the post",
                details={"length": len(content), "character_limit": limit},
            )

    @staticmethod
    def create_post(post: SocialPostCreate) -> dict[str, Any]:
        """
        Create a draft, or a scheduled post when scheduled_time is set.

        Raises:
            ResourceNotFoundError: If the platform doesn't exist
            InvalidRequestError: If the content exceeds the platform limit
        """
        platform = SocialMediaService.get_platform(post.platform_id)
        SocialMediaService._check_length(post.content, platform)

        data = post.model_dump(mode="json")
        data["status"] = (PostStatus.SCHEDULED if post.scheduled_time else PostStatus.DRAFT).value
        data["metrics"] = {}

        created = SupabaseClient.insert_row(POSTS, data)
        logger.info(f"Created {data['status']} post {created.get('id')} for {platform.get('name')}")
        return created

    @staticmethod
    def update_post(post_id: int, update: SocialPostUpdate) -> dict[str, Any]:
        """
        Edit an unposted post; posts already on Buffer are updated there too.

        Raises:
            InvalidRequestError: If the post was already posted
        """
        post = SocialMediaService.get_post(post_id)
        if post.get("status") == PostStatus.POSTED.value:
            raise InvalidRequestError(
                "Posted content cannot be edited",
                suggestion="Create a new post instead",
                details={"id": post_id},
            )

        data = update.model_dump(exclude_unset=True, mode="json")
        if not data:
            raise InvalidRequestError("No fields to update")
        if update.content is not None:
            SocialMediaService._check_length(update.content, SocialMediaService.get_platform(post["platform_id"]))

        merged = {**post, **data}
        if post.get("buffer_post_id") and ({"content", "media_urls", "scheduled_time"} & data.keys()):
            with BufferClient() as buffer:
                buffer.edit_update(
                    post["buffer_post_id"],
                    text=merged["content"],
                    media_urls=merged.get("media_urls"),
                    scheduled_at=merged.get("scheduled_time"),
                )
            if "status" not in data:
                data["status"] = (
                    PostStatus.SCHEDULED if merged.get("scheduled_time") else PostStatus.PROCESSING
                ).value

        data["updated_at"] = utc_now_iso()
        return SupabaseClient.update_row(POSTS, post_id, data) or merged

    @staticmethod
    def delete_post(post_id: int) -> dict[str, Any]:
        """Cancel a post, removing it from Buffer if it was sent there."""
        post = SocialMediaService.get_post(post_id)
        if post.get("status") == PostStatus.POSTED.value:
            raise InvalidRequestError("Posted content cannot be cancelled", details={"id": post_id})

        if post.get("buffer_post_id"):
            with BufferClient() as buffer:
                buffer.destroy_update(post["buffer_post_id"])

        updated = SupabaseClient.update_row(POSTS, post_id, {
            "status": PostStatus.CANCELLED.value,
            "updated_at": utc_now_iso(),
        })
        logger.info(f"Cancelled post {post_id}")
        return updated or post

    # -------------------------------------------------------------------------
    # Buffer
    # -------------------------------------------------------------------------

    @staticmethod
    def publish_post(post_id: int) -> dict[str, Any]:
        """
        Send a post to Buffer.

        On failure the post is marked `failed` with the error message and
        the error is re-raised.

        Raises:
            BufferClientError: If Buffer isn't configured or rejects the post
        """
        post = SocialMediaService.get_post(post_id)
        if post.get("status") == PostStatus.POSTED.value:
            raise InvalidRequestError("Post has already been published", details={"id": post_id})

        platform = SocialMediaService.get_platform(post["platform_id"])

        try:
            profile_id = (platform.get("api_config") or {}).get("buffer_profile_id")
            if not profile_id:
                raise BufferClientError(
                    message=f"No Buffer profile ID configured for platform {platform.get('name')}",
                    code="BUFFER_PROFILE_MISSING",
                    suggestion="Set api_config.buffer_profile_id on the platform",
                )
            with BufferClient() as buffer:
                result = buffer.create_update(
                    text=post["content"],
                    profile_ids=[profile_id],
                    media_urls=post.get("media_urls"),
                    scheduled_at=post.get("scheduled_time"),
                )
        except BufferClientError as e:
            SupabaseClient.update_row(POSTS, post_id, {
                "status": PostStatus.FAILED.value,
                "error_message": e.message,
                "updated_at": utc_now_iso(),
            })
            logger.error(f"Publishing post {post_id} to Buffer failed: {e}")
            raise

        status = PostStatus.SCHEDULED if post.get("scheduled_time") else PostStatus.PROCESSING
        updated = SupabaseClient.update_row(POSTS, post_id, {
            "buffer_post_id": result.get("update_id"),
            "status": status.value,
            "error_message": None,
            "updated_at": utc_now_iso(),
        })
        logger.info(f"Post {post_id} sent to Buffer as {result.get('update_id')} ({status.value})")
        return updated or post

    @staticmethod
    def get_post_status(post_id: int) -> dict[str, Any]:
        post = SocialMediaService.get_post(post_id)
        if not post.get("buffer_post_id"):
            raise InvalidRequestError("Post has not been sent to Buffer", details={"id": post_id})
        with BufferClient() as buffer:
            return buffer.get_update(post["buffer_post_id"])

    @staticmethod
    def sync_analytics(post_id: int) -> dict[str, Any]:
        """Pull interaction counts from Buffer into the post's metrics."""
        post = SocialMediaService.get_post(post_id)
        if not post.get("buffer_post_id"):
            raise InvalidRequestError("Post has not been sent to Buffer", details={"id": post_id})

        platform = SocialMediaService.get_platform(post["platform_id"])
        with BufferClient() as buffer:
            data = buffer.get_interactions(post["buffer_post_id"])
        metrics = map_interactions(
            platform.get("name") or "unknown",
            data.get("interactions") or {},
            post.get("metrics"),
        )

        updated = SupabaseClient.update_row(POSTS, post_id, {"metrics": metrics, "updated_at": utc_now_iso()})
        return updated or {**post, "metrics": metrics}

    @staticmethod
    def get_buffer_profiles() -> list[dict[str, Any]]:
        with BufferClient() as buffer:
            return buffer.get_profiles()

    # -------------------------------------------------------------------------
    # AI content
    # -------------------------------------------------------------------------

    @staticmethod
    def generate_content(request: GenerateSocialContentRequest) -> dict[str, Any]:
        platform = SocialMediaService.get_platform(request.platform_id)
        limit = character_limit(platform)

        content = generate_platform_content(
            request.content_type,
            platform.get("display_name") or platform.get("name"),
            request.prompt,
            limit,
        )
        return {
            "content": content,
            "platform": {
                "id": platform["id"],
                "name": platform.get("name"),
                "display_name": platform.get("display_name"),
                "character_limit": limit,
            },
        }
