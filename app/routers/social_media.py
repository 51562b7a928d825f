# =============================================================================
# app/routers/social_media.py - Social Media API
# =============================================================================
# Drafting, scheduling and publishing posts through Buffer.
#
# Post lifecycle:
#   POST /posts                    -> draft | scheduled
#   POST /posts/{id}/publish       -> processing | scheduled (on Buffer)
#   POST /posts/{id}/sync-analytics pulls interaction counts back
#   DELETE /posts/{id}             -> cancelled
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Query

from agents.content_moderator import moderate_content
from app.dependencies import CurrentUser
from core.models.common import ApiResponse, ok
from core.models.social import (
    GenerateSocialContentRequest,
    PostStatus,
    SocialPostCreate,
    SocialPostUpdate,
)
from core.services.social_media_service import SocialMediaService

router = APIRouter(prefix="/api/social-media", tags=["Social Media"])
logger = logging.getLogger(__name__)

moderate_post = moderate_content("content", default_type="social_post")


# =============================================================================
# Platforms
# =============================================================================

@router.get("/platforms", response_model=ApiResponse)
def list_platforms():
    return ok(SocialMediaService.list_platforms())


@router.get("/platforms/{platform_id}", response_model=ApiResponse)
def get_platform(platform_id: int):
    return ok(SocialMediaService.get_platform(platform_id))


# =============================================================================
# Posts
# =============================================================================

@router.get("/posts")
def list_posts(
    user: CurrentUser,
    platform_id: int | None = Query(default=None, ge=1),
    status: PostStatus | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100),
):
    posts, pagination = SocialMediaService.list_posts(
        platform_id=platform_id,
        status=status.value if status else None,
        page=page,
        page_size=page_size,
    )
    return {"success": True, "message": "OK", "data": posts, "pagination": pagination}


@router.get("/posts/{post_id}", response_model=ApiResponse)
def get_post(post_id: int, user: CurrentUser):
    return ok(SocialMediaService.get_post(post_id))


@router.post(
    "/posts",
    response_model=ApiResponse,
    status_code=201,
    dependencies=[Depends(moderate_post)],
)
def create_post(post: SocialPostCreate, user: CurrentUser):
    """
    Create a post.

    - 404 if the platform doesn't exist
    - 400 if the content is over the platform's character limit
    - status is `scheduled` when scheduled_time is given, `draft` otherwise
    """
    return ok(SocialMediaService.create_post(post), "Post created")


@router.patch(
    "/posts/{post_id}",
    response_model=ApiResponse,
    dependencies=[Depends(moderate_post)],
)
def update_post(post_id: int, update: SocialPostUpdate, user: CurrentUser):
    """Edit a post that hasn't been posted yet."""
    return ok(SocialMediaService.update_post(post_id, update), "Post updated")


@router.delete("/posts/{post_id}", response_model=ApiResponse)
def delete_post(post_id: int, user: CurrentUser):
    return ok(SocialMediaService.delete_post(post_id), "Post cancelled")


@router.post("/posts/{post_id}/publish", response_model=ApiResponse)
def publish_post(post_id: int, user: CurrentUser):
    """Send the post to Buffer. Failures mark the post `failed`."""
    return ok(SocialMediaService.publish_post(post_id), "Post sent to Buffer")


@router.get("/posts/{post_id}/status", response_model=ApiResponse)
def post_status(post_id: int, user: CurrentUser):
    """The post as Buffer currently sees it."""
    return ok(SocialMediaService.get_post_status(post_id))


@router.post("/posts/{post_id}/sync-analytics", response_model=ApiResponse)
def sync_post_analytics(post_id: int, user: CurrentUser):
    return ok(SocialMediaService.sync_analytics(post_id), "Analytics synced")


# =============================================================================
# Buffer & AI
# =============================================================================

@router.get("/buffer/profiles", response_model=ApiResponse)
def buffer_profiles(user: CurrentUser):
    return ok(SocialMediaService.get_buffer_profiles())


@router.post("/generate-content", response_model=ApiResponse)
def generate_content(request: GenerateSocialContentRequest, user: CurrentUser):
    """Write a post, caption or hashtag list sized for the platform."""
    return ok(SocialMediaService.generate_content(request), "Content generated")
