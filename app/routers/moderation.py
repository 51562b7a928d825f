# =============================================================================
# app/routers/moderation.py - Content Moderation API
# =============================================================================
# Admin endpoints for reviewing content blocked by the moderation check.
# The check itself runs as a dependency on content-creating routes
# (see agents/content_moderator.py).
# =============================================================================

from fastapi import APIRouter, Query

from app.dependencies import AdminUser, PageDep
from core.models.common import ApiResponse, PaginatedResponse, ok
from core.models.moderation import AnalyzeContentRequest, ViolationUpdate
from core.services.moderation_service import ModerationService

router = APIRouter(prefix="/api/moderation", tags=["Moderation"])


@router.get("/violations", response_model=PaginatedResponse)
def list_violations(
    user: AdminUser,
    paging: PageDep,
    status: str = Query(default="all", description="open, resolved, false_positive, escalated or all"),
    type: str = Query(default="all", description="Content type, or all"),
    search: str | None = Query(default=None, description="Matches the content title"),
):
    violations, pagination = ModerationService.list_violations(
        status=status,
        content_type=type,
        page=paging.page,
        limit=paging.limit,
        search=search,
    )
    return PaginatedResponse(data=violations, pagination=pagination)


@router.get("/violations/{violation_id}", response_model=ApiResponse)
def get_violation(violation_id: int, user: AdminUser):
    """A violation together with the scan that produced it."""
    return ok(ModerationService.get_violation(violation_id))


@router.patch("/violations/{violation_id}", response_model=ApiResponse)
def update_violation(violation_id: int, update: ViolationUpdate, user: AdminUser):
    violation = ModerationService.update_violation(violation_id, update)
    return ok(violation, "Violation updated")


@router.post("/analyze", response_model=ApiResponse)
def analyze_content(request: AnalyzeContentRequest, user: AdminUser):
    """Run a manual moderation check. Blocked content is recorded as a violation."""
    result = ModerationService.analyze(request)
    message = "Content allowed" if result["is_allowed"] else "Content violates platform policies"
    return ok(result, message)


@router.get("/stats", response_model=ApiResponse)
def moderation_stats(user: AdminUser):
    return ok(ModerationService.get_stats())
