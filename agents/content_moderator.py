# =============================================================================
# agents/content_moderator.py - AI Content Moderation
# =============================================================================
# Screens user-submitted text (marketplace listings, social posts) before it
# is stored. Blocked content is recorded as a compliance scan plus an open
# alert so admins can review it from the moderation dashboard.
#
# Moderation fails open: if the model can't be reached or answers with
# garbage, the content is allowed and the error is logged.
#
# Usage in a router:
#   @router.post("/", dependencies=[Depends(moderate_content("description", title_field="name"))])
#   async def create_item(...): ...
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import Depends, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from app.config import settings
from app.exceptions import ContentPolicyViolationError
from agents.models.moderation_result import ModerationResult
from agents.prompts.moderation import MODERATION_SYSTEM_PROMPT, build_moderation_prompt
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, utc_now, utc_now_iso
from lib.xai_client import XAIClient

logger = logging.getLogger(__name__)


EXCERPT_LENGTH = 500
DEFAULT_VIOLATION_CATEGORY = "policy_violation"
DEFAULT_BLOCK_REASON = "The submitted content violates our community guidelines"


def analyze_content(content: str, content_type: str = "content") -> ModerationResult:
    """
    Ask the model whether content may be published.

    Never raises; any failure allows the content.
    """
    try:
        data = XAIClient.generate_json(
            prompt=build_moderation_prompt(content, content_type),
            system_prompt=MODERATION_SYSTEM_PROMPT,
            model=settings.XAI_MODEL,
            temperature=0.1,
        )
        score = data.get("score")
        return ModerationResult(
            is_allowed=data.get("is_allowed", data.get("isAllowed", True)) is not False,
            score=max(0, min(100, int(score or 0))),
            category=data.get("category") or None,
            reason=data.get("reason") or None,
        )
    except (ApplicationError, ValidationError, TypeError, ValueError) as e:
        logger.error(f"Content moderation failed, allowing content: {e}")
        return ModerationResult.allow()


def record_violation(
    content_id: str,
    content_type: str,
    content_title: str,
    category: str,
    reason: str,
    excerpt: str,
) -> dict[str, Any] | None:
    """
    Store a failed scan and an open alert for admin review.

    Returns the alert row, or None if it couldn't be stored (logged).
    """
    now = utc_now_iso()
    try:
        scan = SupabaseClient.insert_row("content_compliance_scans", {
            "content_id": content_id,
            "content_type": content_type,
            "content_title": content_title,
            "scan_started_at": now,
            "scan_completed_at": now,
            "status": "completed",
            "passed_check": False,
            "score": 0,
            "issue_count": 1,
            "categories": "content_moderation",
        })
        alert = SupabaseClient.insert_row("content_compliance_alerts", {
            "scan_id": scan["id"],
            "content_id": content_id,
            "content_type": content_type,
            "content_title": content_title,
            "category": "content_policy",
            "severity": "violation",
            "description": f"Content moderation violation: {category}",
            "suggested_action": "Review and take appropriate action on flagged content",
            "excerpt": excerpt[:EXCERPT_LENGTH],
            "status": "open",
        })
    except SupabaseClientError as e:
        logger.error(f"Error recording content moderation violation: {e}")
        return None

    logger.info(f"Content moderation violation recorded: {category} in {content_type} {content_id} ({reason})")
    return alert


def moderate_text(
    content: str,
    content_type: str = "content",
    content_title: str = "Untitled Content",
    content_id: str | None = None,
) -> ModerationResult:
    """
    Moderate text and record a violation when it is blocked.

    Raises:
        ContentPolicyViolationError: If the content is blocked
    """
    result = analyze_content(content, content_type)
    if result.is_allowed:
        return result

    category = result.category or DEFAULT_VIOLATION_CATEGORY
    record_violation(
        content_id=content_id or f"temp-{int(utc_now().timestamp() * 1000)}",
        content_type=content_type,
        content_title=content_title,
        category=category,
        reason=result.reason or "Content violates platform policies",
        excerpt=content,
    )
    raise ContentPolicyViolationError(
        reason=result.reason or DEFAULT_BLOCK_REASON,
        category=category,
    )


def moderate_content(
    content_field: str,
    type_field: str = "type",
    title_field: str = "title",
    id_field: str = "id",
    default_type: str = "content",
) -> Callable:
    """
    Build a FastAPI dependency that moderates one field of the JSON body.

    The caller is authenticated first, so anonymous requests get a 401
    before any content reaches the model. Requests without the field (or
    without a JSON body) pass through.

    Args:
        content_field: Body field holding the text to check
        type_field: Body field naming the content type
        title_field: Body field with a human-readable title
        id_field: Body field with the content ID (a temp ID is made up otherwise)
        default_type: Content type used when the body has no type_field
    """

    async def dependency(
        request: Request,
        user: AuthUser = Depends(get_current_user),
    ) -> ModerationResult | None:
        try:
            body = await request.json()
        except ValueError:
            return None
        if not isinstance(body, dict):
            return None

        content = body.get(content_field)
        if not content or not isinstance(content, str):
            return None

        content_id = body.get(id_field)
        return await run_in_threadpool(
            moderate_text,
            content,
            str(body.get(type_field) or default_type),
            str(body.get(title_field) or "Untitled Content"),
            str(content_id) if content_id is not None else None,
        )

    return dependency
