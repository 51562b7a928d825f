# =============================================================================
# core/services/moderation_service.py - Moderation Dashboard Logic
# =============================================================================
# Admin review of the alerts recorded by agents/content_moderator.py.
# =============================================================================

import logging
from typing import Any

import pandas as pd

from agents.content_moderator import analyze_content, record_violation
from app.exceptions import ResourceNotFoundError
from core.models.common import Pagination
from core.models.moderation import AnalyzeContentRequest, ViolationUpdate
from lib.supabase_client import SupabaseClient
from lib.utils import iso_ago, utc_now, utc_now_iso

logger = logging.getLogger(__name__)

ALERTS = "content_compliance_alerts"
SCANS = "content_compliance_scans"
RECENT_VIOLATIONS = 5


def _breakdown(df: pd.DataFrame, column: str) -> dict[str, int]:
    if df.empty:
        return {}
    counts = df[column].fillna("unknown").value_counts()
    return {str(key): int(value) for key, value in counts.items()}


class ModerationService:
    """Service for the content moderation dashboard."""

    @staticmethod
    def list_violations(
        status: str | None = None,
        content_type: str | None = None,
        page: int = 1,
        limit: int = 20,
        search: str | None = None,
    ) -> tuple[list[dict[str, Any]], Pagination]:
        """
        One page of violations, newest first.

        status/content_type of "all" mean no filter; search matches the
        content title. The total counts every row matching the filters.
        """
        filters = {
            "status": status if status and status != "all" else None,
            "content_type": content_type if content_type and content_type != "all" else None,
        }
        rows, total = SupabaseClient.fetch_rows_with_count(
            ALERTS,
            filters=filters,
            limit=limit,
            offset=(page - 1) * limit,
            search=("content_title", search) if search else None,
        )
        return rows, Pagination.build(page=page, limit=limit, total=total)

    @staticmethod
    def get_violation(violation_id: int) -> dict[str, Any]:
        """A violation with its scan record under `scan`."""
        violation = SupabaseClient.fetch_by_id(ALERTS, violation_id)
        if violation is None:
            raise ResourceNotFoundError("Violation", violation_id)

        scan = SupabaseClient.fetch_by_id(SCANS, violation["scan_id"]) if violation.get("scan_id") else None
        return {"violation": violation, "scan": scan}

    @staticmethod
    def update_violation(violation_id: int, update: ViolationUpdate) -> dict[str, Any]:
        data: dict[str, Any] = {"status": update.status.value, "updated_at": utc_now_iso()}
        if update.admin_notes:
            data["admin_notes"] = update.admin_notes

        violation = SupabaseClient.update_row(ALERTS, violation_id, data)
        if violation is None:
            raise ResourceNotFoundError("Violation", violation_id)

        logger.info(f"Violation {violation_id} marked {update.status.value}")
        return violation

    @staticmethod
    def analyze(request: AnalyzeContentRequest) -> dict[str, Any]:
        """
        Manual moderation check. Blocked content is recorded like any other
        violation, but the verdict is returned instead of raised.
        """
        result = analyze_content(request.content, request.content_type)

        if not result.is_allowed:
            record_violation(
                content_id=request.content_id or f"manual-{int(utc_now().timestamp() * 1000)}",
                content_type=request.content_type,
                content_title=request.title or "Manual Analysis",
                category=result.category or "policy_violation",
                reason=result.reason or "Content violates platform policies",
                excerpt=request.content,
            )

        return result.model_dump()

    @staticmethod
    def get_stats() -> dict[str, Any]:
        """Totals, breakdowns and the most recent violations of the last week."""
        alerts = pd.DataFrame(
            SupabaseClient.fetch_rows(ALERTS, columns="id,status,content_type,category", order_by=None),
            columns=["id", "status", "content_type", "category"],
        )
        recent = SupabaseClient.fetch_rows(
            ALERTS,
            since=("created_at", iso_ago(days=7)),
            limit=RECENT_VIOLATIONS,
        )

        return {
            "total_violations": len(alerts),
            "total_scans": SupabaseClient.count_rows(SCANS),
            "status_breakdown": _breakdown(alerts, "status"),
            "content_type_breakdown": _breakdown(alerts, "content_type"),
            "category_breakdown": _breakdown(alerts, "category"),
            "recent_violations": recent,
        }
