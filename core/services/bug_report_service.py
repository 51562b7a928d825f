# =============================================================================
# core/services/bug_report_service.py - Bug Report Business Logic
# =============================================================================
# Admin-side reads and edits of bug reports and the raw error logs behind
# them. Creating reports is the bug monitor's job (agents/bug_monitor.py).
# =============================================================================

import logging
from typing import Any

from app.exceptions import InvalidRequestError, ResourceNotFoundError
from core.models.bug_report import BugReportUpdate, BugStatus
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

# Query param value meaning "don't filter"
ALL = "all"


def _filter_value(value: str | None) -> str | None:
    return None if value in (None, "", ALL) else value


class BugReportService:
    """Service for bug report triage operations."""

    @staticmethod
    def list_reports(
        status: str | None = None,
        severity: str | None = None,
        source: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List bug reports, newest first.

        Any filter can be omitted or set to "all".
        """
        return SupabaseClient.fetch_rows(
            "bug_reports",
            filters={
                "status": _filter_value(status),
                "severity": _filter_value(severity),
                "source": _filter_value(source),
            },
        )

    @staticmethod
    def get_report(report_id: int) -> dict[str, Any]:
        report = SupabaseClient.fetch_by_id("bug_reports", report_id)
        if report is None:
            raise ResourceNotFoundError("Bug report", report_id)
        return report

    @staticmethod
    def list_logs(limit: int = 100, level: str | None = None) -> list[dict[str, Any]]:
        return SupabaseClient.fetch_rows(
            "logs",
            filters={"level": _filter_value(level)},
            order_by="timestamp",
            limit=limit,
        )

    @staticmethod
    def update_report(report_id: int, update: BugReportUpdate) -> dict[str, Any]:
        """
        Apply admin edits to a report.

        Moving to resolved/closed stamps resolved_at/closed_at unless the
        caller sent one.

        Raises:
            ResourceNotFoundError: If the report doesn't exist
            InvalidRequestError: If nothing would change or the status is
                reserved for the bug monitor
        """
        data = update.model_dump(exclude_unset=True, mode="json")
        if not data:
            raise InvalidRequestError(
                "No fields to update",
                suggestion="Send at least one of status, severity, affected_component, suggested_fix",
            )

        status = update.status
        if status == BugStatus.FIX_ATTEMPTED:
            raise InvalidRequestError(
                "Status 'fix-attempted' is set by the bug monitor",
                suggestion="Use open, in_progress, resolved or closed",
            )
        if status == BugStatus.RESOLVED and not data.get("resolved_at"):
            data["resolved_at"] = utc_now_iso()
        if status == BugStatus.CLOSED and not data.get("closed_at"):
            data["closed_at"] = utc_now_iso()

        data["updated_at"] = utc_now_iso()
        report = SupabaseClient.update_row("bug_reports", report_id, data)
        if report is None:
            raise ResourceNotFoundError("Bug report", report_id)

        logger.info(f"Updated bug report {report_id}: {sorted(data)}")
        return report

    @staticmethod
    def apply_fix(report_id: int) -> dict[str, Any]:
        """
        Mark an auto-fixable report's fix as applied and resolve it.

        Raises:
            ResourceNotFoundError: If the report doesn't exist
            InvalidRequestError: If the report has no auto-fix
        """
        report = BugReportService.get_report(report_id)
        if not report.get("can_auto_fix") or not report.get("auto_fix_code"):
            raise InvalidRequestError(
                "This bug cannot be automatically fixed",
                suggestion="Apply the suggested fix manually",
                details={"id": report_id},
            )

        now = utc_now_iso()
        updated = SupabaseClient.update_row("bug_reports", report_id, {
            "auto_fix_applied": True,
            "status": BugStatus.RESOLVED.value,
            "resolved_at": now,
            "updated_at": now,
        })
        logger.info(f"Auto-fix applied for bug report {report_id}")
        return updated or report
