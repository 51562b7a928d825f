# =============================================================================
# app/routers/bug_monitoring.py - Bug Monitoring API
# =============================================================================
# Admin endpoints behind the bug monitoring dashboard:
# - browse and triage bug reports
# - browse raw error logs
# - trigger log / feedback analysis and the summary report on demand
#   (they also run on the Celery beat schedule)
# =============================================================================

import logging

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from agents.bug_monitor import BugMonitorAgent
from app.dependencies import AdminUser
from core.models.bug_report import AnalysisTimeframe, BugReportUpdate, LogLevel
from core.models.common import ApiResponse, ok
from core.services.bug_report_service import BugReportService

router = APIRouter(prefix="/api/bug-monitoring", tags=["Bug Monitoring"])
logger = logging.getLogger(__name__)


@router.get("/reports", response_model=ApiResponse)
def list_bug_reports(
    user: AdminUser,
    status: str | None = Query(default=None, description="Report status, or 'all'"),
    severity: str | None = Query(default=None),
    source: str | None = Query(default=None),
):
    """List bug reports, newest first."""
    reports = BugReportService.list_reports(status=status, severity=severity, source=source)
    return ok(reports, f"Found {len(reports)} bug reports")


@router.get("/reports/{report_id}", response_model=ApiResponse)
def get_bug_report(report_id: int, user: AdminUser):
    return ok(BugReportService.get_report(report_id))


@router.patch("/reports/{report_id}", response_model=ApiResponse)
def update_bug_report(report_id: int, update: BugReportUpdate, user: AdminUser):
    """
    Update a bug report.

    - **status**: open, in_progress, resolved or closed
    - moving to resolved/closed stamps resolved_at/closed_at automatically
    """
    report = BugReportService.update_report(report_id, update)
    return ok(report, "Bug report updated")


@router.post("/reports/{report_id}/apply-fix", response_model=ApiResponse)
def apply_auto_fix(report_id: int, user: AdminUser):
    """Mark an auto-fixable report's fix as applied and resolve the report."""
    report = BugReportService.apply_fix(report_id)
    logger.info(f"Admin {user.id} applied auto-fix for bug report {report_id}")
    return ok(report, "Auto-fix applied")


@router.get("/logs", response_model=ApiResponse)
def list_logs(
    user: AdminUser,
    limit: int = Query(default=100, ge=1, le=1000),
    level: LogLevel | None = Query(default=None),
):
    logs = BugReportService.list_logs(limit=limit, level=level.value if level else None)
    return ok(logs, f"Found {len(logs)} log entries")


@router.post("/analyze-logs", response_model=ApiResponse)
def analyze_logs(
    user: AdminUser,
    timeframe: AnalysisTimeframe = Query(default=AnalysisTimeframe.LAST_HOUR),
):
    """Analyze recurring error patterns in the given window."""
    analyses = BugMonitorAgent().analyze_error_logs(timeframe)
    bugs = sum(1 for analysis in analyses if analysis.is_bug)
    return ok(
        [analysis.model_dump(mode="json") for analysis in analyses],
        f"Analyzed {len(analyses)} error patterns, {bugs} identified as bugs",
    )


@router.post("/analyze-feedback", response_model=ApiResponse)
def analyze_feedback(user: AdminUser):
    """Triage new user feedback; returns the items identified as bugs."""
    analyses = BugMonitorAgent().analyze_user_feedback()
    return ok(
        [analysis.model_dump(mode="json") for analysis in analyses],
        f"Found {len(analyses)} bug reports in user feedback",
    )


@router.get("/summary-report", response_model=ApiResponse)
def summary_report(user: AdminUser):
    report = BugMonitorAgent().generate_bug_summary_report()
    return ok({"report": report}, "Bug summary report generated")


@router.get("/summary-report.md", response_class=PlainTextResponse)
def summary_report_markdown(user: AdminUser):
    """The same report as raw markdown, for download."""
    return BugMonitorAgent().generate_bug_summary_report()
