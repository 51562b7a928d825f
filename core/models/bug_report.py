# =============================================================================
# core/models/bug_report.py - Bug Monitoring Schemas
# =============================================================================
# Bug reports are created automatically (from error log patterns or user
# feedback) and then triaged by admins from the bug monitoring dashboard.
#
# Status flow:
#   open -> in_progress -> resolved -> closed
#   open -> fix-attempted (an auto-fix was proposed for a non-critical bug)
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class BugSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BugStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    FIX_ATTEMPTED = "fix-attempted"


class BugSource(str, Enum):
    LOG_ANALYSIS = "automated-log-analysis"
    USER_FEEDBACK = "user-feedback"
    MANUAL = "manual"


class AnalysisTimeframe(str, Enum):
    """Window of error logs scanned by a log analysis run."""
    LAST_HOUR = "last_hour"
    LAST_DAY = "last_day"
    LAST_WEEK = "last_week"


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class BugReportUpdate(BaseModel):
    """
    Admin edits to a bug report.

    Only the fields that are sent are changed. Admins can only move a
    report between the manual states; `fix-attempted` is set by the monitor.
    """

    status: BugStatus | None = Field(
        default=None,
        description="New status (open, in_progress, resolved, closed)"
    )
    severity: BugSeverity | None = None
    affected_component: str | None = Field(default=None, max_length=200)
    suggested_fix: str | None = None
    resolved_at: datetime | None = None
    closed_at: datetime | None = None
    auto_fix_applied: bool | None = None

    model_config = {
        "json_schema_extra": {
            "example": {"status": "in_progress", "affected_component": "checkout"}
        }
    }
