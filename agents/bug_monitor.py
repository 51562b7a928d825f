# =============================================================================
# agents/bug_monitor.py - AI Bug Monitor
# =============================================================================
# Scans the `logs` and `feedback` tables for problems and turns them into
# bug reports for the admin dashboard.
#
# The monitor's jobs:
# 1. analyze_error_logs: group recent error logs by normalized message and
#    ask the model whether each recurring pattern is a bug
# 2. analyze_user_feedback: ask the model whether new feedback reports a bug
# 3. generate_bug_summary_report: a markdown digest of the newest reports
#
# Each job runs from the admin API and on a Celery beat schedule
# (see workers/config.py).
#
# Usage:
#   from agents.bug_monitor import BugMonitorAgent
#   analyses = BugMonitorAgent().analyze_error_logs("last_day")
# =============================================================================

from __future__ import annotations

import logging
import re
from collections import defaultdict
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from app.config import settings
from agents.models.bug_analysis import FeedbackAnalysis, LogAnalysis
from agents.prompts.bug_monitor import (
    FEEDBACK_ANALYSIS_SYSTEM_PROMPT,
    LOG_ANALYSIS_SYSTEM_PROMPT,
    SUMMARY_REPORT_SYSTEM_PROMPT,
    build_feedback_analysis_prompt,
    build_log_analysis_prompt,
    build_summary_report_prompt,
)
from core.models.bug_report import AnalysisTimeframe, BugSeverity, BugSource, BugStatus
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, iso_ago, utc_now, utc_now_iso
from lib.xai_client import XAIClient

logger = logging.getLogger(__name__)


# Error logs pulled per analysis run
MAX_LOGS_PER_RUN = 50

# A pattern must repeat at least this often to be worth a model call
MIN_PATTERN_OCCURRENCES = 2

# Bug reports included in the summary report
SUMMARY_REPORT_SIZE = 20

NO_BUGS_REPORT = "No bugs detected in the monitored period."

TIMEFRAME_WINDOWS: dict[AnalysisTimeframe, timedelta] = {
    AnalysisTimeframe.LAST_HOUR: timedelta(hours=1),
    AnalysisTimeframe.LAST_DAY: timedelta(days=1),
    AnalysisTimeframe.LAST_WEEK: timedelta(weeks=1),
}


# =============================================================================
# Log Normalization
# =============================================================================

# Applied in order; later patterns must not re-match earlier placeholders
_NORMALIZATION_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b[0-9a-f]{8,}\b"), "[ID]"),
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}"), "[TIMESTAMP]"),
    (re.compile(r"\b\d+\b"), "[NUMBER]"),
    (re.compile(r"""(["'])(?:\\.|.)*?\1"""), "[STRING]"),
]


def normalize_log_message(message: str | None) -> str:
    """
    Reduce a log message to its pattern by masking variable parts.

    Example:
        >>> normalize_log_message('User 42 not found: "bob"')
        'User [NUMBER] not found: [STRING]'
    """
    pattern = message or ""
    for regex, placeholder in _NORMALIZATION_RULES:
        pattern = regex.sub(placeholder, pattern)
    return pattern


def group_logs_by_pattern(logs: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Group log rows by normalized message, keeping input order within each group."""
    groups: dict[str, list[dict[str, Any]]] = defaultdict(list)
    for log in logs:
        groups[normalize_log_message(log.get("message"))].append(log)
    return dict(groups)


# =============================================================================
# Bug Monitor Agent
# =============================================================================

class BugMonitorAgent:
    """
    Turns error logs and user feedback into bug reports.

    Attributes:
        model: Model for log analysis and the summary report
        fast_model: Model for feedback triage
    """

    def __init__(self, model: str | None = None, fast_model: str | None = None):
        self.model = model or settings.XAI_MODEL
        self.fast_model = fast_model or settings.XAI_FAST_MODEL

    # -------------------------------------------------------------------------
    # Error logs
    # -------------------------------------------------------------------------

    def analyze_error_logs(
        self,
        timeframe: AnalysisTimeframe | str = AnalysisTimeframe.LAST_HOUR,
    ) -> list[LogAnalysis]:
        """
        Analyze recurring error patterns in the given window.

        Returns every analysis the model produced (bugs and non-bugs). Groups
        that fail are logged and skipped; if the logs can't be read at all
        the result is empty.
        """
        timeframe = AnalysisTimeframe(timeframe)
        since = iso_ago(seconds=TIMEFRAME_WINDOWS[timeframe].total_seconds())

        try:
            logs = SupabaseClient.fetch_rows(
                "logs",
                filters={"level": "error"},
                order_by="timestamp",
                desc=True,
                limit=MAX_LOGS_PER_RUN,
                since=("timestamp", since),
            )
        except SupabaseClientError as e:
            logger.error(f"Could not fetch error logs for analysis: {e}")
            return []

        if not logs:
            logger.info(f"No error logs found in {timeframe.value}")
            return []

        groups = group_logs_by_pattern(logs)
        logger.info(f"Analyzing {len(logs)} error logs in {len(groups)} patterns ({timeframe.value})")

        analyses: list[LogAnalysis] = []
        for pattern, group in groups.items():
            if len(group) < MIN_PATTERN_OCCURRENCES:
                continue
            try:
                analysis = self._analyze_log_group(pattern, group)
            except (ApplicationError, ValidationError) as e:
                logger.warning(f"Skipping log pattern '{pattern[:80]}': {e}")
                continue

            if analysis.is_bug:
                self._store_log_bug(analysis)
                if analysis.can_auto_fix and analysis.severity != BugSeverity.CRITICAL:
                    self._mark_fix_attempted(analysis)

            analyses.append(analysis)

        return analyses

    def _analyze_log_group(self, pattern: str, logs: list[dict[str, Any]]) -> LogAnalysis:
        data = XAIClient.generate_json(
            prompt=build_log_analysis_prompt(pattern, logs),
            system_prompt=LOG_ANALYSIS_SYSTEM_PROMPT,
            model=self.model,
            temperature=0.2,
            max_tokens=1500,
        )
        analysis = LogAnalysis.model_validate(data)
        analysis.pattern = pattern
        analysis.occurrences = len(logs)
        analysis.log_ids = [log["id"] for log in logs if log.get("id") is not None]
        return analysis

    def _store_log_bug(self, analysis: LogAnalysis) -> None:
        try:
            row = SupabaseClient.insert_row("bug_reports", {
                "source": BugSource.LOG_ANALYSIS.value,
                "title": f"Auto-detected: {analysis.description[:100]}",
                "description": analysis.description,
                "severity": analysis.severity.value,
                "status": BugStatus.OPEN.value,
                "affected_component": analysis.affected_component,
                "suggested_fix": analysis.suggested_fix,
                "can_auto_fix": analysis.can_auto_fix,
                "auto_fix_code": analysis.auto_fix_code,
                "log_ids": analysis.log_ids,
            })
            analysis.bug_report_id = row.get("id")
        except SupabaseClientError as e:
            logger.error(f"Failed to store bug report for log pattern: {e}")

    def _mark_fix_attempted(self, analysis: LogAnalysis) -> None:
        """Flag matching open reports so admins see a fix is ready to review."""
        if not analysis.auto_fix_code:
            return
        try:
            updated = SupabaseClient.update_rows(
                "bug_reports",
                filters={"description": analysis.description, "status": BugStatus.OPEN.value},
                data={"status": BugStatus.FIX_ATTEMPTED.value, "fix_attempted_at": utc_now_iso()},
            )
            logger.info(f"Auto-fix proposed for {len(updated)} bug report(s)")
        except SupabaseClientError as e:
            logger.error(f"Failed to mark auto-fix attempt: {e}")

    # -------------------------------------------------------------------------
    # User feedback
    # -------------------------------------------------------------------------

    def analyze_user_feedback(self) -> list[FeedbackAnalysis]:
        """
        Triage every `new` feedback row.

        Returns only the analyses that identified a bug. Every feedback row
        that was analyzed is marked `reviewed`, bug or not.
        """
        try:
            feedback_rows = SupabaseClient.fetch_rows(
                "feedback",
                filters={"status": "new"},
                order_by="created_at",
                desc=True,
                limit=SUMMARY_REPORT_SIZE,
            )
        except SupabaseClientError as e:
            logger.error(f"Could not fetch feedback for analysis: {e}")
            return []

        bug_reports: list[FeedbackAnalysis] = []
        for feedback in feedback_rows:
            try:
                data = XAIClient.generate_json(
                    prompt=build_feedback_analysis_prompt(feedback),
                    system_prompt=FEEDBACK_ANALYSIS_SYSTEM_PROMPT,
                    model=self.fast_model,
                    temperature=0.3,
                    max_tokens=1000,
                )
                analysis = FeedbackAnalysis.model_validate(data)
            except (ApplicationError, ValidationError) as e:
                logger.warning(f"Skipping feedback {feedback.get('id')}: {e}")
                continue

            analysis.feedback_id = feedback.get("id")
            if analysis.is_bug_report:
                self._store_feedback_bug(analysis)
                bug_reports.append(analysis)

            try:
                SupabaseClient.update_row("feedback", feedback["id"], {"status": "reviewed"})
            except SupabaseClientError as e:
                logger.error(f"Failed to mark feedback {feedback.get('id')} reviewed: {e}")

        logger.info(f"Feedback analysis found {len(bug_reports)} bug(s) in {len(feedback_rows)} item(s)")
        return bug_reports

    def _store_feedback_bug(self, analysis: FeedbackAnalysis) -> None:
        try:
            row = SupabaseClient.insert_row("bug_reports", {
                "source": BugSource.USER_FEEDBACK.value,
                "title": f"User Reported: {analysis.description[:100]}",
                "description": analysis.description,
                "severity": analysis.priority.value,
                "status": BugStatus.OPEN.value,
                "affected_component": analysis.category,
                "suggested_fix": analysis.suggested_action,
                "can_auto_fix": False,
                "feedback_id": analysis.feedback_id,
            })
            analysis.bug_report_id = row.get("id")
        except SupabaseClientError as e:
            logger.error(f"Failed to store bug report for feedback {analysis.feedback_id}: {e}")

    # -------------------------------------------------------------------------
    # Summary report
    # -------------------------------------------------------------------------

    def generate_bug_summary_report(self) -> str:
        """
        Summarize the newest bug reports as markdown.

        The report is also written to REPORTS_DIR/bug-report-YYYY-MM-DD.md.
        Never raises; failures come back as an error text.
        """
        try:
            bugs = SupabaseClient.fetch_rows(
                "bug_reports",
                order_by="created_at",
                desc=True,
                limit=SUMMARY_REPORT_SIZE,
            )
            if not bugs:
                return NO_BUGS_REPORT

            report = XAIClient.generate_text(
                prompt=build_summary_report_prompt(bugs),
                system_prompt=SUMMARY_REPORT_SYSTEM_PROMPT,
                model=self.model,
                temperature=0.4,
                max_tokens=2500,
            )
        except ApplicationError as e:
            logger.error(f"Failed to generate bug summary report: {e}")
            return f"Error generating bug summary report: {e.message}"

        self._save_report(report)
        return report

    @staticmethod
    def _save_report(report: str) -> Path | None:
        path = Path(settings.REPORTS_DIR) / f"bug-report-{utc_now():%Y-%m-%d}.md"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(report, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not write bug report to {path}: {e}")
            return None
        logger.info(f"Bug summary report saved to {path}")
        return path
