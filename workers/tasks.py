# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Periodic AI scans, scheduled in workers/config.py:
# - analyze_error_logs: Find recurring error patterns and file bug reports
# - analyze_user_feedback: Triage new user feedback
# - generate_bug_summary_report: Daily markdown digest of bug reports
# - run_price_analysis: Weekly price recommendations for every active plan
#
# The same operations can be triggered on demand from the admin API.
# =============================================================================

import logging
from typing import Any

from celery import shared_task

logger = logging.getLogger(__name__)


# =============================================================================
# Bug Monitoring
# =============================================================================

@shared_task(bind=True, name="workers.tasks.analyze_error_logs")
def analyze_error_logs(self, timeframe: str = "last_hour") -> dict[str, Any]:
    """
    Scan recent error logs for recurring patterns.

    Returns:
        Dict with pattern and bug counts
    """
    from agents.bug_monitor import BugMonitorAgent

    analyses = BugMonitorAgent().analyze_error_logs(timeframe)
    bugs = [analysis for analysis in analyses if analysis.is_bug]

    logger.info(f"Log analysis ({timeframe}): {len(analyses)} patterns, {len(bugs)} bugs")
    return {
        "success": True,
        "timeframe": timeframe,
        "patterns_analyzed": len(analyses),
        "bugs_found": len(bugs),
        "bug_report_ids": [bug.bug_report_id for bug in bugs if bug.bug_report_id],
    }


@shared_task(bind=True, name="workers.tasks.analyze_user_feedback")
def analyze_user_feedback(self) -> dict[str, Any]:
    from agents.bug_monitor import BugMonitorAgent

    reports = BugMonitorAgent().analyze_user_feedback()
    logger.info(f"Feedback analysis found {len(reports)} bug reports")
    return {
        "success": True,
        "bugs_found": len(reports),
        "bug_report_ids": [report.bug_report_id for report in reports if report.bug_report_id],
    }


@shared_task(bind=True, name="workers.tasks.generate_bug_summary_report")
def generate_bug_summary_report(self) -> dict[str, Any]:
    """Write the markdown digest to REPORTS_DIR and return it."""
    from agents.bug_monitor import BugMonitorAgent

    report = BugMonitorAgent().generate_bug_summary_report()
    return {"success": True, "report": report}


# =============================================================================
# Price Optimization
# =============================================================================

@shared_task(bind=True, name="workers.tasks.run_price_analysis")
def run_price_analysis(self) -> dict[str, Any]:
    """
    Generate pending price recommendations for every active plan
    without a recent one. Admins still review and apply them.
    """
    from agents.price_optimizer import PriceOptimizerAgent

    recommendations = PriceOptimizerAgent().schedule_automatic_price_analysis()
    logger.info(f"Price analysis generated {len(recommendations)} recommendations")
    return {
        "success": True,
        "recommendations_generated": len(recommendations),
        "recommendation_ids": [rec.get("id") for rec in recommendations],
    }
