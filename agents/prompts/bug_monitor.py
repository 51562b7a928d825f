# =============================================================================
# agents/prompts/bug_monitor.py - Bug Monitor Prompts
# =============================================================================
# Prompts for the three bug monitoring jobs:
# - log pattern triage (one call per recurring error pattern)
# - user feedback triage (one call per feedback item)
# - the daily bug summary report (free text, markdown)
# =============================================================================

from __future__ import annotations

import json
from typing import Any

# Max sample log entries shown to the model for one pattern
MAX_SAMPLE_LOGS = 5


LOG_ANALYSIS_SYSTEM_PROMPT = """
You are an expert software debugging AI. Your task is to analyze error logs and identify bugs.
Analyze the pattern and suggest a fix. Be precise in your diagnosis and recommendations.
For the can_auto_fix field, only return true if the fix is simple, isolated, and has no side effects.
If can_auto_fix is true, provide specific code in the auto_fix_code field that could be applied to fix the issue automatically.
""".strip()


FEEDBACK_ANALYSIS_SYSTEM_PROMPT = """
You are an AI specialized in analyzing user feedback for software products.
Your task is to determine if user feedback is reporting a bug or issue versus general feedback or feature requests.
If it appears to be a bug report, extract relevant details that would help developers fix the issue.
""".strip()


SUMMARY_REPORT_SYSTEM_PROMPT = """
You are an AI assistant specialized in creating concise engineering reports.
Summarize the bug information into a well-structured report for a development team.
Be professional, clear, and actionable in your summary. Use markdown.
""".strip()


def _format_log(log: dict[str, Any]) -> str:
    context = log.get("context")
    if isinstance(context, (dict, list)):
        context = json.dumps(context)
    return (
        f"ID: {log.get('id')}\n"
        f"Timestamp: {log.get('timestamp')}\n"
        f"Source: {log.get('source') or 'unknown'}\n"
        f"Message: {log.get('message')}\n"
        f"Context: {context or 'N/A'}"
    )


def build_log_analysis_prompt(pattern: str, logs: list[dict[str, Any]]) -> str:
    """
    Build the user prompt for one group of similar error logs.

    Args:
        pattern: The normalized message shared by every log in the group
        logs: The log rows (newest first)
    """
    samples = logs[:MAX_SAMPLE_LOGS]
    sample_text = "\n\n".join(_format_log(log) for log in samples)

    return f"""
I need you to analyze this group of {len(logs)} similar error logs to identify if they represent a bug.

Error pattern: {pattern}

Sample log entries ({len(samples)} out of {len(logs)}):
{sample_text}

Based on these logs, determine:
1. Is this a bug or expected behavior?
2. How severe is this issue (low, medium, high, critical)?
3. What's happening and what component is affected?
4. Can this be automatically fixed with a simple code change?
5. If auto-fixable, provide the exact code change needed

Return your analysis as a JSON object with the following structure:
{{
  "is_bug": boolean,
  "severity": "low" | "medium" | "high" | "critical",
  "description": "Clear description of the issue",
  "suggested_fix": "How to fix this issue",
  "affected_component": "The component or area affected",
  "can_auto_fix": boolean,
  "auto_fix_code": "Code that could be applied to fix the issue (only if can_auto_fix is true)"
}}
""".strip()


def build_feedback_analysis_prompt(feedback: dict[str, Any]) -> str:
    context = feedback.get("context")
    if isinstance(context, (dict, list)):
        context = json.dumps(context)

    return f"""
Please analyze this user feedback to determine if it's reporting a bug or issue:

User ID: {feedback.get('user_id') or 'Anonymous'}
Feedback Context: {context or 'General feedback'}
Category (user selected): {feedback.get('category') or 'none'}
Feedback Text: "{feedback.get('message')}"
Submitted: {feedback.get('created_at')}

Analyze this feedback and determine:
1. Is this reporting a bug or technical issue?
2. What is the sentiment of this feedback?
3. If it's a bug report, what priority should it have?
4. What category does this feedback fall into?
5. What specific issue is being described?
6. What action should be taken in response?

Return your analysis as a JSON object with this structure:
{{
  "is_bug_report": boolean,
  "sentiment": "negative" | "neutral" | "positive",
  "priority": "low" | "medium" | "high",
  "category": "string describing category",
  "description": "concise description of the issue",
  "suggested_action": "recommended action to take"
}}
""".strip()


def build_summary_report_prompt(bugs: list[dict[str, Any]]) -> str:
    bug_data = [
        {
            "title": bug.get("title"),
            "description": bug.get("description"),
            "severity": bug.get("severity"),
            "component": bug.get("affected_component"),
            "status": bug.get("status"),
            "suggested_fix": bug.get("suggested_fix"),
            "auto_fixable": bug.get("can_auto_fix"),
            "created_at": bug.get("created_at"),
        }
        for bug in bugs
    ]

    return f"""
Generate a comprehensive bug summary report based on these {len(bugs)} recently detected issues:

{json.dumps(bug_data, indent=2, default=str)}

Please include:
1. An executive summary of the bug situation
2. Categorization of bugs by severity and affected components
3. Key patterns or trends observed
4. The most critical bugs that need immediate attention
5. Bugs that were automatically fixed or could be fixed automatically
6. Recommendations for the development team

Format this as a professional report with clear sections and actionable insights.
""".strip()
