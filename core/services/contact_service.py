# =============================================================================
# core/services/contact_service.py - Contact Form & Feedback Logic
# =============================================================================
# Contact submissions are stored first and then announced by email; a
# failed email never fails the submission. Feedback rows start as `new`
# and are picked up by the bug monitor.
# =============================================================================

import logging
from typing import Any

from app.config import settings
from core.models.contact import ContactSubmissionCreate, FeedbackCreate, FeedbackStatus
from lib.email_client import is_email_configured, send_email
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


def _notification_text(submission: ContactSubmissionCreate) -> str:
    return (
        "New contact form submission\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n"
        f"Company: {submission.company or 'N/A'}\n\n"
        f"Message:\n{submission.message}\n"
    )


class ContactService:

    @staticmethod
    def submit_contact(submission: ContactSubmissionCreate) -> dict[str, Any]:
        """Store a contact submission and notify the team by email."""
        row = SupabaseClient.insert_row("contact_submissions", submission.model_dump(mode="json"))
        logger.info(f"Contact submission {row.get('id')} from {submission.email}")

        if is_email_configured():
            sent = send_email(
                to=settings.CONTACT_NOTIFY_EMAIL or settings.EMAIL_FROM,
                subject=f"New contact form submission from {submission.name}",
                text=_notification_text(submission),
                reply_to=str(submission.email),
            )
            if not sent:
                logger.warning(f"Contact notification email failed for submission {row.get('id')}")

        return row

    @staticmethod
    def submit_feedback(feedback: FeedbackCreate, user_id: str | None = None) -> dict[str, Any]:
        data = feedback.model_dump(mode="json")
        data["user_id"] = user_id
        data["status"] = FeedbackStatus.NEW.value

        row = SupabaseClient.insert_row("feedback", data)
        logger.info(f"Feedback {row.get('id')} received ({feedback.category or 'uncategorized'})")
        return row
