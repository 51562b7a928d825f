# =============================================================================
# lib/email_client.py - Transactional Email (SendGrid)
# =============================================================================
# Sends notification emails through SendGrid. Email is best-effort: callers
# get a bool back and a failed send never fails the request that caused it.
# When SENDGRID_API_KEY is not set, emails are logged and skipped.
# =============================================================================

import logging

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Email, Mail, ReplyTo

from app.config import settings

logger = logging.getLogger(__name__)


def is_email_configured() -> bool:
    return settings.email_enabled


def send_email(
    to: str,
    subject: str,
    text: str | None = None,
    html: str | None = None,
    reply_to: str | None = None,
) -> bool:
    """
    Send a single email.

    Args:
        to: Recipient address
        subject: Subject line
        text: Plain-text body
        html: HTML body (optional)
        reply_to: Reply-To address (optional)

    Returns:
        True if SendGrid accepted the message, False otherwise
    """
    if not is_email_configured():
        logger.warning(f"SENDGRID_API_KEY not set, skipping email to {to}: {subject}")
        return False

    message = Mail(
        from_email=Email(settings.EMAIL_FROM, settings.EMAIL_FROM_NAME),
        to_emails=to,
        subject=subject,
        plain_text_content=text,
        html_content=html,
    )
    if reply_to:
        message.reply_to = ReplyTo(reply_to)

    try:
        response = SendGridAPIClient(settings.SENDGRID_API_KEY).send(message)
    except Exception as e:
        logger.error(f"Failed to send email to {to}: {e}")
        return False

    logger.info(f"Email sent to {to} (status {response.status_code})")
    return 200 <= response.status_code < 300
