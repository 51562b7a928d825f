# =============================================================================
# app/routers/contact.py - Contact Form API
# =============================================================================

from fastapi import APIRouter

from core.models.common import ApiResponse, ok
from core.models.contact import ContactSubmissionCreate
from core.services.contact_service import ContactService

router = APIRouter(prefix="/api/contact", tags=["Contact"])


@router.post("", response_model=ApiResponse, status_code=201)
@router.post("/", response_model=ApiResponse, status_code=201, include_in_schema=False)
def submit_contact(submission: ContactSubmissionCreate):
    """
    Store a contact form submission.

    A notification email goes out when SendGrid is configured; email
    failures are logged and don't affect the response.
    """
    created = ContactService.submit_contact(submission)
    return ok(created, "Thank you for your message! We'll be in touch soon.")
