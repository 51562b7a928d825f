# =============================================================================
# app/routers/feedback.py - User Feedback API
# =============================================================================
# Feedback left from the website widget. New feedback is picked up by the
# bug monitor, which triages it and files bug reports.
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import OptionalUser
from core.models.common import ApiResponse, ok
from core.models.contact import FeedbackCreate
from core.services.contact_service import ContactService

router = APIRouter(prefix="/api/feedback", tags=["Feedback"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ApiResponse, status_code=201)
@router.post("/", response_model=ApiResponse, status_code=201, include_in_schema=False)
def submit_feedback(feedback: FeedbackCreate, user: OptionalUser):
    """
    Submit feedback. Signing in is optional; when a token is sent the
    feedback is linked to the user.

    - **category**: e.g. "bug", "feature", "general"
    - **rating**: 1-5
    """
    created = ContactService.submit_feedback(feedback, user_id=user.id if user else None)
    return ok(created, "Thank you for your feedback!")
