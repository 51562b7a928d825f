# =============================================================================
# core/models/contact.py - Contact Form & Feedback Schemas
# =============================================================================

from enum import Enum

from pydantic import BaseModel, EmailStr, Field


class FeedbackStatus(str, Enum):
    NEW = "new"
    REVIEWED = "reviewed"
    ADDRESSED = "addressed"


class ContactSubmissionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    company: str | None = Field(default=None, max_length=200)
    message: str = Field(..., min_length=1, max_length=5000)


class FeedbackCreate(BaseModel):
    """Feedback left from the website widget; feeds the bug monitor."""

    message: str = Field(..., min_length=1, max_length=5000)
    source: str = Field(default="website", max_length=50)
    category: str | None = Field(default=None, max_length=50, examples=["bug"])
    rating: int | None = Field(default=None, ge=1, le=5)
    context: dict | None = Field(default=None, description="Page URL, browser, etc.")
