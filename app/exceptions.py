# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure is rendered with the same envelope the frontend expects:
#   {"success": false, "message": "...", "code": "...", ...}
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.utils import ApplicationError


class ElevionException(Exception):
    """
    Base exception for the Elevion API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "ELEVION_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Generic Request Exceptions
# =============================================================================

class ResourceNotFoundError(ElevionException):
    """Raised when a row looked up by ID doesn't exist."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            message=f"{resource} not found",
            code=f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} ID is correct",
            details={"id": str(resource_id)}
        )


class InvalidRequestError(ElevionException):
    """Raised when a request is well-formed but not allowed in the current state."""

    def __init__(self, message: str, suggestion: str | None = None, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="INVALID_REQUEST",
            status_code=400,
            suggestion=suggestion,
            details=details,
        )


class PermissionDeniedError(ElevionException):
    """Raised when the caller is authenticated but may not perform the action."""

    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(
            message=message,
            code="PERMISSION_DENIED",
            status_code=403,
        )


# =============================================================================
# Domain Exceptions
# =============================================================================

class ContentPolicyViolationError(ElevionException):
    """Raised when moderation blocks user-submitted content."""

    def __init__(self, reason: str, category: str | None = None):
        super().__init__(
            message="Content violates platform policies and cannot be published",
            code="CONTENT_POLICY_VIOLATION",
            status_code=403,
            suggestion="Revise the content and submit it again",
            details={"category": category} if category else None,
        )
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["reason"] = self.reason
        return result


class RecommendationNotApprovedError(ElevionException):
    """Raised when applying a price recommendation that hasn't been approved."""

    def __init__(self, recommendation_id: int, status: str):
        super().__init__(
            message="Recommendation must be approved before it can be applied",
            code="RECOMMENDATION_NOT_APPROVED",
            status_code=400,
            suggestion="Approve it first with PATCH /recommendations/{id}/status",
            details={"recommendation_id": recommendation_id, "status": status}
        )


class AlreadySubscribedError(ElevionException):
    """Raised when a user with an active subscription subscribes again."""

    def __init__(self, subscription_id: int):
        super().__init__(
            message="User already has an active subscription",
            code="ALREADY_SUBSCRIBED",
            status_code=400,
            suggestion="Cancel the current subscription before choosing a new plan",
            details={"subscription_id": subscription_id}
        )


class ContentGenerationError(ElevionException):
    """
    Raised when the AI content generator fails.

    Carries a locally built fallback so the frontend still has something
    to show.
    """

    def __init__(self, message: str, error: str, fallback: Any):
        super().__init__(
            message=message,
            code="CONTENT_GENERATION_FAILED",
            status_code=500,
            suggestion="Try again in a moment or edit the fallback content",
        )
        self.error = error
        self.fallback = fallback

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["error"] = self.error
        result["fallback"] = self.fallback
        return result


# =============================================================================
# Exception Handlers
# =============================================================================

async def elevion_exception_handler(
    request: Request,
    exc: ElevionException
) -> JSONResponse:
    """
    Convert ElevionException to JSON response.

    Returns structured error with:
    - success: always false
    - message: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def application_error_handler(
    request: Request,
    exc: ApplicationError
) -> JSONResponse:
    """
    Render errors raised by lib/ clients (Supabase, xAI, Buffer, Stripe).

    Missing integration credentials become 503, everything else uses the
    client's own status code.
    """
    status_code = 503 if exc.code.endswith("_NOT_CONFIGURED") else exc.status_code
    content = {
        "success": False,
        "message": exc.message,
        "code": exc.code,
    }
    if exc.suggestion:
        content["suggestion"] = exc.suggestion
    return JSONResponse(status_code=status_code, content=content)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap FastAPI/Starlette HTTP errors (401s from auth, 404 routes) in the envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": str(exc.detail),
            "code": "HTTP_ERROR",
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", []) if part != "body"),
            "message": error.get("msg"),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
