# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes are for getting user info after authentication.
# =============================================================================

import logging

from fastapi import APIRouter

from app.auth.models import UserResponse
from app.dependencies import CurrentUser
from core.models.common import ApiResponse, ok
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=ApiResponse)
def get_current_user_info(user: CurrentUser):
    """
    Get the current authenticated user's profile.

    The role always comes from the token, not from the users table.

    Raises:
        401: If not authenticated
    """
    try:
        profile = SupabaseClient.fetch_by_id("users", user.id)
    except SupabaseClientError as e:
        logger.warning(f"Could not fetch user profile: {e}")
        profile = None

    if profile:
        response = UserResponse(**{**profile, "id": user.id, "role": user.role})
    else:
        # User exists in auth but not yet in public.users
        response = UserResponse(id=user.id, email=user.email, role=user.role)

    return ok(response.model_dump(mode="json"))


@router.get("/verify", response_model=ApiResponse)
def verify_token(user: CurrentUser):
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return ok({
        "valid": True,
        "user_id": user.id,
        "email": user.email,
        "role": user.role,
    })
