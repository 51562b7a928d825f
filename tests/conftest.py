# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides common fixtures (sample rows, an authenticated TestClient)
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("XAI_API_KEY", "test-xai-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOG_TO_DATABASE", "false")
os.environ.setdefault("STRIPE_SECRET_KEY", "")
os.environ.setdefault("BUFFER_API_KEY", "")
os.environ.setdefault("SENDGRID_API_KEY", "")

import pytest

from app.auth.models import AuthUser


# =============================================================================
# Users
# =============================================================================

USER_ID = "11111111-1111-4111-8111-111111111111"
ADMIN_ID = "22222222-2222-4222-8222-222222222222"


@pytest.fixture
def user():
    return AuthUser(id=USER_ID, email="user@example.com", role="user")


@pytest.fixture
def admin():
    return AuthUser(id=ADMIN_ID, email="admin@elevion.dev", role="admin")


# =============================================================================
# API Client
# =============================================================================

@pytest.fixture
def client_as():
    """
    Build a TestClient authenticated as the given user (or anonymous).

    Usage:
        def test_x(client_as, admin):
            client = client_as(admin)
    """
    from fastapi.testclient import TestClient

    from app.auth.dependencies import get_current_user, get_current_user_optional
    from app.main import app

    def _build(auth_user: AuthUser | None = None) -> TestClient:
        app.dependency_overrides.clear()
        if auth_user is not None:
            app.dependency_overrides[get_current_user] = lambda: auth_user
            app.dependency_overrides[get_current_user_optional] = lambda: auth_user
        return TestClient(app, raise_server_exceptions=False)

    yield _build
    app.dependency_overrides.clear()


# =============================================================================
# Sample Rows
# =============================================================================

@pytest.fixture
def sample_error_logs():
    """Error logs as stored in the `logs` table: two share a pattern."""
    return [
        {
            "id": 1,
            "timestamp": "2024-03-01T10:00:00",
            "level": "error",
            "message": "Payment 4521 failed for order 'abc' at 2024-03-01T10:00:00",
            "source": "api",
        },
        {
            "id": 2,
            "timestamp": "2024-03-01T10:05:00",
            "level": "error",
            "message": "Payment 9981 failed for order 'xyz' at 2024-03-01T10:05:00",
            "source": "api",
        },
        {
            "id": 3,
            "timestamp": "2024-03-01T10:07:00",
            "level": "error",
            "message": "Unexpected token in template",
            "source": "api",
        },
    ]


@pytest.fixture
def sample_plan():
    return {
        "id": 1,
        "name": "Pro",
        "description": "For growing businesses",
        "price": 49.99,
        "interval": "month",
        "features": ["Unlimited pages", "Priority support"],
        "is_active": True,
        "stripe_price_id": None,
    }


@pytest.fixture
def sample_platform():
    return {
        "id": 1,
        "name": "twitter",
        "display_name": "Twitter",
        "is_active": True,
        "api_config": {"character_limit": 280, "buffer_profile_id": "buffer-profile-1"},
    }
