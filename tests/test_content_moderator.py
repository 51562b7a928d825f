# =============================================================================
# tests/test_content_moderator.py - Content Moderation Tests
# =============================================================================
# This module contains tests for:
# - analyze_content verdict parsing and fail-open behaviour
# - record_violation (scan + alert rows)
# - moderate_text and the moderate_content request dependency
# =============================================================================

from unittest.mock import patch

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from agents.content_moderator import (
    analyze_content,
    moderate_content,
    moderate_text,
    record_violation,
)
from agents.models.moderation_result import ModerationResult
from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from app.exceptions import ContentPolicyViolationError, ElevionException, elevion_exception_handler
from lib.supabase_client import SupabaseClientError
from lib.xai_client import XAIClientError


BLOCKED = {"is_allowed": False, "score": 92, "category": "spam", "reason": "Repeated promotional links"}


# =============================================================================
# analyze_content
# =============================================================================

class TestAnalyzeContent:

    @patch("agents.content_moderator.XAIClient")
    def test_allowed(self, mock_xai):
        mock_xai.generate_json.return_value = {"is_allowed": True, "score": 3}

        result = analyze_content("A friendly product description")

        assert result.is_allowed is True
        assert result.score == 3

    @patch("agents.content_moderator.XAIClient")
    def test_blocked(self, mock_xai):
        mock_xai.generate_json.return_value = dict(BLOCKED)

        result = analyze_content("BUY NOW!!!", "social_post")

        assert result.is_allowed is False
        assert result.category == "spam"
        assert result.reason == "Repeated promotional links"

    @patch("agents.content_moderator.XAIClient")
    def test_score_clamped(self, mock_xai):
        mock_xai.generate_json.return_value = {"is_allowed": False, "score": 250}
        assert analyze_content("text").score == 100

    @patch("agents.content_moderator.XAIClient")
    def test_camel_case_key_accepted(self, mock_xai):
        mock_xai.generate_json.return_value = {"isAllowed": False, "score": 80}
        assert analyze_content("text").is_allowed is False

    @patch("agents.content_moderator.XAIClient")
    def test_fails_open_on_model_error(self, mock_xai):
        mock_xai.generate_json.side_effect = XAIClientError("timeout")

        result = analyze_content("anything")

        assert result == ModerationResult.allow()

    @patch("agents.content_moderator.XAIClient")
    def test_fails_open_on_garbage_score(self, mock_xai):
        mock_xai.generate_json.return_value = {"is_allowed": False, "score": "very high"}
        assert analyze_content("anything").is_allowed is True


# =============================================================================
# record_violation
# =============================================================================

class TestRecordViolation:

    @patch("agents.content_moderator.SupabaseClient")
    def test_creates_scan_then_alert(self, mock_db):
        mock_db.insert_row.side_effect = [{"id": 3}, {"id": 8, "status": "open"}]

        alert = record_violation(
            content_id="42",
            content_type="marketplace_item",
            content_title="Logo pack",
            category="spam",
            reason="Links",
            excerpt="x" * 800,
        )

        assert alert == {"id": 8, "status": "open"}
        (scan_table, scan), (alert_table, alert_row) = [c.args for c in mock_db.insert_row.call_args_list]
        assert scan_table == "content_compliance_scans"
        assert scan["passed_check"] is False
        assert scan["status"] == "completed"
        assert alert_table == "content_compliance_alerts"
        assert alert_row["scan_id"] == 3
        assert alert_row["status"] == "open"
        assert alert_row["category"] == "content_policy"
        assert alert_row["description"] == "Content moderation violation: spam"
        assert len(alert_row["excerpt"]) == 500

    @patch("agents.content_moderator.SupabaseClient")
    def test_storage_failure_returns_none(self, mock_db):
        mock_db.insert_row.side_effect = SupabaseClientError("down")

        assert record_violation("1", "social_post", "Post", "spam", "Links", "text") is None


# =============================================================================
# moderate_text
# =============================================================================

class TestModerateText:

    @patch("agents.content_moderator.record_violation")
    @patch("agents.content_moderator.analyze_content")
    def test_allowed_passes_through(self, mock_analyze, mock_record):
        mock_analyze.return_value = ModerationResult(is_allowed=True, score=1)

        assert moderate_text("hello").is_allowed is True
        mock_record.assert_not_called()

    @patch("agents.content_moderator.record_violation")
    @patch("agents.content_moderator.analyze_content")
    def test_blocked_is_recorded_and_raised(self, mock_analyze, mock_record):
        mock_analyze.return_value = ModerationResult(**BLOCKED)

        with pytest.raises(ContentPolicyViolationError) as exc_info:
            moderate_text("BUY NOW", "social_post", "Promo")

        error = exc_info.value
        assert error.status_code == 403
        assert error.reason == "Repeated promotional links"
        assert error.details == {"category": "spam"}

        kwargs = mock_record.call_args.kwargs
        assert kwargs["content_id"].startswith("temp-")
        assert kwargs["content_title"] == "Promo"


# =============================================================================
# moderate_content dependency
# =============================================================================

@pytest.fixture
def moderated_client():
    app = FastAPI()
    app.add_exception_handler(ElevionException, elevion_exception_handler)

    @app.post("/items", dependencies=[Depends(moderate_content("description", title_field="name"))])
    async def create_item():
        return {"created": True}

    app.dependency_overrides[get_current_user] = lambda: AuthUser(id="seller-1", email="seller@example.com")
    return TestClient(app)


class TestModerateContentDependency:

    @patch("agents.content_moderator.analyze_content")
    def test_clean_content_reaches_handler(self, mock_analyze, moderated_client):
        mock_analyze.return_value = ModerationResult(is_allowed=True)

        response = moderated_client.post("/items", json={"name": "Logo", "description": "Nice logos"})

        assert response.status_code == 200
        assert response.json() == {"created": True}
        mock_analyze.assert_called_once_with("Nice logos", "content")

    @patch("agents.content_moderator.record_violation")
    @patch("agents.content_moderator.analyze_content")
    def test_blocked_content_returns_403(self, mock_analyze, mock_record, moderated_client):
        mock_analyze.return_value = ModerationResult(**BLOCKED)

        response = moderated_client.post("/items", json={"name": "Logo", "description": "BUY NOW"})

        assert response.status_code == 403
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "CONTENT_POLICY_VIOLATION"
        assert body["reason"] == "Repeated promotional links"
        assert mock_record.call_args.kwargs["content_title"] == "Logo"

    @patch("agents.content_moderator.analyze_content")
    def test_missing_field_skips_check(self, mock_analyze, moderated_client):
        response = moderated_client.post("/items", json={"name": "Logo"})

        assert response.status_code == 200
        mock_analyze.assert_not_called()
