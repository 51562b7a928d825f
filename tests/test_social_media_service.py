# =============================================================================
# tests/test_social_media_service.py - Social Media Service Tests
# =============================================================================
# SupabaseClient and BufferClient are mocked at the service module.
# =============================================================================

from unittest.mock import patch

import pytest

from app.exceptions import InvalidRequestError, ResourceNotFoundError
from core.models.social import SocialPostCreate, SocialPostUpdate
from core.services.social_media_service import SocialMediaService, map_interactions
from lib.buffer_client import BufferClientError


SERVICE = "core.services.social_media_service"


def make_post(**overrides):
    post = {
        "id": 10,
        "platform_id": 1,
        "content": "Launch day!",
        "media_urls": [],
        "scheduled_time": None,
        "status": "draft",
        "buffer_post_id": None,
        "metrics": {},
    }
    post.update(overrides)
    return post


def entered(mock_buffer):
    """The BufferClient instance bound by `with BufferClient() as buffer`."""
    return mock_buffer.return_value.__enter__.return_value


def fetch_by_table(platform, post):
    """fetch_by_id side effect returning the platform or post row."""
    return lambda table, row_id: platform if table == "social_platforms" else post


# =============================================================================
# map_interactions
# =============================================================================

class TestMapInteractions:

    def test_twitter(self):
        metrics = map_interactions(
            "twitter",
            {"favorites": 10, "retweets": 4, "replies": 2, "clicks": 4, "quotes": 1},
            {"impressions": 100},
        )

        assert metrics["likes"] == 10
        assert metrics["shares"] == 4
        assert metrics["comments"] == 2
        assert metrics["twitter"] == {"retweets": 4, "quotes": 1}
        assert metrics["engagement"] == pytest.approx(0.2)

    def test_linkedin_reactions(self):
        metrics = map_interactions("linkedin", {"likes": 7, "comments": 1})

        assert metrics["linkedin"] == {"reactions": 7}
        assert metrics["shares"] == 0
        assert "engagement" not in metrics

    def test_unknown_platform_keeps_metrics(self):
        assert map_interactions("myspace", {"likes": 3}, {"views": 9}) == {"views": 9}


# =============================================================================
# Posts
# =============================================================================

class TestPosts:

    @patch(f"{SERVICE}.SupabaseClient")
    def test_create_draft(self, mock_db, sample_platform):
        mock_db.fetch_by_id.return_value = sample_platform
        mock_db.insert_row.side_effect = lambda table, row: {"id": 10, **row}

        created = SocialMediaService.create_post(SocialPostCreate(platform_id=1, content="Hello"))

        assert created["status"] == "draft"
        assert created["metrics"] == {}
        assert mock_db.insert_row.call_args.args[0] == "social_posts"

    @patch(f"{SERVICE}.SupabaseClient")
    def test_create_scheduled(self, mock_db, sample_platform):
        mock_db.fetch_by_id.return_value = sample_platform
        mock_db.insert_row.side_effect = lambda table, row: {"id": 10, **row}

        created = SocialMediaService.create_post(
            SocialPostCreate(platform_id=1, content="Hello", scheduled_time="2026-12-01T09:00:00Z")
        )

        assert created["status"] == "scheduled"
        assert isinstance(created["scheduled_time"], str)

    @patch(f"{SERVICE}.SupabaseClient")
    def test_create_over_character_limit(self, mock_db, sample_platform):
        mock_db.fetch_by_id.return_value = sample_platform

        with pytest.raises(InvalidRequestError) as exc_info:
            SocialMediaService.create_post(SocialPostCreate(platform_id=1, content="x" * 281))

        assert exc_info.value.status_code == 400
        assert exc_info.value.details["character_limit"] == 280
        mock_db.insert_row.assert_not_called()

    @patch(f"{SERVICE}.SupabaseClient")
    def test_create_unknown_platform(self, mock_db):
        mock_db.fetch_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            SocialMediaService.create_post(SocialPostCreate(platform_id=99, content="Hello"))

    @patch(f"{SERVICE}.SupabaseClient")
    def test_posted_cannot_be_edited(self, mock_db):
        mock_db.fetch_by_id.return_value = make_post(status="posted")

        with pytest.raises(InvalidRequestError):
            SocialMediaService.update_post(10, SocialPostUpdate(content="Changed"))

        mock_db.update_row.assert_not_called()

    @patch(f"{SERVICE}.SupabaseClient")
    def test_empty_update_rejected(self, mock_db):
        mock_db.fetch_by_id.return_value = make_post()

        with pytest.raises(InvalidRequestError):
            SocialMediaService.update_post(10, SocialPostUpdate())

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_update_pushes_to_buffer(self, mock_db, mock_buffer, sample_platform):
        mock_db.fetch_by_id.side_effect = fetch_by_table(sample_platform, make_post(buffer_post_id="u1"))
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}

        updated = SocialMediaService.update_post(10, SocialPostUpdate(content="Changed"))

        entered(mock_buffer).edit_update.assert_called_once()
        assert entered(mock_buffer).edit_update.call_args.kwargs["text"] == "Changed"
        assert updated["status"] == "processing"

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_delete_without_buffer_id(self, mock_db, mock_buffer):
        mock_db.fetch_by_id.return_value = make_post()
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}

        result = SocialMediaService.delete_post(10)

        assert result["status"] == "cancelled"
        mock_buffer.assert_not_called()

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_delete_removes_from_buffer(self, mock_db, mock_buffer):
        mock_db.fetch_by_id.return_value = make_post(status="scheduled", buffer_post_id="u1")

        SocialMediaService.delete_post(10)

        entered(mock_buffer).destroy_update.assert_called_once_with("u1")

    @patch(f"{SERVICE}.SupabaseClient")
    def test_list_posts_pagination(self, mock_db):
        mock_db.fetch_rows_with_count.return_value = ([make_post()], 45)

        rows, pagination = SocialMediaService.list_posts(status="draft", page=2, page_size=20)

        assert len(rows) == 1
        assert pagination == {
            "page": 2,
            "page_size": 20,
            "total_items": 45,
            "total_pages": 3,
            "has_more": True,
        }
        kwargs = mock_db.fetch_rows_with_count.call_args.kwargs
        assert kwargs["offset"] == 20
        assert kwargs["filters"] == {"platform_id": None, "status": "draft"}


# =============================================================================
# Publishing
# =============================================================================

class TestPublish:

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_publish_success(self, mock_db, mock_buffer, sample_platform):
        mock_db.fetch_by_id.side_effect = fetch_by_table(sample_platform, make_post())
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}
        entered(mock_buffer).create_update.return_value = {"success": True, "update_id": "u1"}

        result = SocialMediaService.publish_post(10)

        assert result["buffer_post_id"] == "u1"
        assert result["status"] == "processing"
        assert entered(mock_buffer).create_update.call_args.kwargs["profile_ids"] == ["buffer-profile-1"]

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_publish_failure_marks_failed(self, mock_db, mock_buffer, sample_platform):
        mock_db.fetch_by_id.side_effect = fetch_by_table(sample_platform, make_post())
        entered(mock_buffer).create_update.side_effect = BufferClientError(
            "Profile is paused", code="BUFFER_REJECTED"
        )

        with pytest.raises(BufferClientError):
            SocialMediaService.publish_post(10)

        table, row_id, data = mock_db.update_row.call_args.args
        assert data["status"] == "failed"
        assert data["error_message"] == "Profile is paused"

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_publish_without_profile(self, mock_db, mock_buffer, sample_platform):
        platform = {**sample_platform, "api_config": {"character_limit": 280}}
        mock_db.fetch_by_id.side_effect = fetch_by_table(platform, make_post())

        with pytest.raises(BufferClientError) as exc_info:
            SocialMediaService.publish_post(10)

        assert exc_info.value.code == "BUFFER_PROFILE_MISSING"
        mock_buffer.assert_not_called()

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_sync_analytics(self, mock_db, mock_buffer, sample_platform):
        post = make_post(status="posted", buffer_post_id="u1", metrics={"impressions": 50})
        mock_db.fetch_by_id.side_effect = fetch_by_table(sample_platform, post)
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}
        entered(mock_buffer).get_interactions.return_value = {
            "interactions": {"favorites": 5, "retweets": 5}
        }

        result = SocialMediaService.sync_analytics(10)

        assert result["metrics"]["likes"] == 5
        assert result["metrics"]["engagement"] == pytest.approx(0.2)

    @patch(f"{SERVICE}.SupabaseClient")
    def test_sync_requires_buffer_id(self, mock_db):
        mock_db.fetch_by_id.return_value = make_post()

        with pytest.raises(InvalidRequestError):
            SocialMediaService.sync_analytics(10)


# =============================================================================
# Buffer connections
# =============================================================================

class TestBufferConnections:

    @patch(f"{SERVICE}.BufferClient")
    def test_each_call_closes_its_client(self, mock_buffer):
        entered(mock_buffer).get_profiles.return_value = [{"id": "p1"}]

        for _ in range(3):
            assert SocialMediaService.get_buffer_profiles() == [{"id": "p1"}]

        assert mock_buffer.call_count == 3
        assert mock_buffer.return_value.__exit__.call_count == 3

    @patch(f"{SERVICE}.BufferClient")
    @patch(f"{SERVICE}.SupabaseClient")
    def test_client_closed_when_publish_fails(self, mock_db, mock_buffer, sample_platform):
        mock_db.fetch_by_id.side_effect = fetch_by_table(sample_platform, make_post())
        entered(mock_buffer).create_update.side_effect = BufferClientError("down", code="BUFFER_HTTP_ERROR")

        with pytest.raises(BufferClientError):
            SocialMediaService.publish_post(10)

        mock_buffer.return_value.__exit__.assert_called_once()
