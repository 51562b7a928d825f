# =============================================================================
# tests/test_lib.py - lib/ Utility Tests
# =============================================================================
# Tests for the pieces of lib/ that don't talk to the network:
# - rounding and time helpers
# - model output parsing
# - Stripe amount conversion
# - the database log handler
# =============================================================================

import logging
from datetime import timezone
from unittest.mock import patch

import pytest

from lib.log_handler import SupabaseLogHandler
from lib.stripe_client import to_cents
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, parse_timestamp, round_half_up
from lib.xai_client import XAIClientError, parse_json_object


# =============================================================================
# Utils
# =============================================================================

class TestRoundHalfUp:

    def test_halves_round_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1

    def test_places(self):
        assert round_half_up(12.345, 2) == 12.35
        assert round_half_up(-4.444, 2) == -4.44

    def test_returns_int_without_places(self):
        assert isinstance(round_half_up(1949.6), int)


class TestParseTimestamp:

    def test_z_suffix(self):
        parsed = parse_timestamp("2024-03-01T10:00:00Z")
        assert parsed.tzinfo is not None
        assert parsed.hour == 10

    def test_naive_is_utc(self):
        assert parse_timestamp("2024-03-01T10:00:00").tzinfo == timezone.utc

    def test_none(self):
        assert parse_timestamp(None) is None


class TestApplicationError:

    def test_str_includes_suggestion(self):
        error = ApplicationError("Boom", code="X_FAILED", suggestion="Try again")

        assert "[X_FAILED] Boom" in str(error)
        assert "Try again" in str(error)

    def test_default_status(self):
        assert ApplicationError("Boom").status_code == 500


# =============================================================================
# xAI output parsing
# =============================================================================

class TestParseJsonObject:

    def test_plain_json(self):
        assert parse_json_object('{"is_bug": true}') == {"is_bug": True}

    def test_code_fence(self):
        assert parse_json_object('```json\n{"score": 12}\n```') == {"score": 12}

    def test_prose_raises(self):
        with pytest.raises(XAIClientError) as exc_info:
            parse_json_object("Sure! Here is your analysis.")
        assert exc_info.value.code == "XAI_INVALID_JSON"

    def test_array_raises(self):
        with pytest.raises(XAIClientError):
            parse_json_object("[1, 2, 3]")


# =============================================================================
# Stripe
# =============================================================================

class TestToCents:

    def test_dollars_to_cents(self):
        assert to_cents(49.99) == 4999
        assert to_cents("19.5") == 1950

    def test_half_cent_rounds_up(self):
        assert to_cents(0.005) == 1


# =============================================================================
# Database log handler
# =============================================================================

class TestSupabaseLogHandler:

    def _record(self, name: str = "core.services.marketplace_service", msg: str = "Checkout failed") -> logging.LogRecord:
        return logging.LogRecord(name, logging.ERROR, __file__, 42, msg, None, None)

    def test_build_row(self):
        row = SupabaseLogHandler(source="worker").build_row(self._record())

        assert row["level"] == "error"
        assert row["message"] == "Checkout failed"
        assert row["source"] == "worker"
        assert row["context"]["logger"] == "core.services.marketplace_service"

    def test_emit_inserts_row(self):
        handler = SupabaseLogHandler()
        with patch("lib.supabase_client.SupabaseClient.insert_row") as insert_row:
            handler.emit(self._record())

        insert_row.assert_called_once()
        assert insert_row.call_args.args[0] == "logs"

    def test_own_loggers_are_skipped(self):
        handler = SupabaseLogHandler()
        with patch("lib.supabase_client.SupabaseClient.insert_row") as insert_row:
            handler.emit(self._record(name="lib.supabase_client"))
            handler.emit(self._record(name="httpx"))

        insert_row.assert_not_called()

    def test_insert_failure_does_not_raise(self):
        handler = SupabaseLogHandler()
        with patch("lib.supabase_client.SupabaseClient.insert_row", side_effect=RuntimeError("down")), \
                patch.object(handler, "handleError") as handle_error:
            handler.emit(self._record())

        handle_error.assert_called_once()


# =============================================================================
# SupabaseClient write guards
# =============================================================================

class TestSupabaseWriteGuards:

    @patch.object(SupabaseClient, "get_client")
    def test_update_row_requires_id(self, mock_get_client):
        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.update_row("bug_reports", None, {"status": "closed"})

        assert exc_info.value.code == "MISSING_ROW_ID"
        mock_get_client.return_value.table.assert_not_called()

    @patch.object(SupabaseClient, "get_client")
    def test_delete_row_requires_id(self, mock_get_client):
        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.delete_row("portfolio_items", None)

        assert exc_info.value.code == "MISSING_ROW_ID"
        mock_get_client.return_value.table.assert_not_called()

    @patch.object(SupabaseClient, "get_client")
    def test_update_rows_requires_a_filter(self, mock_get_client):
        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.update_rows("bug_reports", filters={"status": None}, data={"status": "closed"})

        assert exc_info.value.code == "UNFILTERED_WRITE"
        mock_get_client.return_value.table.assert_not_called()

    @patch.object(SupabaseClient, "get_client")
    def test_update_row_filters_on_id(self, mock_get_client):
        table = mock_get_client.return_value.table.return_value
        table.update.return_value.eq.return_value.execute.return_value.data = [{"id": 4, "status": "closed"}]

        assert SupabaseClient.update_row("bug_reports", 4, {"status": "closed"}) == {"id": 4, "status": "closed"}
        table.update.return_value.eq.assert_called_once_with("id", 4)
