# =============================================================================
# tests/test_price_optimizer.py - Price Optimizer Agent Tests
# =============================================================================
# This module contains tests for:
# - Static market data and competitor tiers
# - User metrics aggregation (pandas)
# - Recommendation generation, fallback and application
# - The scheduled analysis loop
# =============================================================================

from datetime import timedelta
from unittest.mock import patch

import pytest

from agents.price_optimizer import (
    FALLBACK_REASONING,
    PriceOptimizerAgent,
    calculate_percent_change,
    get_competitive_analysis,
    get_market_trends,
)
from agents.models.price_analysis import UserMetrics
from app.exceptions import RecommendationNotApprovedError, ResourceNotFoundError
from lib.utils import utc_now
from lib.xai_client import XAIClientError


# =============================================================================
# Helpers
# =============================================================================

class TestMarketData:

    def test_five_market_trends(self):
        trends = get_market_trends()

        assert len(trends) == 5
        assert all(0 <= trend.impact <= 1 for trend in trends)

    def test_basic_tier(self):
        competitors = {c.competitor: c for c in get_competitive_analysis("Basic")}

        assert competitors["WebGenius"].price == 19.99
        assert competitors["SiteBuilder Pro"].price == 14.99
        assert competitors["WebGenius"].comparison == "Similar features but higher price point"

    def test_pro_tier(self):
        prices = [c.price for c in get_competitive_analysis("Pro Monthly")]
        assert prices == [49.99, 39.99, 59.99, 69.99]

    def test_other_tier(self):
        prices = [c.price for c in get_competitive_analysis("Enterprise")]
        assert prices == [99.99, 79.99, 119.99, 149.99]


class TestPercentChange:

    def test_increase(self):
        assert calculate_percent_change(50, 55) == 10.0

    def test_rounded_to_two_places(self):
        assert calculate_percent_change(49.99, 54.99) == 10.0
        assert calculate_percent_change(30, 20) == -33.33

    def test_zero_current_price(self):
        assert calculate_percent_change(0, 25) == 0.0


# =============================================================================
# User Metrics
# =============================================================================

class TestUserMetrics:

    @patch("agents.price_optimizer.SupabaseClient")
    def test_aggregates_tables(self, mock_db):
        recent = (utc_now() - timedelta(days=3)).isoformat()
        old = (utc_now() - timedelta(days=90)).isoformat()

        def fetch_rows(table, **kwargs):
            return {
                "user_subscriptions": [
                    {"id": 1, "plan_id": 1, "status": "active", "updated_at": recent},
                    {"id": 2, "plan_id": 1, "status": "active", "updated_at": recent},
                    {"id": 3, "plan_id": 1, "status": "canceled", "updated_at": recent},
                    {"id": 4, "plan_id": 1, "status": "canceled", "updated_at": old},
                    {"id": 5, "plan_id": 2, "status": "active", "updated_at": recent},
                ],
                "user_sessions": [{"session_duration": 100}, {"session_duration": 200}],
                "content_view_metrics": [{"conversion_rate": 0.1}, {"conversion_rate": None}],
                "subscription_plans": [{"id": 1, "name": "Pro"}, {"id": 2, "name": "Basic"}],
            }[table]

        mock_db.fetch_rows.side_effect = fetch_rows

        metrics = PriceOptimizerAgent().get_user_metrics(plan_id=1)

        assert metrics.total_users == 5
        assert metrics.active_users == 2
        assert metrics.churn_rate == 50.0
        assert metrics.average_session_duration == 150.0
        assert metrics.conversion_rate == pytest.approx(0.1)
        assert metrics.plan_distribution == {"Pro": 2, "Basic": 1}

    @patch("agents.price_optimizer.SupabaseClient")
    def test_empty_tables(self, mock_db):
        mock_db.fetch_rows.return_value = []

        metrics = PriceOptimizerAgent().get_user_metrics(plan_id=1)

        assert metrics == UserMetrics()


# =============================================================================
# Recommendations
# =============================================================================

PLAN = {"id": 1, "name": "Pro", "price": 50.0, "interval": "month", "features": ["SEO"]}


class TestGenerateRecommendation:

    @patch.object(PriceOptimizerAgent, "get_user_metrics", return_value=UserMetrics())
    @patch("agents.price_optimizer.XAIClient")
    @patch("agents.price_optimizer.SupabaseClient")
    def test_stores_pending_recommendation(self, mock_db, mock_xai, _metrics):
        mock_db.fetch_by_id.return_value = PLAN
        mock_db.insert_row.side_effect = lambda table, row: {"id": 9, **row}
        mock_xai.generate_json.return_value = {
            "recommended_price": 55.0,
            "market_trends": [{"factor": "Inflation rate"}],
            "reasoning": "Strong demand",
            "confidence_score": 0.8,
        }

        recommendation = PriceOptimizerAgent().generate_price_recommendation(1)

        assert recommendation["status"] == "pending"
        assert recommendation["current_price"] == 50.0
        assert recommendation["recommended_price"] == 55.0
        assert recommendation["percent_change"] == 10.0
        assert recommendation["analysis_data"]["reasoning"] == "Strong demand"
        assert "expires_at" in recommendation

    @patch.object(PriceOptimizerAgent, "get_user_metrics", return_value=UserMetrics())
    @patch("agents.price_optimizer.XAIClient")
    @patch("agents.price_optimizer.SupabaseClient")
    def test_model_failure_keeps_current_price(self, mock_db, mock_xai, _metrics):
        mock_db.fetch_by_id.return_value = PLAN
        mock_db.insert_row.side_effect = lambda table, row: {"id": 9, **row}
        mock_xai.generate_json.side_effect = XAIClientError("down")

        recommendation = PriceOptimizerAgent().generate_price_recommendation(1)

        assert recommendation["recommended_price"] == 50.0
        assert recommendation["percent_change"] == 0.0
        assert recommendation["analysis_data"]["reasoning"] == FALLBACK_REASONING
        assert recommendation["analysis_data"]["confidence_score"] == 0

    @patch("agents.price_optimizer.SupabaseClient")
    def test_missing_plan(self, mock_db):
        mock_db.fetch_by_id.return_value = None

        with pytest.raises(ResourceNotFoundError):
            PriceOptimizerAgent().generate_price_recommendation(404)


class TestApplyRecommendation:

    RECOMMENDATION = {
        "id": 9,
        "plan_id": 1,
        "status": "approved",
        "current_price": 50.0,
        "recommended_price": 55.0,
        "percent_change": 10.0,
        "analysis_data": {
            "current_price": 50.0,
            "recommended_price": 55.0,
            "market_trends": [{"factor": "Inflation rate"}],
            "competitive_analysis": ["Cheaper than DigitalCraft"],
            "user_metrics": {"churn": "low"},
            "confidence_score": 0.8,
        },
    }

    @patch("agents.price_optimizer.SupabaseClient")
    def test_applies_and_records_history(self, mock_db):
        mock_db.fetch_by_id.side_effect = lambda table, row_id: {
            "price_recommendations": self.RECOMMENDATION,
            "subscription_plans": PLAN,
        }[table]
        mock_db.update_row.side_effect = lambda table, row_id, data: {"id": row_id, **data}

        plan = PriceOptimizerAgent().apply_price_recommendation(9, user_id="admin-1")

        assert plan["price"] == 55.0

        table, history = mock_db.insert_row.call_args.args
        assert table == "subscription_price_history"
        assert history["previous_price"] == 50.0
        assert history["new_price"] == 55.0
        assert history["change_reason"] == "Applied recommendation ID 9"
        assert history["changed_by_user_id"] == "admin-1"
        assert history["is_automatic"] is False
        assert history["ai_analysis"]["market_factors"] == ["Inflation rate"]
        assert history["ai_analysis"]["recommended_adjustment"] == 10.0
        assert history["ai_analysis"]["confidence"] == 0.8

        status_update = mock_db.update_row.call_args_list[-1].args
        assert status_update[0] == "price_recommendations"
        assert status_update[2]["status"] == "applied"

    @pytest.mark.parametrize("status", ["pending", "rejected", "applied"])
    @patch("agents.price_optimizer.SupabaseClient")
    def test_requires_approval(self, mock_db, status):
        mock_db.fetch_by_id.return_value = {**self.RECOMMENDATION, "status": status}

        with pytest.raises(RecommendationNotApprovedError):
            PriceOptimizerAgent().apply_price_recommendation(9, user_id="admin-1")

        mock_db.insert_row.assert_not_called()
        mock_db.update_row.assert_not_called()


# =============================================================================
# Scheduled Analysis
# =============================================================================

class TestScheduledAnalysis:

    @patch.object(PriceOptimizerAgent, "generate_price_recommendation")
    @patch("agents.price_optimizer.SupabaseClient")
    def test_skips_plans_with_recent_pending(self, mock_db, mock_generate):
        recent = (utc_now() - timedelta(days=2)).isoformat()
        mock_db.fetch_rows.side_effect = [
            [{"id": 1, "name": "Basic"}, {"id": 2, "name": "Pro"}],
            [{"id": 30, "plan_id": 1, "created_at": recent}],
        ]
        mock_generate.side_effect = lambda plan_id: {"id": 100 + plan_id, "plan_id": plan_id}

        generated = PriceOptimizerAgent().schedule_automatic_price_analysis()

        assert generated == [{"id": 102, "plan_id": 2}]
        mock_generate.assert_called_once_with(2)

    @patch.object(PriceOptimizerAgent, "generate_price_recommendation")
    @patch("agents.price_optimizer.SupabaseClient")
    def test_failing_plan_does_not_stop_the_rest(self, mock_db, mock_generate):
        mock_db.fetch_rows.side_effect = [[{"id": 1}, {"id": 2}], []]
        mock_generate.side_effect = [XAIClientError("down"), {"id": 7, "plan_id": 2}]

        generated = PriceOptimizerAgent().schedule_automatic_price_analysis()

        assert generated == [{"id": 7, "plan_id": 2}]
