# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Elevion API:
# - test_models.py: Pydantic model validation
# - test_lib.py: utilities, JSON parsing, database log handler
# - test_bug_monitor.py, test_price_optimizer.py: admin AI agents
# - test_content_moderator.py, test_content_generator.py,
#   test_quote_generator.py: AI helpers and their fallbacks
# - test_buffer_client.py, test_social_media_service.py: Buffer publishing
# - test_admin_services.py: bug report, moderation, pricing and portfolio services
# - test_api.py: requests through the FastAPI app
#
# Run tests with: pytest
# =============================================================================
