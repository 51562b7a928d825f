# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for request validation
# - services/: Service classes that read and write Supabase tables
#
# Routers stay thin and delegate to core/services.
# =============================================================================
