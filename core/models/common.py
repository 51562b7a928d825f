# =============================================================================
# core/models/common.py - Shared Response Schemas
# =============================================================================
# Every successful API response uses the same envelope:
#   {"success": true, "message": "...", "data": ...}
# Errors use the envelope built in app/exceptions.py.
# =============================================================================

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = "OK"
    data: T | None = None


class Pagination(BaseModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    pages: int = Field(..., ge=0)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, pages=-(-total // limit))


class PaginatedResponse(ApiResponse[T], Generic[T]):
    pagination: Pagination


def ok(data: Any = None, message: str = "OK") -> ApiResponse:
    """Wrap data in the success envelope."""
    return ApiResponse(success=True, message=message, data=data)
