# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared request concerns.
# These are injected into route handlers using Depends() or the
# Annotated aliases below.
# =============================================================================

from typing import Annotated, Optional

from fastapi import Depends, Query
from pydantic import BaseModel

from app.auth import AuthUser, get_current_user, get_current_user_optional, require_admin


class PageParams(BaseModel):
    """Page-based pagination from ?page=&limit= query params."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_page_params(
    page: int = Query(default=1, ge=1, description="Page number (1-based)"),
    limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
) -> PageParams:
    return PageParams(page=page, limit=limit)


# Type aliases for dependency injection
CurrentUser = Annotated[AuthUser, Depends(get_current_user)]
OptionalUser = Annotated[Optional[AuthUser], Depends(get_current_user_optional)]
AdminUser = Annotated[AuthUser, Depends(require_admin)]
PageDep = Annotated[PageParams, Depends(get_page_params)]
