# =============================================================================
# core/models/portfolio.py - Portfolio Schemas
# =============================================================================

from pydantic import BaseModel, Field


class PortfolioItemCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    client_name: str | None = Field(default=None, max_length=200)
    industry_type: str = Field(..., min_length=1, max_length=100, examples=["restaurant"])
    image_url: str | None = None
    project_url: str | None = None
    technologies: list[str] = Field(default_factory=list)
    featured: bool = False
    display_order: int = Field(default=0, description="Higher values are listed first")


class PortfolioItemUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    client_name: str | None = None
    industry_type: str | None = Field(default=None, min_length=1, max_length=100)
    image_url: str | None = None
    project_url: str | None = None
    technologies: list[str] | None = None
    featured: bool | None = None
    display_order: int | None = None
