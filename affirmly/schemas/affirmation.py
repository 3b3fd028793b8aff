"""Affirmation-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from affirmly.schemas.base import CamelModel, Category


class DailyAffirmation(CamelModel):
    """What the client renders as today's affirmation."""
    id: int | None
    content: str
    category: str
    tags: list[str]


class FallbackAffirmation(DailyAffirmation):
    fallback: bool = True


class AffirmationDetail(CamelModel):
    id: int
    content: str
    category: str
    tags: list[str]
    created_by: str
    is_active: bool
    created_at: datetime | None = None


class AffirmationCreate(CamelModel):
    content: str = Field(min_length=1)
    category: Category
    tags: list[str] = Field(default_factory=list)
    created_by: str = "admin"
    is_active: bool = True


class AffirmationUpdate(CamelModel):
    content: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    tags: list[str] | None = None
    is_active: bool | None = None


class AreaStat(CamelModel):
    affirmation_count: int = 0
    user_count: int = 0
