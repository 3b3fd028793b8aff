"""Schemas for LLM-drafted affirmation candidates."""

from typing import Literal

from pydantic import Field

from affirmly.config import settings
from affirmly.schemas.base import CamelModel, Category

Tone = Literal["gentle", "powerful", "motivational", "calming"]


class GenerateRequest(CamelModel):
    category: Category
    tags: list[str]
    count: int = Field(
        default=settings.DEFAULT_GENERATION_COUNT, ge=1, le=settings.MAX_GENERATION_COUNT
    )
    tone: Tone = "motivational"


class GeneratedAffirmation(CamelModel):
    """A candidate drafted by the model, pending admin review."""
    content: str
    category: str
    tags: list[str]
    reasoning: str = ""


class CategorizeRequest(CamelModel):
    content: str = Field(min_length=1)


class CategorizeResponse(CamelModel):
    category: str
    tags: list[str]
