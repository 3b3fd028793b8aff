"""Shared schema base: JSON bodies use camelCase keys."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from affirmly.models.affirmation import CATEGORIES


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


def _check_category(value: str) -> str:
    if value not in CATEGORIES:
        raise ValueError(f"Unknown category '{value}', expected one of: {', '.join(CATEGORIES)}")
    return value


Category = Annotated[str, AfterValidator(_check_category)]


class SuccessResponse(CamelModel):
    success: bool = True
