"""User, response and stats Pydantic schemas."""

from typing import Literal

from pydantic import Field

from affirmly.schemas.base import CamelModel, Category

ResponseValue = Literal["affirmed", "not_for_me"]


class SignupRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(CamelModel):
    id: int
    email: str
    name: str | None = None
    goals: list[str] = Field(default_factory=list)
    current_streak: int = 0


class AuthResponse(CamelModel):
    user: UserOut


class UpdateGoalsRequest(CamelModel):
    user_id: int
    goals: list[Category]


class RecordResponseRequest(CamelModel):
    user_id: int
    affirmation_id: int
    response: ResponseValue


class TodaysResponse(CamelModel):
    response: ResponseValue | None = None


class UserStats(CamelModel):
    total_affirmations: int
    streak: int
    success_rate: int = Field(ge=0, le=100)
