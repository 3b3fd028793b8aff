"""Interaction model - one affirmation shown to one user on one calendar day."""

from datetime import date, datetime

from sqlalchemy import (
    String, Date, DateTime, ForeignKey, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from affirmly.db.database import Base

RESPONSE_AFFIRMED = "affirmed"
RESPONSE_NOT_FOR_ME = "not_for_me"


class Interaction(Base):
    __tablename__ = "user_affirmation_interactions"
    __table_args__ = (
        UniqueConstraint("user_id", "shown_date", name="uq_interaction_user_day"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    affirmation_id: Mapped[int] = mapped_column(ForeignKey("affirmations.id"))
    shown_date: Mapped[date] = mapped_column(Date, index=True)

    # None until the user responds; "affirmed" or "not_for_me" afterwards
    response: Mapped[str | None] = mapped_column(String(20), nullable=True)
    response_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
