"""User model - account, goal preferences and streak state."""

from datetime import date, datetime

from sqlalchemy import String, Integer, Date, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from affirmly.db.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255))

    # Subset of affirmation categories, e.g. ["confidence", "health"]
    goals: Mapped[list] = mapped_column(JSON, default=list)

    # Streak
    current_streak: Mapped[int] = mapped_column(Integer, default=0)
    last_affirmation_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
