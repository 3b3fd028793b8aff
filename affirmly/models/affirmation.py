"""Affirmation model - the catalogue of affirmation copy."""

from datetime import datetime

from sqlalchemy import String, Text, Boolean, DateTime, JSON, func
from sqlalchemy.orm import Mapped, mapped_column

from affirmly.db.database import Base

CATEGORIES = (
    "confidence",
    "health",
    "relationships",
    "success",
    "personal-growth",
    "gratitude",
    "happiness",
    "mindset",
    "career",
    "creativity",
)


class Affirmation(Base):
    __tablename__ = "affirmations"

    id: Mapped[int] = mapped_column(primary_key=True)
    content: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(100), index=True)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    created_by: Mapped[str] = mapped_column(String(50), default="ai-generated")

    # Soft delete: inactive rows are never selected but stay for history
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
