"""Database models package."""

from affirmly.models.affirmation import Affirmation, CATEGORIES
from affirmly.models.user import User
from affirmly.models.interaction import Interaction

__all__ = ["Affirmation", "CATEGORIES", "User", "Interaction"]
