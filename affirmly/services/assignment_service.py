"""Assignment service - picks today's affirmation for a user or an anonymous visitor.

Signed-in users get one affirmation per calendar day, recorded as an
Interaction on first view. Anonymous visitors get a selection that is a pure
function of the date, so everyone sees the same copy until the date rolls over.
"""

import hashlib
import logging
import random
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.core.exceptions import (
    ConstraintViolation,
    NoAffirmationsAvailable,
    NotFoundError,
)
from affirmly.models.affirmation import Affirmation
from affirmly.models.interaction import Interaction
from affirmly.models.user import User

logger = logging.getLogger(__name__)


def date_index(day: date, size: int) -> int:
    """Map a calendar date onto [0, size) deterministically across processes."""
    digest = hashlib.sha256(day.isoformat().encode("utf-8")).hexdigest()
    return int(digest, 16) % size


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def bump_streak(db: AsyncSession, user: User, day: date) -> None:
    """Add one to the streak in SQL so concurrent bumps are not lost."""
    await db.execute(
        update(User)
        .where(User.id == user.id)
        .values(current_streak=User.current_streak + 1, last_affirmation_date=day)
        .execution_options(synchronize_session=False)
    )
    await db.refresh(user, ["current_streak", "last_affirmation_date"])


async def find_interaction(db: AsyncSession, user_id: int, day: date) -> Interaction | None:
    result = await db.execute(
        select(Interaction).where(
            Interaction.user_id == user_id, Interaction.shown_date == day
        )
    )
    return result.scalar_one_or_none()


class AssignmentService:
    @staticmethod
    async def active_affirmations(
        db: AsyncSession, categories: list[str] | None = None
    ) -> list[Affirmation]:
        """Active affirmations ordered by id, optionally limited to some categories."""
        query = select(Affirmation).where(Affirmation.is_active.is_(True))
        if categories:
            query = query.where(Affirmation.category.in_(categories))
        result = await db.execute(query.order_by(Affirmation.id))
        return list(result.scalars().all())

    async def pick_for_date(self, db: AsyncSession, day: date) -> Affirmation:
        affirmations = await self.active_affirmations(db)
        if not affirmations:
            raise NoAffirmationsAvailable()
        return affirmations[date_index(day, len(affirmations))]

    async def pick_for_user(self, db: AsyncSession, user: User) -> Affirmation:
        """Uniform pick among the user's goal categories, else among everything active."""
        eligible = []
        if user.goals:
            eligible = await self.active_affirmations(db, user.goals)
        if not eligible:
            eligible = await self.active_affirmations(db)
        if not eligible:
            raise NoAffirmationsAvailable()
        return random.choice(eligible)

    async def get_todays_interaction(
        self, db: AsyncSession, user_id: int, today: date | None = None
    ) -> Interaction | None:
        await get_user_or_404(db, user_id)
        return await find_interaction(db, user_id, today or date.today())

    async def get_todays_affirmation(
        self, db: AsyncSession, user_id: int | None = None, today: date | None = None
    ) -> Affirmation:
        today = today or date.today()
        if user_id is None:
            return await self.pick_for_date(db, today)

        user = await get_user_or_404(db, user_id)
        existing = await find_interaction(db, user_id, today)
        if existing is not None:
            return await db.get(Affirmation, existing.affirmation_id)

        affirmation = await self.pick_for_user(db, user)
        interaction = Interaction(
            user_id=user_id, affirmation_id=affirmation.id, shown_date=today
        )
        try:
            async with db.begin_nested():
                db.add(interaction)
        except IntegrityError as exc:
            # Another request created today's row first; serve that one instead
            logger.info("Lost daily assignment race for user %s on %s", user_id, today)
            existing = await find_interaction(db, user_id, today)
            if existing is None:
                raise ConstraintViolation(
                    f"Could not assign an affirmation to user {user_id} for {today}"
                ) from exc
            return await db.get(Affirmation, existing.affirmation_id)
        except SQLAlchemyError:
            logger.exception("Failed to store interaction for user %s", user_id)
            raise

        await bump_streak(db, user, today)
        logger.debug(
            "Assigned affirmation %s to user %s (streak %s)",
            affirmation.id, user_id, user.current_streak,
        )
        return affirmation


assignment_service = AssignmentService()
