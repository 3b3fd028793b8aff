"""Affirmation service - admin management of the affirmation catalogue."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.core.exceptions import NotFoundError
from affirmly.models.affirmation import Affirmation
from affirmly.models.user import User
from affirmly.schemas.affirmation import AffirmationCreate, AffirmationUpdate, AreaStat

logger = logging.getLogger(__name__)


class AffirmationService:
    @staticmethod
    async def get_or_404(db: AsyncSession, affirmation_id: int) -> Affirmation:
        affirmation = await db.get(Affirmation, affirmation_id)
        if affirmation is None:
            raise NotFoundError("Affirmation not found")
        return affirmation

    @staticmethod
    async def list_affirmations(
        db: AsyncSession, include_inactive: bool = False
    ) -> list[Affirmation]:
        """List affirmations, newest first."""
        query = select(Affirmation)
        if not include_inactive:
            query = query.where(Affirmation.is_active.is_(True))
        result = await db.execute(
            query.order_by(Affirmation.created_at.desc(), Affirmation.id.desc())
        )
        affirmations = list(result.scalars().all())
        logger.debug("Retrieved %d affirmations", len(affirmations))
        return affirmations

    @staticmethod
    async def create_affirmation(db: AsyncSession, data: AffirmationCreate) -> Affirmation:
        affirmation = Affirmation(**data.model_dump())
        db.add(affirmation)
        try:
            await db.flush()
        except SQLAlchemyError:
            logger.exception("Failed to create affirmation in category %s", data.category)
            raise
        await db.refresh(affirmation)
        logger.info("Created affirmation %s (%s)", affirmation.id, affirmation.category)
        return affirmation

    async def update_affirmation(
        self, db: AsyncSession, affirmation_id: int, data: AffirmationUpdate
    ) -> Affirmation:
        """Partial update of content, category, tags and active flag."""
        affirmation = await self.get_or_404(db, affirmation_id)

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(affirmation, field, value)

        await db.flush()
        await db.refresh(affirmation)
        return affirmation

    async def deactivate_affirmation(self, db: AsyncSession, affirmation_id: int) -> Affirmation:
        """Soft delete: keep the row for interaction history, drop it from selection."""
        affirmation = await self.get_or_404(db, affirmation_id)
        affirmation.is_active = False
        await db.flush()
        logger.info("Deactivated affirmation %s", affirmation_id)
        return affirmation

    @staticmethod
    async def area_stats(db: AsyncSession) -> dict[str, AreaStat]:
        """Active affirmation count and interested-user count per category."""
        result = await db.execute(
            select(Affirmation.category, func.count(Affirmation.id))
            .where(Affirmation.is_active.is_(True))
            .group_by(Affirmation.category)
        )
        stats: dict[str, AreaStat] = {
            category: AreaStat(affirmation_count=count) for category, count in result.all()
        }

        # Goals are a JSON list, so count them in Python rather than per-dialect SQL
        goal_lists = await db.scalars(select(User.goals))
        for goals in goal_lists:
            for goal in set(goals or []):
                stats.setdefault(goal, AreaStat()).user_count += 1

        return stats


affirmation_service = AffirmationService()
