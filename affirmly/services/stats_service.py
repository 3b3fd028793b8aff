"""Stats service - aggregates a user's interaction history."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.models.interaction import Interaction, RESPONSE_AFFIRMED
from affirmly.schemas.user import UserStats
from affirmly.services.assignment_service import get_user_or_404


def success_rate(affirmed: int, total: int) -> int:
    """Percentage of shown affirmations that were affirmed, 0 when nothing was shown."""
    if total <= 0:
        return 0
    return round(100 * affirmed / total)


class StatsService:
    @staticmethod
    async def get_user_stats(db: AsyncSession, user_id: int) -> UserStats:
        user = await get_user_or_404(db, user_id)

        total = await db.scalar(
            select(func.count(Interaction.id)).where(Interaction.user_id == user_id)
        )
        affirmed = await db.scalar(
            select(func.count(Interaction.id)).where(
                Interaction.user_id == user_id,
                Interaction.response == RESPONSE_AFFIRMED,
            )
        )

        # Streak is maintained incrementally, not recounted from history
        return UserStats(
            total_affirmations=total or 0,
            streak=user.current_streak or 0,
            success_rate=success_rate(affirmed or 0, total or 0),
        )


stats_service = StatsService()
