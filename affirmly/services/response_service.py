"""Response service - attaches the user's answer to today's interaction."""

import logging
from datetime import date, datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.core.exceptions import NotFoundError, ResponseAlreadyRecorded, ValidationError
from affirmly.models.interaction import Interaction, RESPONSE_AFFIRMED
from affirmly.services.assignment_service import bump_streak, find_interaction, get_user_or_404

logger = logging.getLogger(__name__)


class ResponseService:
    @staticmethod
    async def record_response(
        db: AsyncSession,
        user_id: int,
        affirmation_id: int,
        response: str,
        today: date | None = None,
    ) -> Interaction:
        """Record "affirmed" or "not_for_me" against today's interaction.

        Only updates an interaction created by the assignment service; it never
        creates one. A response cannot be changed once recorded. "affirmed"
        adds one to the streak, "not_for_me" leaves it as is.
        """
        today = today or date.today()
        user = await get_user_or_404(db, user_id)

        interaction = await find_interaction(db, user_id, today)
        if interaction is None:
            raise NotFoundError("No affirmation has been shown to this user today")
        if interaction.affirmation_id != affirmation_id:
            raise ValidationError(
                f"Affirmation {affirmation_id} is not today's affirmation for this user"
            )

        # Only the first writer matches response IS NULL
        result = await db.execute(
            update(Interaction)
            .where(Interaction.id == interaction.id, Interaction.response.is_(None))
            .values(response=response, response_time=datetime.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            await db.refresh(interaction)
            raise ResponseAlreadyRecorded()

        if response == RESPONSE_AFFIRMED:
            await bump_streak(db, user, today)

        await db.refresh(interaction)
        logger.info("User %s responded %s to affirmation %s", user_id, response, affirmation_id)
        return interaction


response_service = ResponseService()
