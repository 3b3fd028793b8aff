"""Daily affirmation endpoint - today's affirmation for a user or anonymous visitor."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.core.exceptions import NoAffirmationsAvailable
from affirmly.db.database import get_db
from affirmly.schemas.affirmation import DailyAffirmation, FallbackAffirmation
from affirmly.services.assignment_service import assignment_service

logger = logging.getLogger(__name__)

router = APIRouter()

# Shown when the catalogue is empty or the store is down, so the UI never blocks
FALLBACK_AFFIRMATION = FallbackAffirmation(
    id=None,
    content="I trust my intuition and make decisions with confidence",
    category="confidence",
    tags=["intuition", "decisions", "confidence"],
)


@router.get(
    "/daily-affirmation",
    response_model=DailyAffirmation,
    responses={503: {"model": FallbackAffirmation}},
)
async def get_daily_affirmation(
    user_id: int | None = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db),
):
    """Get today's affirmation. Without userId the pick depends only on the date."""
    try:
        affirmation = await assignment_service.get_todays_affirmation(db, user_id)
    except (NoAffirmationsAvailable, SQLAlchemyError):
        logger.exception("Serving fallback affirmation (user %s)", user_id)
        return JSONResponse(
            status_code=503, content=FALLBACK_AFFIRMATION.model_dump(by_alias=True)
        )
    return DailyAffirmation.model_validate(affirmation)
