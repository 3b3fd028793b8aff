"""User endpoints - responses, stats, today's response and goal preferences."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.db.database import get_db
from affirmly.schemas.base import SuccessResponse
from affirmly.schemas.user import (
    RecordResponseRequest,
    TodaysResponse,
    UpdateGoalsRequest,
    UserOut,
    UserStats,
)
from affirmly.services.assignment_service import assignment_service, get_user_or_404
from affirmly.services.response_service import response_service
from affirmly.services.stats_service import stats_service
from affirmly.services.user_service import user_service

router = APIRouter()


@router.post("/response", response_model=SuccessResponse)
async def record_response(req: RecordResponseRequest, db: AsyncSession = Depends(get_db)):
    """Record the user's answer to today's affirmation."""
    await response_service.record_response(
        db, req.user_id, req.affirmation_id, req.response
    )
    return SuccessResponse()


@router.get("/stats", response_model=UserStats)
async def get_stats(
    user_id: int = Query(alias="userId"), db: AsyncSession = Depends(get_db)
):
    """Total shown, current streak and success rate for a user."""
    return await stats_service.get_user_stats(db, user_id)


@router.get("/todays-response", response_model=TodaysResponse)
async def get_todays_response(
    user_id: int = Query(alias="userId"), db: AsyncSession = Depends(get_db)
):
    """The user's response to today's affirmation, or null."""
    interaction = await assignment_service.get_todays_interaction(db, user_id)
    return TodaysResponse(response=interaction.response if interaction else None)


@router.post("/update-goals", response_model=SuccessResponse)
async def update_goals(req: UpdateGoalsRequest, db: AsyncSession = Depends(get_db)):
    """Replace the user's goal categories."""
    await user_service.update_goals(db, req.user_id, req.goals)
    return SuccessResponse()


@router.get("/{user_id}", response_model=UserOut)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    """Profile, goals and streak for a user."""
    return await get_user_or_404(db, user_id)
