"""Admin endpoints - catalogue management, LLM drafts and database setup."""

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.db.database import Database, get_database, get_db
from affirmly.db.redis import get_redis
from affirmly.schemas.affirmation import (
    AffirmationCreate,
    AffirmationDetail,
    AffirmationUpdate,
    AreaStat,
)
from affirmly.schemas.generation import (
    CategorizeRequest,
    CategorizeResponse,
    GenerateRequest,
    GeneratedAffirmation,
)
from affirmly.services.affirmation_service import affirmation_service
from affirmly.services.draft_service import DraftService
from affirmly.services.llm_service import llm_service
from affirmly.services.seed_service import seed_service

router = APIRouter()


def _draft_service(redis: aioredis.Redis = Depends(get_redis)) -> DraftService:
    return DraftService(redis)


# --- Catalogue ---


@router.get("/affirmations", response_model=list[AffirmationDetail])
async def list_affirmations(
    include_inactive: bool = Query(default=False, alias="includeInactive"),
    db: AsyncSession = Depends(get_db),
):
    """List affirmations, newest first. Inactive ones only on request."""
    return await affirmation_service.list_affirmations(db, include_inactive)


@router.post("/affirmations", response_model=AffirmationDetail, status_code=201)
async def create_affirmation(data: AffirmationCreate, db: AsyncSession = Depends(get_db)):
    return await affirmation_service.create_affirmation(db, data)


@router.patch("/affirmations/{affirmation_id}", response_model=AffirmationDetail)
async def update_affirmation(
    affirmation_id: int, data: AffirmationUpdate, db: AsyncSession = Depends(get_db)
):
    """Edit content, category, tags or active flag."""
    return await affirmation_service.update_affirmation(db, affirmation_id, data)


@router.delete("/affirmations/{affirmation_id}", response_model=AffirmationDetail)
async def deactivate_affirmation(affirmation_id: int, db: AsyncSession = Depends(get_db)):
    """Soft delete: the affirmation stops being selected but stays in history."""
    return await affirmation_service.deactivate_affirmation(db, affirmation_id)


@router.get("/area-stats", response_model=dict[str, AreaStat])
async def get_area_stats(db: AsyncSession = Depends(get_db)):
    """Per category: active affirmations and users who picked it as a goal."""
    return await affirmation_service.area_stats(db)


# --- LLM drafts ---


@router.post("/generate-affirmations", response_model=list[GeneratedAffirmation])
async def generate_affirmations(
    req: GenerateRequest, drafts: DraftService = Depends(_draft_service)
):
    """Draft candidates with the LLM and queue them for review."""
    generated = await llm_service.generate(req.category, req.tags, req.count, req.tone)
    await drafts.add_drafts(generated)
    return generated


@router.post("/categorize", response_model=CategorizeResponse)
async def categorize(req: CategorizeRequest):
    return await llm_service.categorize(req.content)


@router.get("/drafts", response_model=list[GeneratedAffirmation])
async def list_drafts(drafts: DraftService = Depends(_draft_service)):
    return await drafts.get_drafts()


@router.delete("/drafts", status_code=204)
async def clear_drafts(drafts: DraftService = Depends(_draft_service)):
    await drafts.clear_drafts()


@router.post(
    "/drafts/{index}/approve", response_model=AffirmationDetail, status_code=201
)
async def approve_draft(
    index: int,
    db: AsyncSession = Depends(get_db),
    drafts: DraftService = Depends(_draft_service),
):
    """Move one draft into the catalogue as an active affirmation."""
    try:
        draft = await drafts.get_draft(index)
    except IndexError:
        raise HTTPException(status_code=404, detail="Draft not found")

    affirmation = await affirmation_service.create_affirmation(
        db,
        AffirmationCreate(
            content=draft.content,
            category=draft.category,
            tags=draft.tags,
            created_by="ai-generated",
        ),
    )
    await drafts.pop_draft(index)
    return affirmation


# --- Setup ---


@router.post("/init-db")
async def init_db(
    database: Database = Depends(get_database), db: AsyncSession = Depends(get_db)
):
    """Create tables and insert the starter catalogue if it is empty."""
    await database.create_all()
    seeded = await seed_service.seed_if_empty(db)
    return {
        "success": True,
        "message": "Database initialized successfully",
        "seeded": seeded,
    }
