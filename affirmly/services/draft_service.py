"""Draft service - holds generated candidates in Redis until an admin reviews them."""

import json

import redis.asyncio as aioredis

from affirmly.config import settings
from affirmly.schemas.generation import GeneratedAffirmation

DRAFTS_KEY = "affirmation:drafts"


class DraftService:
    def __init__(self, redis: aioredis.Redis):
        self.redis = redis

    async def get_drafts(self) -> list[GeneratedAffirmation]:
        raw = await self.redis.get(DRAFTS_KEY)
        if raw:
            return [GeneratedAffirmation(**item) for item in json.loads(raw)]
        return []

    async def save_drafts(self, drafts: list[GeneratedAffirmation]) -> None:
        """Save the pending drafts with TTL. An empty list clears them."""
        if not drafts:
            await self.clear_drafts()
            return
        await self.redis.set(
            DRAFTS_KEY,
            json.dumps([d.model_dump() for d in drafts], ensure_ascii=False),
            ex=settings.DRAFT_TTL,
        )

    async def add_drafts(self, new_drafts: list[GeneratedAffirmation]) -> list[GeneratedAffirmation]:
        drafts = await self.get_drafts()
        drafts.extend(new_drafts)
        await self.save_drafts(drafts)
        return drafts

    async def get_draft(self, index: int) -> GeneratedAffirmation:
        """Raises IndexError for an unknown index."""
        drafts = await self.get_drafts()
        if index < 0 or index >= len(drafts):
            raise IndexError(index)
        return drafts[index]

    async def pop_draft(self, index: int) -> GeneratedAffirmation:
        """Remove and return one draft. Raises IndexError for an unknown index."""
        drafts = await self.get_drafts()
        if index < 0 or index >= len(drafts):
            raise IndexError(index)
        draft = drafts.pop(index)
        await self.save_drafts(drafts)
        return draft

    async def clear_drafts(self) -> None:
        await self.redis.delete(DRAFTS_KEY)
