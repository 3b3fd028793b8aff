"""Seed service - loads the starter catalogue from YAML and inserts it into an empty table."""

import logging
from pathlib import Path

import yaml
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.models.affirmation import Affirmation
from affirmly.schemas.affirmation import AffirmationCreate

logger = logging.getLogger(__name__)

SEED_FILE = Path(__file__).parent.parent / "data" / "seed" / "affirmations.yaml"


class SeedService:
    def __init__(self, seed_file: Path = SEED_FILE):
        self.seed_file = seed_file

    def load_seed(self) -> list[AffirmationCreate]:
        """Parse and validate the seed file."""
        if not self.seed_file.exists():
            raise FileNotFoundError(f"Seed file not found: {self.seed_file}")

        with open(self.seed_file, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        created_by = raw.get("created_by", "ai-generated")
        return [
            AffirmationCreate(created_by=created_by, **item)
            for item in raw.get("affirmations", [])
        ]

    async def seed_if_empty(self, db: AsyncSession) -> int:
        """Insert the seed rows when no affirmations exist. Returns how many were added."""
        existing = await db.scalar(select(func.count(Affirmation.id)))
        if existing:
            return 0

        rows = self.load_seed()
        db.add_all(Affirmation(**row.model_dump()) for row in rows)
        await db.flush()
        logger.info("Seeded %d affirmations", len(rows))
        return len(rows)


seed_service = SeedService()
