"""User service - account creation, credential checks and goal preferences."""

import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.core.exceptions import InvalidCredentials, ValidationError
from affirmly.models.user import User
from affirmly.services.assignment_service import get_user_or_404

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12

# Checked against when the account is unknown so failed logins cost the same
_DUMMY_HASH = bcrypt.hashpw(b"dummy", bcrypt.gensalt(rounds=BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode("utf-8")


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        bcrypt.checkpw(password.encode("utf-8"), _DUMMY_HASH)
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService:
    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def signup(self, db: AsyncSession, name: str, email: str, password: str) -> User:
        email = email.strip().lower()
        if await self.get_by_email(db, email) is not None:
            raise ValidationError("Email already exists")

        user = User(email=email, name=name, password_hash=hash_password(password), goals=[])
        try:
            async with db.begin_nested():
                db.add(user)
        except IntegrityError as exc:
            raise ValidationError("Email already exists") from exc

        await db.refresh(user)
        logger.info("Created user %s", user.id)
        return user

    async def login(self, db: AsyncSession, email: str, password: str) -> User:
        user = await self.get_by_email(db, email)
        if not verify_password(password, user.password_hash if user else None):
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        return user

    @staticmethod
    async def update_goals(db: AsyncSession, user_id: int, goals: list[str]) -> User:
        user = await get_user_or_404(db, user_id)
        # Keep order, drop duplicates
        user.goals = list(dict.fromkeys(goals))
        await db.flush()
        return user


user_service = UserService()
