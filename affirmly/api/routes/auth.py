"""Auth endpoints - signup and login."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from affirmly.db.database import get_db
from affirmly.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserOut
from affirmly.services.user_service import user_service

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(data: SignupRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.signup(db, data.name, data.email, data.password)
    return AuthResponse(user=UserOut.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.login(db, data.email, data.password)
    return AuthResponse(user=UserOut.model_validate(user))
