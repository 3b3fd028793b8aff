"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from affirmly.config import settings
from affirmly.core.exceptions import AffirmlyError
from affirmly.core.logging import log_requests_middleware, setup_logging
from affirmly.db.database import Database
from affirmly.db.redis import create_redis

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one database handle and one Redis client for the whole process
    database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
    # Create tables (dev only; use migrations in production)
    await database.create_all()
    app.state.database = database
    app.state.redis = create_redis(settings.REDIS_URL)
    yield
    # Shutdown: close connections
    await database.dispose()
    await app.state.redis.aclose()


app = FastAPI(
    title="Affirmly API",
    description="Backend API for Affirmly - one daily affirmation, a streak, and an admin panel",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests_middleware)


@app.exception_handler(AffirmlyError)
async def affirmly_error_handler(request: Request, exc: AffirmlyError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# --- Routes ---
from affirmly.api.routes import admin, auth, daily, user  # noqa: E402

app.include_router(daily.router, prefix="/api", tags=["daily"])
app.include_router(user.router, prefix="/api/user", tags=["user"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])


@app.get("/health")
async def health_check():
    return {"status": "ok"}
