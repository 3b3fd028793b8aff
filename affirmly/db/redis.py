"""Redis connection backing the draft review queue."""

import redis.asyncio as redis
from fastapi import Request


def create_redis(url: str) -> redis.Redis:
    return redis.from_url(url, decode_responses=True)


async def get_redis(request: Request) -> redis.Redis:
    """FastAPI dependency: the client opened at startup and kept on app.state."""
    return request.app.state.redis
