from redis import asyncio as aioredis
from redis.exceptions import RedisError

from hotel_site.core.config import REDIS_URL
from hotel_site.core.logging_config import get_logger

logger = get_logger()


async def get_redis_client(redis_url: str | None = REDIS_URL):
    """Connected client for change notifications, or None to stay in-process."""
    if not redis_url:
        return None

    try:
        client = aioredis.Redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=2,
        )
        await client.ping()
        logger.info("Redis connected")
        return client
    except RedisError as e:
        logger.warning(f"Redis unavailable, change notifications stay in-process: {e}")
        return None
