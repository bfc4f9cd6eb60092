"""Construction of the redis-py asyncio handle from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff

if TYPE_CHECKING:
    from kv_facade_core.config.settings import Settings

logger = structlog.get_logger()


def create_redis(settings: Settings) -> Redis:  # type: ignore[type-arg]
    """Build a ``redis.asyncio.Redis`` client for the configured target.

    ``redis_url`` wins over host/port/db when set. Responses are decoded to
    ``str`` and retries are disabled, so a failed command surfaces
    on the first attempt.
    """
    password = (
        settings.redis_password.get_secret_value() if settings.redis_password else None
    )
    timeout = settings.socket_timeout_seconds

    if settings.redis_url:
        client: Redis = Redis.from_url(  # type: ignore[type-arg]
            settings.redis_url,
            password=password,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
            retry=Retry(NoBackoff(), 0),
        )
    else:
        client = Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=password,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
            retry=Retry(NoBackoff(), 0),
        )

    logger.debug(
        "redis_client_created",
        host=settings.redis_host,
        port=settings.redis_port,
        db=settings.redis_db,
    )
    return client
