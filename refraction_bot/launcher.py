"""Launcher facts, fetched from GitHub and cached when storage is available."""

from __future__ import annotations

import logging

import redis

from .api import HttpClient, get_latest_prism_version, get_prism_stargazers_count
from .consts import Colors
from .storage import Storage
from .utils import Embed

log = logging.getLogger(__name__)

_CACHE_MISS = (LookupError, ValueError, redis.RedisError, OSError)


async def launcher_version(http: HttpClient, storage: Storage | None = None) -> str:
    """Return the latest launcher version, from the cache if it holds one."""
    if storage is None:
        log.debug(
            "Not caching launcher version, as we're running without a storage backend"
        )
        return await get_latest_prism_version(http)
    try:
        return await storage.launcher_version()
    except _CACHE_MISS:
        version = await get_latest_prism_version(http)
        await storage.cache_launcher_version(version)
        return version


async def stargazer_count(http: HttpClient, storage: Storage | None = None) -> int:
    """Return the launcher's stargazer count, from the cache if it holds one."""
    if storage is None:
        log.debug(
            "Not caching launcher stargazer count, as we're running without a storage backend"
        )
        return await get_prism_stargazers_count(http)
    try:
        return await storage.launcher_stargazer_count()
    except _CACHE_MISS:
        count = await get_prism_stargazers_count(http)
        await storage.cache_launcher_stargazer_count(count)
        return count


def stars_embed(count: int) -> Embed:
    """Build the embed announcing the stargazer count."""
    return Embed(title=f"⭐ {count} total stars!", color=Colors.YELLOW.value)