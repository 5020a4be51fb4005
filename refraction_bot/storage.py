"""Redis-backed cache for the bot."""

from __future__ import annotations

import logging
from typing import Any

import redis
import redis.asyncio

log = logging.getLogger(__name__)

PK_KEY = "pluralkit-v1"
LAUNCHER_VERSION_KEY = "launcher-version-v1"
LAUNCHER_STARGAZER_KEY = "launcher-stargazer-v1"

_WEEK = 7 * 24 * 60 * 60
_DAY = 24 * 60 * 60
_HOUR = 60 * 60


def _text(value: Any) -> str:
    return value.decode() if isinstance(value, bytes) else str(value)


class Storage:
    """Cache for PluralKit users, launcher version and stargazer count."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> Storage:
        """Create a storage backed by the Redis server at ``url``."""
        return cls(redis.asyncio.from_url(url))

    async def has_connection(self) -> bool:
        """Return whether the Redis server answers."""
        try:
            return bool(await self.client.ping())
        except (redis.RedisError, OSError):
            return False

    async def store_user_plurality(self, user_id: int) -> None:
        """Mark ``user_id`` as a PluralKit user for a week."""
        log.debug("Marking %s as a PluralKit user", user_id)
        await self.client.set(f"{PK_KEY}:{user_id}", 0, ex=_WEEK)

    async def is_user_plural(self, user_id: int) -> bool:
        """Return whether ``user_id`` is marked as a PluralKit user."""
        log.debug("Checking if user %s is plural", user_id)
        return await self.client.exists(f"{PK_KEY}:{user_id}") > 0

    async def cache_launcher_version(self, version: str) -> None:
        """Remember the latest launcher version for a day."""
        log.debug("Caching launcher version as %s", version)
        await self.client.set(LAUNCHER_VERSION_KEY, version, ex=_DAY)

    async def launcher_version(self) -> str:
        """Return the cached launcher version; raise KeyError if none."""
        log.debug("Fetching launcher version")
        value = await self.client.get(LAUNCHER_VERSION_KEY)
        if value is None:
            raise KeyError(LAUNCHER_VERSION_KEY)
        return _text(value)

    async def cache_launcher_stargazer_count(self, count: int) -> None:
        """Remember the stargazer count for an hour."""
        log.debug("Caching stargazer count as %s", count)
        await self.client.set(LAUNCHER_STARGAZER_KEY, count, ex=_HOUR)

    async def launcher_stargazer_count(self) -> int:
        """Return the cached stargazer count; raise KeyError if none."""
        log.debug("Fetching launcher stargazer count")
        value = await self.client.get(LAUNCHER_STARGAZER_KEY)
        if value is None:
            raise KeyError(LAUNCHER_STARGAZER_KEY)
        count = int(_text(value))
        if not 0 <= count < 2**32:
            raise ValueError(f"stargazer count out of range: {count}")
        return count