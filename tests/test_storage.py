import pytest
import redis

from refraction_bot.storage import (
    LAUNCHER_STARGAZER_KEY,
    LAUNCHER_VERSION_KEY,
    Storage,
)


class FakeRedis:
    def __init__(self, reachable=True):
        self.reachable = reachable
        self.data = {}
        self.expiry = {}

    async def set(self, key, value, ex=None):
        self.data[key] = str(value).encode()
        self.expiry[key] = ex
        return True

    async def get(self, key):
        return self.data.get(key)

    async def exists(self, *keys):
        return sum(key in self.data for key in keys)

    async def ping(self):
        if not self.reachable:
            raise redis.ConnectionError("down")
        return True


def test_from_url_uses_given_port():
    storage = Storage.from_url("redis://localhost:6390/0")
    assert storage.client.connection_pool.connection_kwargs["port"] == 6390


@pytest.mark.asyncio
async def test_has_connection():
    assert await Storage(FakeRedis()).has_connection() is True
    assert await Storage(FakeRedis(reachable=False)).has_connection() is False


@pytest.mark.asyncio
async def test_user_plurality_round_trip():
    fake = FakeRedis()
    storage = Storage(fake)
    assert await storage.is_user_plural(99) is False
    await storage.store_user_plurality(99)
    assert await storage.is_user_plural(99) is True
    assert await storage.is_user_plural(100) is False
    assert fake.expiry["pluralkit-v1:99"] == 7 * 24 * 60 * 60


@pytest.mark.asyncio
async def test_launcher_version_round_trip():
    fake = FakeRedis()
    storage = Storage(fake)
    await storage.cache_launcher_version("8.4")
    assert await storage.launcher_version() == "8.4"
    assert fake.expiry[LAUNCHER_VERSION_KEY] == 24 * 60 * 60


@pytest.mark.asyncio
async def test_launcher_version_missing():
    with pytest.raises(KeyError):
        await Storage(FakeRedis()).launcher_version()


@pytest.mark.asyncio
async def test_stargazer_count_round_trip():
    fake = FakeRedis()
    storage = Storage(fake)
    await storage.cache_launcher_stargazer_count(1234)
    assert await storage.launcher_stargazer_count() == 1234
    assert fake.expiry[LAUNCHER_STARGAZER_KEY] == 60 * 60


@pytest.mark.asyncio
async def test_stargazer_count_missing_and_bad():
    fake = FakeRedis()
    storage = Storage(fake)
    with pytest.raises(KeyError):
        await storage.launcher_stargazer_count()
    fake.data[LAUNCHER_STARGAZER_KEY] = b"many"
    with pytest.raises(ValueError):
        await storage.launcher_stargazer_count()