import httpx
import pytest
import respx

from refraction_bot.api import HttpClient
from refraction_bot.consts import Colors
from refraction_bot.launcher import launcher_version, stargazer_count, stars_embed
from refraction_bot.storage import Storage

REPO = "https://api.github.com/repos/PrismLauncher/PrismLauncher"


class FakeRedis:
    def __init__(self):
        self.data = {}

    async def set(self, key, value, ex=None):
        self.data[key] = str(value).encode()
        return True

    async def get(self, key):
        return self.data.get(key)

    async def exists(self, *keys):
        return sum(key in self.data for key in keys)

    async def ping(self):
        return True


def test_stars_embed():
    embed = stars_embed(5)
    assert embed.title == "⭐ 5 total stars!"
    assert embed.color == Colors.YELLOW


@pytest.mark.asyncio
async def test_version_without_storage():
    with respx.mock:
        respx.get(f"{REPO}/releases/latest").mock(
            return_value=httpx.Response(200, json={"tag_name": "9.1"})
        )
        async with HttpClient() as http:
            assert await launcher_version(http, None) == "9.1"


@pytest.mark.asyncio
async def test_version_is_fetched_then_cached():
    storage = Storage(FakeRedis())
    with respx.mock:
        route = respx.get(f"{REPO}/releases/latest").mock(
            return_value=httpx.Response(200, json={"tag_name": "9.1"})
        )
        async with HttpClient() as http:
            assert await launcher_version(http, storage) == "9.1"
            assert await launcher_version(http, storage) == "9.1"
        assert route.call_count == 1
    assert await storage.launcher_version() == "9.1"


@pytest.mark.asyncio
async def test_cached_version_skips_network():
    storage = Storage(FakeRedis())
    await storage.cache_launcher_version("8.0")
    with respx.mock:
        route = respx.get(f"{REPO}/releases/latest").mock(
            return_value=httpx.Response(200, json={"tag_name": "9.1"})
        )
        async with HttpClient() as http:
            assert await launcher_version(http, storage) == "8.0"
        assert not route.called


@pytest.mark.asyncio
async def test_stargazers_fetched_then_cached():
    storage = Storage(FakeRedis())
    with respx.mock:
        route = respx.get(REPO).mock(
            return_value=httpx.Response(200, json={"stargazers_count": 77})
        )
        async with HttpClient() as http:
            assert await stargazer_count(http, storage) == 77
            assert await stargazer_count(http, storage) == 77
        assert route.call_count == 1
    assert await storage.launcher_stargazer_count() == 77


@pytest.mark.asyncio
async def test_stargazers_without_storage():
    with respx.mock:
        respx.get(REPO).mock(
            return_value=httpx.Response(200, json={"stargazers_count": 12})
        )
        async with HttpClient() as http:
            assert await stargazer_count(http) == 12