from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from ingestion.web import get_http_client
from main import app
from services.gateway import CompletionGateway, get_gateway
from services.store import ContentStore, get_store


class FakePipeline:
    """Queues list commands and replays them against FakeRedis on execute."""

    def __init__(self, redis: "FakeRedis"):
        self._redis = redis
        self._commands: List[tuple] = []

    def lpush(self, *args):
        self._commands.append(("lpush", args))
        return self

    def ltrim(self, *args):
        self._commands.append(("ltrim", args))
        return self

    async def execute(self):
        self._redis.transactions += 1
        return [await getattr(self._redis, name)(*args) for name, args in self._commands]


class FakeRedis:
    """In-memory stand-in for the subset of redis.asyncio.Redis the store uses."""

    def __init__(self):
        self.values: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.lists: Dict[str, List[str]] = {}
        self.transactions = 0
        self.closed = False

    async def ping(self):
        return True

    async def setex(self, key: str, ttl: int, value: str):
        self.values[key] = value
        self.ttls[key] = ttl
        return True

    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        return [self.values.get(key) for key in keys]

    async def lpush(self, key: str, *members: str) -> int:
        items = self.lists.setdefault(key, [])
        for member in members:
            items.insert(0, member)
        return len(items)

    async def ltrim(self, key: str, start: int, end: int):
        items = self.lists.get(key, [])
        self.lists[key] = items[start:] if end == -1 else items[start:end + 1]
        return True

    async def lrange(self, key: str, start: int, end: int) -> List[str]:
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        return FakePipeline(self)

    async def aclose(self):
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def store(fake_redis) -> ContentStore:
    return ContentStore(fake_redis)


@pytest.fixture
def gateway() -> CompletionGateway:
    """Gateway without an API key: every completion is the not-configured reply."""
    return CompletionGateway(None)


@pytest.fixture
def web_pages() -> Dict[str, Any]:
    """Map of URL -> HTML body (or an exception instance) served to the upload router."""
    return {}


@pytest_asyncio.fixture
async def http_client(web_pages):
    def handler(request: httpx.Request) -> httpx.Response:
        page = web_pages.get(str(request.url))
        if isinstance(page, Exception):
            raise page
        if page is None:
            return httpx.Response(404, text="<html><body>Not Found</body></html>")
        return httpx.Response(200, text=page)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest_asyncio.fixture
async def api_client(store, gateway, http_client):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_http_client] = lambda: http_client
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
