"""Shared test fixtures."""

import uuid

import pytest
from httpx import ASGITransport, AsyncClient
from redis.exceptions import LockNotOwnedError

from src.main import app


class InMemoryLock:
    """Non-blocking token lock with redis.asyncio.lock.Lock's acquire/release contract."""

    def __init__(self, redis: "InMemoryRedis", name: str, timeout: float | None) -> None:
        self._redis = redis
        self.name = name
        self.timeout = timeout
        self.token: str | None = None

    async def acquire(self) -> bool:
        token = uuid.uuid4().hex
        ttl = int(self.timeout) if self.timeout is not None else None
        if not await self._redis.set(self.name, token, ex=ttl, nx=True):
            return False
        self.token = token
        return True

    async def release(self) -> None:
        if self._redis.store.get(self.name) != self.token:
            raise LockNotOwnedError("Cannot release a lock that's no longer owned")
        await self._redis.delete(self.name)
        self.token = None


class InMemoryRedis:
    """The handful of redis.asyncio calls the services make, backed by a dict.

    TTLs are recorded but never expire.
    """

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def set(
        self, key: str, value: str, ex: int | None = None, nx: bool = False
    ) -> bool | None:
        if nx and key in self.store:
            return None
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    def lock(
        self, name: str, timeout: float | None = None, blocking: bool = True
    ) -> InMemoryLock:
        assert blocking is False, "services only take non-blocking locks"
        return InMemoryLock(self, name, timeout)


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
