from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.services.stats_service import FocusStatsTracker
from app.services.stats_store import StatsStore

STATS_KEY = "pomodoro-stats"


class FakeRedis:
    """In-memory Redis mock for testing."""

    def __init__(self):
        self._store: dict[str, str] = {}
        self.set_calls = 0

    async def get(self, key: str) -> str | None:
        return self._store.get(key)

    async def set(self, key: str, value: str, ex: int | None = None) -> None:
        self._store[key] = str(value)
        self.set_calls += 1

    async def delete(self, key: str) -> int:
        return 1 if self._store.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class FakeClock:
    """Controllable wall clock; call it like ``datetime.now``."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self.now += timedelta(days=days, hours=hours)

    @property
    def today(self) -> str:
        return self.now.date().isoformat()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 3, 10, 9, 30))


@pytest.fixture
def store(fake_redis: FakeRedis) -> StatsStore:
    return StatsStore(fake_redis, STATS_KEY)


@pytest.fixture
async def tracker(store: StatsStore, clock: FakeClock) -> FocusStatsTracker:
    tracker = FocusStatsTracker(store, clock=clock)
    await tracker.load()
    return tracker


@pytest.fixture
async def client(tracker: FocusStatsTracker, fake_redis: FakeRedis) -> AsyncGenerator[AsyncClient, None]:
    app.state.redis = fake_redis
    app.state.stats_tracker = tracker

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
