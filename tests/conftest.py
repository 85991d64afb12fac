"""Pytest configuration and fixtures for NameScout tests."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from namescout.config import Settings
from namescout.main import create_app
from namescout.services.ai_quota import AdmissionGate, CooldownGate, GlobalDailyQuota
from namescout.services.quota_store import QuotaStore

START = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc).timestamp()


class FakeClock:
    """Manually advanced epoch-seconds clock."""

    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def advance_ms(self, ms: int) -> None:
        self.now += ms / 1000


class FakeNameGenerator:
    def __init__(self, suggestions=None, error=None):
        self.suggestions = suggestions or ["brightly", "pathio"]
        self.error = error
        self.calls = []

    async def generate(self, name, count=10):
        self.calls.append((name, count))
        if self.error is not None:
            raise self.error
        return self.suggestions[:count]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "data" / "ai-rate-limits.json"


@pytest.fixture
def store(state_file, clock):
    return QuotaStore(state_file, clock=clock)


@pytest.fixture
def cooldown_gate(store, clock):
    return CooldownGate(store, cooldown_ms=60_000, sweep_threshold=50, clock=clock)


@pytest.fixture
def daily_quota(store, clock):
    return GlobalDailyQuota(store, daily_limit=50, clock=clock)


@pytest.fixture
def gate(store, cooldown_gate, daily_quota, clock):
    return AdmissionGate(store, cooldown_gate, daily_quota, clock=clock)


@pytest.fixture
def settings(state_file):
    return Settings(
        RATE_LIMIT_FILE=str(state_file),
        GOOGLE_API_KEY="",
        AI_DAILY_LIMIT=3,
        AI_COOLDOWN_SECONDS=60,
        EDGE_RATE_LIMIT_MAX=100,
    )


@pytest.fixture
def app(settings, clock):
    application = create_app(settings, clock=clock)
    application.state.name_generator = FakeNameGenerator()
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
