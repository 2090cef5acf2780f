# tests/conftest.py
# Shared fixtures: isolated settings, a fresh app per test & a hand-driven clock

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.dependencies import get_clock
from app.services.timer_engine import TimerController

WEBHOOK_SECRET = "test-webhook-secret"


class FakeClock:
    # epoch milliseconds, advanced explicitly by tests

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch):
    monkeypatch.setenv("INTERCOM_SECRET", WEBHOOK_SECRET)
    monkeypatch.setenv("HISTORY_DISPLAY_LIMIT", "5")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def controller():
    return TimerController()


@pytest.fixture
def clock():
    return FakeClock(now=1_700_000_000_000)


@pytest.fixture
def app(clock):
    from app.main import create_app

    application = create_app()
    application.dependency_overrides[get_clock] = lambda: clock
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
