from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from journal_api.config import get_settings
from journal_api.main import create_app
from journal_api.models.schemas import CreateEventInput, Event, Metric
from journal_api.storage.memory import InMemoryStore, StoreError


class StepClock:
    """Deterministic clock: every call advances by one second."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 5, 12, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


class FailingStore:
    def list_events(self, limit: int | None = None) -> list[Event]:
        raise StoreError("disk unavailable")

    def create_event(self, payload: CreateEventInput) -> Event:
        raise StoreError("disk unavailable")

    def list_metrics(self, count: int | None = None) -> list[Metric]:
        raise StoreError("disk unavailable")


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("LDS_ADDR", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore.seeded(clock=StepClock())


@pytest.fixture
def app(store: InMemoryStore) -> FastAPI:
    return create_app(store=store)


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def failing_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=create_app(store=FailingStore()))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
