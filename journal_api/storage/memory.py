from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Protocol

from journal_api.models.schemas import CreateEventInput, Event, Metric
from journal_api.storage.locks import ReadWriteLock

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class StoreError(Exception):
    """Raised by a store when an operation cannot be completed."""


class Store(Protocol):
    def list_events(self, limit: int | None = None) -> list[Event]: ...

    def create_event(self, payload: CreateEventInput) -> Event: ...

    def list_metrics(self, count: int | None = None) -> list[Metric]: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _window(requested: int | None, available: int) -> int:
    if requested is None or requested <= 0 or requested > available:
        return available
    return requested


def seed_events(now: datetime) -> list[Event]:
    return [
        Event(
            id=str(uuid.uuid4()),
            title="晨跑 + 冷水澡",
            content="5km 慢跑，冷水澡 3 分钟，感觉专注度拉满。",
            mood="Focused",
            tags=["健康", "晨间例行"],
            media_refs=["file:///Users/me/fitness/2024-05-12-run.gpx"],
            occurred_at=now - timedelta(hours=6),
        ),
        Event(
            id=str(uuid.uuid4()),
            title="午间复盘",
            content="和交易教练复盘两笔亏损，调整出场纪律。",
            mood="Calm",
            tags=["理财", "复盘"],
            media_refs=["file:///Users/me/memos/2024-05-12-notes.md"],
            occurred_at=now - timedelta(hours=2),
        ),
    ]


def seed_metrics(now: datetime, days: int = 7) -> list[Metric]:
    base = now - timedelta(days=days - 1)
    return [
        Metric(
            id=str(uuid.uuid4()),
            sheet="health",
            name="活力指数",
            date=base + timedelta(days=i),
            open=70 + i,
            high=72 + i,
            low=68 + i,
            close=71 + i,
            events=[],
        )
        for i in range(days)
    ]


class InMemoryStore:
    """Process-local event and metric store.

    Both collections sit behind one reader/writer lock: listings share it,
    event creation holds it exclusively. Results are deep copies, so callers
    never see a live view of the collections.
    """

    def __init__(
        self,
        events: list[Event] | None = None,
        metrics: list[Metric] | None = None,
        clock: Clock = _utcnow,
    ) -> None:
        self._lock = ReadWriteLock()
        self._clock = clock
        self._events: list[Event] = list(events or [])
        self._metrics: list[Metric] = list(metrics or [])

    @classmethod
    def seeded(cls, clock: Clock = _utcnow) -> InMemoryStore:
        now = clock()
        return cls(events=seed_events(now), metrics=seed_metrics(now), clock=clock)

    def list_events(self, limit: int | None = None) -> list[Event]:
        with self._lock.read():
            snapshot = [evt.model_copy(deep=True) for evt in self._events]

        # newest first; stable sort keeps storage order for equal timestamps
        snapshot.sort(key=lambda evt: evt.occurred_at, reverse=True)
        return snapshot[: _window(limit, len(snapshot))]

    def create_event(self, payload: CreateEventInput) -> Event:
        with self._lock.write():
            event = Event(
                id=str(uuid.uuid4()),
                title=payload.title,
                content=payload.content,
                mood=payload.mood,
                tags=list(payload.tags),
                media_refs=list(payload.media_refs),
                occurred_at=self._clock(),
            )
            self._events.append(event)
            total = len(self._events)

        logger.debug("event_created id=%s total=%d", event.id, total)
        return event.model_copy(deep=True)

    def list_metrics(self, count: int | None = None) -> list[Metric]:
        with self._lock.read():
            window = _window(count, len(self._metrics))
            latest = self._metrics[len(self._metrics) - window :]
            snapshot = [metric.model_copy(deep=True) for metric in latest]

        snapshot.sort(key=lambda metric: metric.date)
        return snapshot
