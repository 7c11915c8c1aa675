"""Shared fakes for study timer tests: a manual clock, a scheduler driven by
that clock, and an in-memory session store."""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import pytest

from study_planner.models.study_session import StudySession


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now_ms: float = 0.0):
        self.now_ms = now_ms

    def __call__(self) -> float:
        return self.now_ms


class FakeHandle:
    def __init__(self, due_ms: float, callback: Callable[[], None], interval_ms: Optional[float] = None):
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Fires callbacks in due order as ``advance`` moves the clock forward."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.handles: List[FakeHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.clock.now_ms + delay * 1000, callback)
        self.handles.append(handle)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(self.clock.now_ms + interval * 1000, callback, interval * 1000)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.clock.now_ms + seconds * 1000
        while True:
            due = [h for h in self.pending if h.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due_ms)
            self.clock.now_ms = max(self.clock.now_ms, handle.due_ms)
            if handle.interval_ms is None:
                handle.cancelled = True
            else:
                handle.due_ms += handle.interval_ms
            handle.callback()
        self.clock.now_ms = target


class FakeSessionStore:
    """In-memory session store. Set ``fail_create`` / ``fail_finalize`` to an
    exception to make the next calls raise it."""

    def __init__(self):
        self.created: List[StudySession] = []
        self.finalize_calls: List[tuple] = []
        self.finalized: List[StudySession] = []
        self.fail_create: Optional[Exception] = None
        self.fail_finalize: Optional[Exception] = None
        self._started_at = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)

    async def create_session(self, task_id: str) -> StudySession:
        await asyncio.sleep(0)
        if self.fail_create is not None:
            raise self.fail_create
        session = StudySession(
            id=f"session-{len(self.created) + 1}",
            task_id=task_id,
            start_time=self._started_at,
        )
        self.created.append(session)
        return session

    async def finalize_session(self, session_id: str, duration: int, notes: Optional[str] = None) -> StudySession:
        self.finalize_calls.append((session_id, duration, notes))
        await asyncio.sleep(0)
        if self.fail_finalize is not None:
            raise self.fail_finalize
        opened = next(s for s in self.created if s.id == session_id)
        closed = opened.model_copy(update={
            "end_time": opened.start_time + timedelta(seconds=duration),
            "duration": duration,
            "notes": notes,
        })
        self.finalized.append(closed)
        return closed


class FakeNotifier:
    def __init__(self, permitted: bool = True, error: Optional[Exception] = None):
        self.permitted = permitted
        self.error = error
        self.sent: List[tuple] = []

    def request_permission(self) -> bool:
        return self.permitted

    def notify(self, title: str, body: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((title, body))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return FakeScheduler(clock)


@pytest.fixture
def store():
    return FakeSessionStore()


@pytest.fixture
def notifier():
    return FakeNotifier()
