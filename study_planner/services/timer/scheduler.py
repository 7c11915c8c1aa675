"""Callback scheduling for the study timer, backed by APScheduler"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules one-shot and repeating callbacks. Delays are in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable: ...

    def call_every(self, interval: float, callback: Callable[[], None]) -> Cancellable: ...


class JobHandle:
    """Cancels a scheduled APScheduler job"""

    def __init__(self, job: Job):
        self._job = job
        self._cancelled = False

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        try:
            self._job.remove()
        except JobLookupError:
            # one-shot jobs are dropped by the scheduler once they have run
            pass

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def _on_loop(callback: Callable[[], None]):
    # Sync jobs go to a thread pool under AsyncIOScheduler; the timer's
    # callbacks must run on the event loop.
    async def run():
        callback()

    return run


class AsyncioScheduler:
    """Scheduler backed by APScheduler's AsyncIOScheduler.

    The underlying scheduler is started lazily on the running loop at the
    first call, so an instance can be created before the loop starts.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._scheduler: Optional[AsyncIOScheduler] = None

    def _get_scheduler(self) -> AsyncIOScheduler:
        if self._scheduler is None:
            loop = self._loop or asyncio.get_running_loop()
            self._scheduler = AsyncIOScheduler(event_loop=loop)
            self._scheduler.start()
        return self._scheduler

    def call_later(self, delay: float, callback: Callable[[], None]) -> JobHandle:
        run_date = datetime.now(timezone.utc) + timedelta(seconds=max(0.0, delay))
        job = self._get_scheduler().add_job(
            _on_loop(callback),
            trigger=DateTrigger(run_date=run_date),
            misfire_grace_time=None,
        )
        return JobHandle(job)

    def call_every(self, interval: float, callback: Callable[[], None]) -> JobHandle:
        job = self._get_scheduler().add_job(
            _on_loop(callback),
            trigger=IntervalTrigger(seconds=interval),
            coalesce=True,
            misfire_grace_time=None,
        )
        return JobHandle(job)

    def shutdown(self) -> None:
        """Stop the underlying scheduler, dropping any pending jobs"""
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None
