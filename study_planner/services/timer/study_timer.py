"""
Study Timer

Measures active study time for one task across pause/resume cycles and hands
a single finalized duration to the session store.

Active time is always recomputed from wall-clock timestamps:

    elapsed = floor((now - session_start - paused_total) / 1000)

Paused time is subtracted wholesale at resume, so long pauses and late ticks
never cause drift. The periodic tick only refreshes the display value.
"""

import asyncio
import inspect
import logging
import time
from typing import Callable, Optional, Protocol, Set

from study_planner.models.study_session import StudySession

from .errors import InvalidState
from .models.timer_state import TimerPhase, TimerSnapshot
from .notifier import BREAK_REMINDER_BODY, BREAK_REMINDER_TITLE, BreakNotifier
from .scheduler import AsyncioScheduler, Cancellable, Scheduler

logger = logging.getLogger(__name__)

BREAK_REMINDER_SECONDS = 25 * 60
TICK_INTERVAL_SECONDS = 1.0


class SessionStore(Protocol):
    """Persistence collaborator for study sessions"""

    async def create_session(self, task_id: str) -> StudySession: ...

    async def finalize_session(
        self, session_id: str, duration: int, notes: Optional[str] = None
    ) -> StudySession: ...


def wall_clock_ms() -> float:
    return time.time() * 1000


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS, or HH:MM:SS from one hour up."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    if hours > 0:
        return f"{hours:02}:{minutes:02}:{secs:02}"
    return f"{minutes:02}:{secs:02}"


class StudyTimer:
    """Stopwatch state machine: idle -> running <-> paused -> idle.

    ``start`` and ``stop`` await the session store; ``pause`` and ``resume``
    are synchronous. One instance tracks at most one open session.
    """

    def __init__(
        self,
        store: SessionStore,
        scheduler: Optional[Scheduler] = None,
        notifier: Optional[BreakNotifier] = None,
        clock: Callable[[], float] = wall_clock_ms,
        on_tick: Optional[Callable[[int], None]] = None,
        on_session_complete: Optional[Callable[[StudySession], None]] = None,
        break_after_seconds: int = BREAK_REMINDER_SECONDS,
        tick_interval: float = TICK_INTERVAL_SECONDS,
    ):
        self._store = store
        self._scheduler = scheduler or AsyncioScheduler()
        self._notifier = notifier
        self._clock = clock
        self._on_tick = on_tick
        self._on_session_complete = on_session_complete
        self._break_after_ms = break_after_seconds * 1000
        self._tick_interval = tick_interval

        self._phase = TimerPhase.IDLE
        self._elapsed = 0
        self._session: Optional[StudySession] = None
        self._session_start_ms = 0.0
        self._paused_accumulator_ms = 0.0
        self._run_segment_start_ms = 0.0
        self._pause_start_ms = 0.0

        self._tick_handle: Optional[Cancellable] = None
        self._reminder_handle: Optional[Cancellable] = None
        self._reminder_fired = False
        self._starting = False
        self._stopping = False
        self._pending_notifications: Set[asyncio.Future] = set()

        self._has_notification_permission = self._request_notification_permission()

    # ---- read-only state ----

    @property
    def phase(self) -> TimerPhase:
        return self._phase

    @property
    def current_session(self) -> Optional[StudySession]:
        return self._session

    @property
    def elapsed_seconds(self) -> int:
        """Active seconds, live while running and frozen while paused"""
        if self._phase == TimerPhase.RUNNING:
            return self._compute_elapsed(self._clock())
        return self._elapsed

    @property
    def break_reminder_fired(self) -> bool:
        return self._reminder_fired

    def snapshot(self) -> TimerSnapshot:
        elapsed = self.elapsed_seconds
        return TimerSnapshot(
            phase=self._phase,
            elapsed_seconds=elapsed,
            formatted_time=format_time(elapsed),
            current_session=self._session,
            break_reminder_fired=self._reminder_fired,
            has_notification_permission=self._has_notification_permission,
        )

    # ---- transitions ----

    async def start(self, task_id: str) -> StudySession:
        """Open a session for ``task_id`` and start counting.

        Raises:
            InvalidState: A session is already open or being opened
            StoreError: The store could not create the session; timer stays idle
        """
        if self._phase != TimerPhase.IDLE or self._starting:
            raise InvalidState("start", self._phase.value)

        self._starting = True
        try:
            session = await self._store.create_session(task_id)
        except Exception as e:
            logger.error(f"Error starting study session for task {task_id}: {e}")
            raise
        finally:
            self._starting = False

        now = self._clock()
        self._session = session
        self._elapsed = 0
        self._session_start_ms = now
        self._run_segment_start_ms = now
        self._paused_accumulator_ms = 0.0
        self._pause_start_ms = 0.0
        self._reminder_fired = False
        self._phase = TimerPhase.RUNNING

        try:
            self._start_tick()
            self._schedule_reminder(self._break_after_ms)
        except Exception:
            self._cancel_timers()
            self._reset()
            raise

        logger.info(f"Study session {session.id} started for task {task_id}")
        return session

    def pause(self) -> None:
        """Freeze active time. Ignored when already paused.

        Raises:
            InvalidState: No session is running, or a stop is in flight
        """
        if self._phase == TimerPhase.PAUSED:
            return
        if self._phase == TimerPhase.IDLE or self._stopping:
            raise InvalidState("pause", self._phase.value)

        now = self._clock()
        self._cancel_timers()
        self._elapsed = self._compute_elapsed(now)
        self._pause_start_ms = now
        self._phase = TimerPhase.PAUSED
        logger.debug(f"Study session {self._session.id} paused at {self._elapsed}s")

    def resume(self) -> None:
        """Continue counting after a pause. No-op unless paused."""
        if self._phase != TimerPhase.PAUSED or self._stopping:
            return

        now = self._clock()
        self._paused_accumulator_ms += now - self._pause_start_ms
        self._pause_start_ms = 0.0
        self._run_segment_start_ms = now
        self._phase = TimerPhase.RUNNING
        self._start_tick()
        if not self._reminder_fired:
            self._schedule_reminder(self._break_after_ms - self._active_ms(now))
        logger.debug(f"Study session {self._session.id} resumed at {self._elapsed}s")

    async def stop(self, notes: Optional[str] = None) -> Optional[StudySession]:
        """Finalize the open session with its active duration.

        Returns None when there is nothing to stop, including while another
        stop is already finalizing the same session.

        Raises:
            StoreError: Finalization failed; phase, session and duration are kept
        """
        if self._session is None or self._stopping:
            return None

        self._stopping = True
        now = self._clock()
        self._cancel_timers()
        if self._phase == TimerPhase.RUNNING:
            self._elapsed = self._compute_elapsed(now)

        session = self._session
        duration = self._elapsed
        try:
            completed = await self._store.finalize_session(session.id, duration, notes)
        except BaseException as e:
            # Also on cancellation: a running timer must keep its tick and reminder
            logger.error(f"Error ending study session {session.id}: {e!r}")
            if self._phase == TimerPhase.RUNNING:
                self._start_tick()
                if not self._reminder_fired:
                    self._schedule_reminder(self._break_after_ms - self._active_ms(self._clock()))
            raise
        finally:
            self._stopping = False

        self._reset()
        logger.info(f"Study session {session.id} completed: {duration // 60}m {duration % 60}s")

        if self._on_session_complete:
            self._on_session_complete(completed)
        return completed

    def close(self) -> None:
        """Cancel scheduled work. The open session, if any, is left untouched."""
        self._cancel_timers()

    # ---- internals ----

    def _active_ms(self, now: float) -> float:
        if self._phase == TimerPhase.PAUSED:
            now = self._pause_start_ms
        return max(0.0, now - self._session_start_ms - self._paused_accumulator_ms)

    def _compute_elapsed(self, now: float) -> int:
        return int(self._active_ms(now) // 1000)

    def _start_tick(self) -> None:
        self._tick_handle = self._scheduler.call_every(self._tick_interval, self._on_tick_fired)

    def _schedule_reminder(self, delay_ms: float) -> None:
        self._reminder_handle = self._scheduler.call_later(
            max(0.0, delay_ms) / 1000, self._on_break_reminder
        )

    def _cancel_timers(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._reminder_handle is not None:
            self._reminder_handle.cancel()
            self._reminder_handle = None

    def _reset(self) -> None:
        self._phase = TimerPhase.IDLE
        self._session = None
        self._elapsed = 0
        self._session_start_ms = 0.0
        self._paused_accumulator_ms = 0.0
        self._run_segment_start_ms = 0.0
        self._pause_start_ms = 0.0
        self._reminder_fired = False

    def _on_tick_fired(self) -> None:
        if self._phase != TimerPhase.RUNNING:
            return
        self._elapsed = self._compute_elapsed(self._clock())
        if self._on_tick:
            self._on_tick(self._elapsed)

    def _on_break_reminder(self) -> None:
        self._reminder_handle = None
        if self._phase != TimerPhase.RUNNING:
            return
        self._reminder_fired = True
        logger.info(f"Break reminder for study session {self._session.id}")
        self._send_break_notification()

    def _request_notification_permission(self) -> bool:
        if self._notifier is None:
            return False
        try:
            return bool(self._notifier.request_permission())
        except Exception as e:
            logger.warning(f"Notification permission unavailable: {e}")
            return False

    def _send_break_notification(self) -> None:
        if not self._has_notification_permission:
            return
        try:
            result = self._notifier.notify(BREAK_REMINDER_TITLE, BREAK_REMINDER_BODY)
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._pending_notifications.add(task)
                task.add_done_callback(self._on_notification_done)
        except Exception as e:
            logger.warning(f"Break reminder not delivered: {e}")

    def _on_notification_done(self, task: asyncio.Future) -> None:
        self._pending_notifications.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Break reminder not delivered: {error}")
