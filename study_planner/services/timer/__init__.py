"""Study timer module"""
from .errors import InvalidState, NotificationUnavailable
from .models.timer_state import TimerPhase, TimerSnapshot
from .notifier import BreakNotifier, WebhookBreakNotifier
from .scheduler import AsyncioScheduler, Scheduler
from .study_timer import (
    BREAK_REMINDER_SECONDS,
    SessionStore,
    StudyTimer,
    format_time,
)

__all__ = [
    "InvalidState",
    "NotificationUnavailable",
    "TimerPhase",
    "TimerSnapshot",
    "BreakNotifier",
    "WebhookBreakNotifier",
    "AsyncioScheduler",
    "Scheduler",
    "BREAK_REMINDER_SECONDS",
    "SessionStore",
    "StudyTimer",
    "format_time",
]
