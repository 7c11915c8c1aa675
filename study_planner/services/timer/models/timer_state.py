"""Timer state models"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from study_planner.models.study_session import StudySession


class TimerPhase(str, Enum):
    """Timer phase"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class TimerSnapshot(BaseModel):
    """Read-only view of a study timer"""
    phase: TimerPhase = TimerPhase.IDLE
    elapsed_seconds: int = 0  # active (non-paused) time
    formatted_time: str = "00:00"
    current_session: Optional[StudySession] = None
    break_reminder_fired: bool = False
    has_notification_permission: bool = False
