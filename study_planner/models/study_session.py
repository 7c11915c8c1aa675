"""Study session domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .task import TaskSummary


class StudySessionCreate(BaseModel):
    """Study session creation model"""
    task_id: str
    start_time: datetime


class StudySessionFinalize(BaseModel):
    """Fields written exactly once when a session is closed"""
    end_time: datetime
    duration: int = Field(ge=0)  # seconds of active study time
    notes: Optional[str] = None


class StudySession(BaseModel):
    """Complete study session model from database

    A session is open while ``end_time`` and ``duration`` are unset.
    """
    id: str
    task_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    tasks: Optional[TaskSummary] = None

    class Config:
        from_attributes = True

    @property
    def is_open(self) -> bool:
        return self.end_time is None and self.duration is None
