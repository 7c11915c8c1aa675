"""Task (lesson) domain model"""
from datetime import datetime, date
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from .subject import SubjectSummary


class TaskType(str, Enum):
    """Kind of study material a task refers to"""
    THEORY = "theory"
    VIDEO = "video"
    PAPER = "paper"


class TaskStatus(str, Enum):
    """Task completion status"""
    TODO = "todo"
    DONE = "done"


class TaskBase(BaseModel):
    """Base task fields for creation"""
    subject_id: str
    title: str
    type: TaskType
    status: TaskStatus = TaskStatus.TODO
    lesson: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None


class TaskCreate(TaskBase):
    """Task creation model"""
    pass


class TaskUpdate(BaseModel):
    """Task update model - all fields optional"""
    subject_id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[TaskType] = None
    status: Optional[TaskStatus] = None
    lesson: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None
    completed_at: Optional[datetime] = None


class Task(TaskBase):
    """Complete task model from database"""
    id: str
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    subjects: Optional[SubjectSummary] = None

    class Config:
        from_attributes = True


class TaskSummary(BaseModel):
    """Task fields embedded in study session selects"""
    id: str
    title: str
    subject_id: str
    subjects: Optional[SubjectSummary] = None
