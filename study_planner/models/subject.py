"""Subject domain model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class SubjectBase(BaseModel):
    """Base subject fields"""
    name: str
    color: str  # hex colour used by the dashboard, e.g. "#3b82f6"


class SubjectCreate(SubjectBase):
    """Subject creation model"""
    pass


class SubjectSummary(BaseModel):
    """Subject fields embedded in task and session selects"""
    id: str
    name: str
    color: str


class Subject(SubjectBase):
    """Complete subject model from database"""
    id: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
