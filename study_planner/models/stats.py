"""Study statistics models"""
from typing import List
from pydantic import BaseModel


class SubjectTime(BaseModel):
    """Time studied for one subject"""
    subject: str
    time: int
    color: str
    sessions: int


class DailyTime(BaseModel):
    """Time studied on one day (YYYY-MM-DD)"""
    date: str
    time: int


class WeeklyTime(BaseModel):
    """Time studied in one week, keyed by the Sunday that starts it"""
    week: str
    time: int


class StudyStats(BaseModel):
    """Aggregated statistics over finalized study sessions"""
    total_time: int = 0
    sessions_count: int = 0
    average_session: float = 0
    subject_breakdown: List[SubjectTime] = []
    daily_stats: List[DailyTime] = []
    weekly_stats: List[WeeklyTime] = []
