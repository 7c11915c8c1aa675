"""Domain models for the application"""
from .subject import Subject, SubjectCreate, SubjectSummary
from .task import Task, TaskCreate, TaskUpdate, TaskSummary, TaskType, TaskStatus
from .study_session import StudySession, StudySessionCreate, StudySessionFinalize
from .stats import StudyStats, SubjectTime, DailyTime, WeeklyTime

__all__ = [
    'Subject', 'SubjectCreate', 'SubjectSummary',
    'Task', 'TaskCreate', 'TaskUpdate', 'TaskSummary', 'TaskType', 'TaskStatus',
    'StudySession', 'StudySessionCreate', 'StudySessionFinalize',
    'StudyStats', 'SubjectTime', 'DailyTime', 'WeeklyTime',
]
