"""Repository exports"""
from .subjects import SubjectRepository
from .tasks import TaskRepository
from .study_sessions import StudySessionRepository


__all__ = [
    'SubjectRepository',
    'TaskRepository',
    'StudySessionRepository',
]
