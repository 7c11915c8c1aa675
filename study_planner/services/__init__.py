"""Services module"""
from study_planner.services.subject_service import SubjectService
from study_planner.services.study_stats_service import StudyStatsService, aggregate_sessions
from study_planner.services.task import TaskService

__all__ = [
    "SubjectService",
    "StudyStatsService",
    "aggregate_sessions",
    "TaskService",
]
