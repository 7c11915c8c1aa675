# API module exports
from study_planner.api import health, lessons, sessions, subjects, tasks, timer
from study_planner.api.base import api_router

__all__ = ["health", "lessons", "sessions", "subjects", "tasks", "timer", "api_router"]
