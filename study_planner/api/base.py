from fastapi import APIRouter
from study_planner.api import health, lessons, sessions, subjects, tasks, timer

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(timer.router)
api_router.include_router(sessions.router)
api_router.include_router(subjects.router)
api_router.include_router(tasks.router)
api_router.include_router(lessons.router)
