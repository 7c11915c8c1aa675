"""Dependency providers for API routers"""
from typing import Optional

from fastapi import Depends
from supabase import Client

from study_planner import config
from study_planner.infra.supabase.client import get_supabase_client
from study_planner.infra.supabase.repositories.study_sessions import StudySessionRepository
from study_planner.services.study_stats_service import StudyStatsService
from study_planner.services.subject_service import SubjectService
from study_planner.services.task import TaskService
from study_planner.services.timer import AsyncioScheduler, StudyTimer, WebhookBreakNotifier

# One timer per process: one concurrent study occasion
_study_timer: Optional[StudyTimer] = None
_timer_scheduler: Optional[AsyncioScheduler] = None


def get_task_service(client: Client = Depends(get_supabase_client)) -> TaskService:
    return TaskService(client)


def get_subject_service(client: Client = Depends(get_supabase_client)) -> SubjectService:
    return SubjectService(client)


def get_stats_service(client: Client = Depends(get_supabase_client)) -> StudyStatsService:
    return StudyStatsService(client)


def get_study_timer() -> StudyTimer:
    """Get or create the process-wide study timer"""
    global _study_timer, _timer_scheduler

    if _study_timer is None:
        store = StudySessionRepository(get_supabase_client())
        notifier = WebhookBreakNotifier(config.BREAK_REMINDER_WEBHOOK_URL)
        _timer_scheduler = AsyncioScheduler()
        _study_timer = StudyTimer(store, scheduler=_timer_scheduler, notifier=notifier)

    return _study_timer


def reset_study_timer():
    """Tear down the study timer, cancelling its scheduled callbacks"""
    global _study_timer, _timer_scheduler

    if _study_timer is not None:
        _study_timer.close()
    if _timer_scheduler is not None:
        _timer_scheduler.shutdown()
    _study_timer = None
    _timer_scheduler = None
