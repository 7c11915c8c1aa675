"""
Study Stats Service

Aggregates finalized study sessions into totals, a per-subject breakdown and
daily / weekly series.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from supabase import Client

from study_planner.models.stats import DailyTime, StudyStats, SubjectTime, WeeklyTime
from study_planner.models.study_session import StudySession
from study_planner.infra.supabase.repositories.study_sessions import StudySessionRepository

logger = logging.getLogger(__name__)


def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def week_start(dt: datetime) -> str:
    """Date (YYYY-MM-DD) of the Sunday starting the week containing ``dt``"""
    day = _as_utc(dt).date()
    days_since_sunday = (day.weekday() + 1) % 7
    return (day - timedelta(days=days_since_sunday)).isoformat()


def aggregate_sessions(sessions: List[StudySession]) -> StudyStats:
    """Reduce finalized sessions into StudyStats. Order of first appearance is kept."""
    total_time = sum(session.duration or 0 for session in sessions)
    sessions_count = len(sessions)
    average_session = total_time / sessions_count if sessions_count > 0 else 0

    subjects: Dict[str, SubjectTime] = {}
    daily: Dict[str, int] = {}
    weekly: Dict[str, int] = {}

    for session in sessions:
        if not session.duration:
            continue

        subject = session.tasks.subjects if session.tasks else None
        if subject:
            if subject.id in subjects:
                subjects[subject.id].time += session.duration
                subjects[subject.id].sessions += 1
            else:
                subjects[subject.id] = SubjectTime(
                    subject=subject.name,
                    time=session.duration,
                    color=subject.color,
                    sessions=1,
                )

        day = _as_utc(session.start_time).date().isoformat()
        daily[day] = daily.get(day, 0) + session.duration

        week = week_start(session.start_time)
        weekly[week] = weekly.get(week, 0) + session.duration

    return StudyStats(
        total_time=total_time,
        sessions_count=sessions_count,
        average_session=average_session,
        subject_breakdown=list(subjects.values()),
        daily_stats=[DailyTime(date=d, time=t) for d, t in daily.items()],
        weekly_stats=[WeeklyTime(week=w, time=t) for w, t in weekly.items()],
    )


class StudyStatsService:
    """Read-side service for study sessions"""

    def __init__(self, supabase_client: Client):
        self.session_repo = StudySessionRepository(supabase_client)

    async def get_recent_sessions(self, limit: int = 50) -> List[StudySession]:
        return await self.session_repo.find_recent(limit)

    async def get_study_stats(self, days: int = 30, now: Optional[datetime] = None) -> StudyStats:
        """
        Aggregate sessions finalized within the last ``days`` days.
        
        Args:
            days: Size of the window
            now: Reference time (defaults to now in UTC)
        """
        if now is None:
            now = datetime.now(timezone.utc)
        since = now - timedelta(days=days)

        sessions = await self.session_repo.find_completed_since(since)
        stats = aggregate_sessions(sessions)
        logger.info(f"Aggregated {stats.sessions_count} study sessions over {days} days")
        return stats
