"""Study session repository"""
from datetime import datetime, timezone
from typing import List, Optional

from supabase import Client  # type: ignore

from study_planner.infra.supabase.errors import StoreError
from study_planner.models.study_session import (
    StudySession,
    StudySessionCreate,
    StudySessionFinalize,
)

from .base import BaseRepository

SESSION_SELECT = """
    *,
    tasks (
        id,
        title,
        subject_id,
        subjects (
            id,
            name,
            color
        )
    )
"""


class StudySessionRepository(BaseRepository[StudySession, StudySessionCreate, StudySessionFinalize]):
    """Repository for study session operations

    Implements the session store used by the study timer.
    """

    select_columns = SESSION_SELECT

    def __init__(self, client: Client, **kwargs):
        super().__init__(client, "study_sessions", StudySession, **kwargs)

    async def create_session(self, task_id: str) -> StudySession:
        """Open a new session for a task, starting now"""
        data = StudySessionCreate(task_id=task_id, start_time=datetime.now(timezone.utc))
        return await self.create(data)

    async def finalize_session(
        self,
        session_id: str,
        duration: int,
        notes: Optional[str] = None,
    ) -> StudySession:
        """Close a session with its active duration in seconds"""
        data = StudySessionFinalize(
            end_time=datetime.now(timezone.utc),
            duration=duration,
            notes=notes,
        )
        session = await self.update(session_id, data)

        if session is None:
            raise StoreError("end study session", LookupError(f"study session {session_id} not found"))

        return session

    async def find_recent(self, limit: int = 50) -> List[StudySession]:
        """Most recent sessions first"""
        return await self.find_all(limit=limit, order_by="start_time", desc=True)

    async def find_completed_since(self, start: datetime) -> List[StudySession]:
        """Finalized sessions started at or after ``start``, oldest first"""
        response = await self._execute(
            "fetch study stats",
            lambda: (
                self._table()
                .select(self.select_columns)
                .gte("start_time", start.isoformat())
                .not_.is_("duration", "null")
                .order("start_time")
            ),
        )
        return self._to_models(response.data or [])
