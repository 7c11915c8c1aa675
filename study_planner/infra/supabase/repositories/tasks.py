"""Task repository"""
from typing import List, Optional

from supabase import Client  # type: ignore

from study_planner.models.task import Task, TaskCreate, TaskUpdate

from .base import BaseRepository

TASK_SELECT = """
    *,
    subjects (
        id,
        name,
        color
    )
"""


class TaskRepository(BaseRepository[Task, TaskCreate, TaskUpdate]):
    """Repository for task operations"""

    select_columns = TASK_SELECT

    def __init__(self, client: Client, **kwargs):
        super().__init__(client, "tasks", Task, **kwargs)

    async def find_filtered(
        self,
        subject_id: Optional[str] = None,
        lesson: Optional[str] = None,
        type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Task]:
        """Find tasks matching the given filters, newest first

        Filters left as None are not applied.
        """
        filters = {
            "subject_id": subject_id,
            "lesson": lesson,
            "type": type,
            "status": status,
        }

        def build():
            query = self._table().select(self.select_columns)
            for key, value in filters.items():
                if value is not None:
                    query = query.eq(key, value)
            return query.order("created_at", desc=True)

        response = await self._execute("fetch tasks", build)
        return self._to_models(response.data or [])

    async def find_lessons(self, subject_id: Optional[str] = None) -> List[str]:
        """Distinct non-empty lesson names, sorted

        Args:
            subject_id: Restrict to lessons of one subject
        """
        def build():
            query = self._table().select("lesson")
            if subject_id:
                query = query.eq("subject_id", subject_id)
            return query.not_.is_("lesson", "null").neq("lesson", "")

        response = await self._execute("fetch lessons", build)
        lessons = {row["lesson"] for row in response.data or [] if row.get("lesson")}
        return sorted(lessons)
