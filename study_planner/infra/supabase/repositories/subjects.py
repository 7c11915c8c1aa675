"""Subject repository"""
from typing import List, Optional

from supabase import Client  # type: ignore

from study_planner.models.subject import Subject, SubjectCreate

from .base import BaseRepository


class SubjectRepository(BaseRepository[Subject, SubjectCreate, SubjectCreate]):
    """Repository for subject operations"""

    def __init__(self, client: Client, **kwargs):
        super().__init__(client, "subjects", Subject, **kwargs)

    async def find_all_ordered(self) -> List[Subject]:
        """All subjects ordered by name"""
        return await self.find_all(order_by="name")

    async def find_by_name(self, name: str) -> Optional[Subject]:
        """Find a subject by its exact name"""
        subjects = await self.find_by_filters({"name": name}, limit=1)
        return subjects[0] if subjects else None
