"""Subject service"""
import logging
from typing import List

from supabase import Client

from study_planner.models.subject import Subject, SubjectCreate
from study_planner.infra.supabase.repositories.subjects import SubjectRepository

logger = logging.getLogger(__name__)


class SubjectService:
    """Service for managing subjects"""

    def __init__(self, supabase_client: Client):
        self.subject_repo = SubjectRepository(supabase_client)

    async def list_subjects(self) -> List[Subject]:
        return await self.subject_repo.find_all_ordered()

    async def create_subject(self, name: str, color: str) -> Subject:
        if not name.strip():
            raise ValueError("Subject name must not be empty")
        subject = await self.subject_repo.create(SubjectCreate(name=name.strip(), color=color))
        logger.info(f"Created subject {subject.id} '{subject.name}'")
        return subject

    async def delete_subject(self, subject_id: str) -> bool:
        success = await self.subject_repo.delete(subject_id)
        if success:
            logger.info(f"Deleted subject {subject_id}")
        return success
