"""
Task Service

Handles business logic for tasks (lessons) including:
- CRUD operations
- Completing and reopening tasks
- Filtered listings and lesson names
"""

import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from supabase import Client

from study_planner.models.task import Task, TaskCreate, TaskStatus, TaskType, TaskUpdate
from study_planner.infra.supabase.repositories.subjects import SubjectRepository
from study_planner.infra.supabase.repositories.tasks import TaskRepository

logger = logging.getLogger(__name__)

# Filter value that disables a filter
ALL = "all"


def _active_filter(value: Optional[str]) -> Optional[str]:
    if not value or value == ALL:
        return None
    return value


class TaskService:
    """Service for managing tasks"""

    def __init__(self, supabase_client: Client):
        self.supabase = supabase_client
        self.task_repo = TaskRepository(supabase_client)
        self.subject_repo = SubjectRepository(supabase_client)

    async def list_tasks(
        self,
        subject: Optional[str] = None,
        lesson: Optional[str] = None,
        type: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Task]:
        """
        List tasks newest first, optionally filtered.
        
        Args:
            subject: Subject name
            lesson: Lesson name
            type: Task type (theory, video, paper)
            status: Task status (todo, done)
            
        A filter given as "all" or left empty is ignored. An unknown subject
        name matches no tasks.
        """
        subject_id = None
        subject_name = _active_filter(subject)
        if subject_name:
            found = await self.subject_repo.find_by_name(subject_name)
            if not found:
                return []
            subject_id = found.id

        task_type = _active_filter(type)
        return await self.task_repo.find_filtered(
            subject_id=subject_id,
            lesson=_active_filter(lesson),
            type=task_type.lower() if task_type else None,
            status=_active_filter(status),
        )

    async def get_task(self, task_id: str) -> Optional[Task]:
        """Get a single task by ID"""
        return await self.task_repo.find_by_id(task_id)

    async def create_task(self, task_data: TaskCreate) -> Task:
        """Create a new task"""
        task = await self.task_repo.create(task_data)
        logger.info(f"Created task {task.id} '{task.title}'")
        return task

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Optional[Task]:
        """
        Update a task.
        
        Returns:
            The updated task if found, None otherwise
        """
        task = await self.task_repo.update(task_id, updates)
        if task:
            logger.info(f"Updated task {task_id}")
        return task

    async def delete_task(self, task_id: str) -> bool:
        """Delete a task, returning False if it did not exist"""
        success = await self.task_repo.delete(task_id)
        if success:
            logger.info(f"Deleted task {task_id}")
        return success

    async def complete_task(self, task_id: str) -> Optional[Task]:
        """Mark a task as done"""
        update_data = TaskUpdate(status=TaskStatus.DONE, completed_at=datetime.now(timezone.utc))
        return await self.update_task(task_id, update_data)

    async def uncomplete_task(self, task_id: str) -> Optional[Task]:
        """Reopen a task"""
        update_data = TaskUpdate(status=TaskStatus.TODO, completed_at=None)
        return await self.update_task(task_id, update_data)

    async def get_lessons(self, subject_id: Optional[str] = None) -> List[str]:
        """Distinct lesson names, sorted, optionally for a single subject"""
        return await self.task_repo.find_lessons(subject_id)

    async def create_lesson(
        self,
        title: Optional[str],
        type: Optional[str],
        subject: Optional[str],
        lesson: Optional[str],
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Task:
        """
        Create a task for a lesson, looking the subject up by name.
        
        Args:
            title: Task title
            type: One of Theory, Video or Paper (case-insensitive)
            subject: Name of an existing subject
            lesson: Lesson name
            due_date: Optional due date
            notes: Optional notes
            
        Raises:
            ValueError: A required field is missing or the type is invalid
            LookupError: No subject has the given name
        """
        if not title or not type or not subject or not lesson:
            raise ValueError("Missing required fields: title, type, subject, lesson")

        try:
            task_type = TaskType(type.lower())
        except ValueError:
            raise ValueError("Invalid type. Must be Theory, Video, or Paper")

        found = await self.subject_repo.find_by_name(subject)
        if not found:
            raise LookupError(f'Subject "{subject}" not found')

        task_data = TaskCreate(
            subject_id=found.id,
            title=title,
            type=task_type,
            status=TaskStatus.TODO,
            lesson=lesson,
            due_date=due_date,
            notes=notes or None,
        )
        return await self.create_task(task_data)
