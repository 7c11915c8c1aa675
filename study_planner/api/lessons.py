"""Lesson endpoints: filtered task listings and lesson creation by subject name"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from study_planner.api.deps import get_task_service
from study_planner.models.task import Task
from study_planner.services.task import TaskService

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


class CreateLessonRequest(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    subject: Optional[str] = None
    lesson: Optional[str] = None
    dueDate: Optional[date] = None
    notes: Optional[str] = None


class LessonResponse(BaseModel):
    success: bool
    data: Task
    message: str


class LessonListResponse(BaseModel):
    success: bool
    data: List[Task]
    count: int


class LessonNamesResponse(BaseModel):
    lessons: List[str]


@router.get("", response_model=LessonListResponse)
async def list_lessons(
    subject: Optional[str] = None,
    lesson: Optional[str] = None,
    type: Optional[str] = None,
    status: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
):
    """
    List tasks filtered by subject name, lesson, type and status.
    
    Any filter may be omitted or given as "all".
    """
    tasks = await service.list_tasks(subject=subject, lesson=lesson, type=type, status=status)
    return {"success": True, "data": tasks, "count": len(tasks)}


@router.post("", response_model=LessonResponse)
async def create_lesson(
    request: CreateLessonRequest,
    service: TaskService = Depends(get_task_service),
):
    """
    Create a task for a lesson of an existing subject.
    
    Raises:
        400: Missing required fields or invalid type
        404: Subject not found
    """
    try:
        task = await service.create_lesson(
            title=request.title,
            type=request.type,
            subject=request.subject,
            lesson=request.lesson,
            due_date=request.dueDate,
            notes=request.notes,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "data": task, "message": "Lesson created successfully"}


@router.get("/names", response_model=LessonNamesResponse)
async def list_lesson_names(
    subject_id: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
):
    """Distinct lesson names, optionally for one subject"""
    lessons = await service.get_lessons(subject_id)
    return {"lessons": lessons}
