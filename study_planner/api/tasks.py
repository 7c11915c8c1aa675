from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List, Optional
from datetime import date

from study_planner.api.deps import get_task_service
from study_planner.models.task import Task, TaskCreate, TaskStatus, TaskType, TaskUpdate
from study_planner.services.task import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    subject_id: str
    title: str
    type: TaskType
    status: TaskStatus = TaskStatus.TODO
    lesson: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None


class UpdateTaskRequest(BaseModel):
    subject_id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[TaskType] = None
    status: Optional[TaskStatus] = None
    lesson: Optional[str] = None
    video_url: Optional[str] = None
    notes: Optional[str] = None
    due_date: Optional[date] = None


class TaskResponse(BaseModel):
    task: Task


class TaskListResponse(BaseModel):
    tasks: List[Task]
    count: int


class DeleteResponse(BaseModel):
    success: bool
    message: str


# CRUD Endpoints
@router.get("", response_model=TaskListResponse)
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """List all tasks, newest first"""
    tasks = await service.list_tasks()
    
    return {
        "tasks": tasks,
        "count": len(tasks)
    }


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get a single task by ID"""
    task = await service.get_task(task_id)
    
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    
    return {"task": task}


@router.post("", response_model=TaskResponse)
async def create_task(request: CreateTaskRequest, service: TaskService = Depends(get_task_service)):
    """Create a new task"""
    task = await service.create_task(TaskCreate(**request.model_dump()))
    return {"task": task}


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """Update an existing task. Only fields present in the body are changed."""
    updates = TaskUpdate(**request.model_dump(exclude_unset=True))
    task = await service.update_task(task_id, updates)
    
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    
    return {"task": task}


@router.delete("/{task_id}", response_model=DeleteResponse)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Delete a task"""
    success = await service.delete_task(task_id)
    
    if not success:
        raise HTTPException(status_code=404, detail="Task not found")
    
    return {"success": True, "message": "Task deleted successfully"}


@router.post("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Mark a task as done"""
    task = await service.complete_task(task_id)
    
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    
    return {"task": task}


@router.post("/{task_id}/uncomplete", response_model=TaskResponse)
async def uncomplete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Reopen a completed task"""
    task = await service.uncomplete_task(task_id)
    
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    
    return {"task": task}
