from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List

from study_planner.api.deps import get_subject_service
from study_planner.models.subject import Subject
from study_planner.services.subject_service import SubjectService

router = APIRouter(prefix="/api/subjects", tags=["subjects"])


class CreateSubjectRequest(BaseModel):
    name: str
    color: str


class DeleteResponse(BaseModel):
    success: bool
    message: str


@router.get("", response_model=List[Subject])
async def list_subjects(service: SubjectService = Depends(get_subject_service)):
    """List all subjects ordered by name"""
    return await service.list_subjects()


@router.post("", response_model=Subject)
async def create_subject(
    request: CreateSubjectRequest,
    service: SubjectService = Depends(get_subject_service),
):
    """Create a subject"""
    try:
        return await service.create_subject(request.name, request.color)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{subject_id}", response_model=DeleteResponse)
async def delete_subject(
    subject_id: str,
    service: SubjectService = Depends(get_subject_service),
):
    """Delete a subject"""
    success = await service.delete_subject(subject_id)
    
    if not success:
        raise HTTPException(status_code=404, detail="Subject not found")
    
    return {"success": True, "message": "Subject deleted successfully"}
