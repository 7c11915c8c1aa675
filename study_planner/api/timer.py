"""Study timer endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from study_planner.api.deps import get_study_timer
from study_planner.models.study_session import StudySession
from study_planner.services.timer import InvalidState, StudyTimer, TimerSnapshot

router = APIRouter(prefix="/api/timer", tags=["timer"])


class StartTimerRequest(BaseModel):
    task_id: str


class StopTimerRequest(BaseModel):
    notes: Optional[str] = None


class StopTimerResponse(BaseModel):
    session: Optional[StudySession] = None
    timer: TimerSnapshot


@router.get("", response_model=TimerSnapshot)
async def get_timer(timer: StudyTimer = Depends(get_study_timer)):
    """Current phase and active elapsed time"""
    return timer.snapshot()


@router.post("/start", response_model=TimerSnapshot)
async def start_timer(request: StartTimerRequest, timer: StudyTimer = Depends(get_study_timer)):
    """Open a study session for a task and start the timer"""
    try:
        await timer.start(request.task_id)
    except InvalidState as e:
        raise HTTPException(status_code=409, detail=str(e))
    return timer.snapshot()


@router.post("/pause", response_model=TimerSnapshot)
async def pause_timer(timer: StudyTimer = Depends(get_study_timer)):
    """Pause the running timer"""
    try:
        timer.pause()
    except InvalidState as e:
        raise HTTPException(status_code=409, detail=str(e))
    return timer.snapshot()


@router.post("/resume", response_model=TimerSnapshot)
async def resume_timer(timer: StudyTimer = Depends(get_study_timer)):
    """Resume a paused timer"""
    timer.resume()
    return timer.snapshot()


@router.post("/stop", response_model=StopTimerResponse)
async def stop_timer(
    request: Optional[StopTimerRequest] = None,
    timer: StudyTimer = Depends(get_study_timer),
):
    """
    Stop the timer and save the session.
    
    On failure the timer keeps its session and accumulated time so the stop
    can be retried.
    """
    notes = request.notes if request else None
    session = await timer.stop(notes)
    return {"session": session, "timer": timer.snapshot()}
