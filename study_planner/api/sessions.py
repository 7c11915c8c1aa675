"""Study session history and statistics endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Query

from study_planner.api.deps import get_stats_service
from study_planner.models.stats import StudyStats
from study_planner.models.study_session import StudySession
from study_planner.services.study_stats_service import StudyStatsService

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.get("", response_model=List[StudySession])
async def list_sessions(
    limit: int = Query(50, ge=1, le=500),
    service: StudyStatsService = Depends(get_stats_service),
):
    """Most recent study sessions first"""
    return await service.get_recent_sessions(limit)


@router.get("/stats", response_model=StudyStats)
async def get_stats(
    days: int = Query(30, ge=1, le=365),
    service: StudyStatsService = Depends(get_stats_service),
):
    """Aggregated statistics over the last ``days`` days"""
    return await service.get_study_stats(days)
