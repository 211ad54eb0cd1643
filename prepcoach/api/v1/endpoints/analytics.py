"""Progress, readiness and leaderboard endpoints."""

from typing import List, Literal

from fastapi import APIRouter, Depends, Query

from prepcoach.api.v1.dependencies import get_analytics_service, get_current_user_id
from prepcoach.schemas.analytics import (
    LeaderboardEntry,
    ProgressResponse,
    ReadinessResponse,
    SkillGapRequest,
    SkillGapResponse,
    TimelineBucket,
)
from prepcoach.schemas.response import APIResponse
from prepcoach.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("/progress", response_model=APIResponse[ProgressResponse])
async def get_progress(
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Get progress analytics over the current user's completed interviews."""
    return APIResponse(data=await analytics.progress(user_id))


@router.get("/readiness", response_model=APIResponse[ReadinessResponse])
async def get_readiness(
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Get the current user's interview readiness score."""
    return APIResponse(data=await analytics.readiness(user_id))


@router.get("/timeline", response_model=APIResponse[List[TimelineBucket]])
async def get_timeline(
    group_by: Literal["day", "week", "month"] = Query("day"),
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Get interview counts and scores grouped by day, week or month."""
    return APIResponse(data=await analytics.timeline(user_id, group_by))


@router.post("/skill-gap", response_model=APIResponse[SkillGapResponse])
async def get_skill_gap(
    data: SkillGapRequest,
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Compare the current user's skill levels against target levels."""
    return APIResponse(data=await analytics.skill_gap(user_id, data.target_skills))


@router.get("/leaderboard", response_model=APIResponse[List[LeaderboardEntry]])
async def get_leaderboard(
    limit: int | None = Query(None, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Get the global leaderboard."""
    return APIResponse(data=await analytics.leaderboard(limit))
