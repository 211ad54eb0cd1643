"""Analytics Pydantic schemas."""

from typing import Literal
from pydantic import BaseModel, Field


class SkillAverage(BaseModel):
    skill: str
    average: float
    count: int


class ProgressResponse(BaseModel):
    """Schema for a user's progress summary."""

    total_interviews: int
    average_score: float
    improvement: float
    consistency: float
    streak: int
    top_skills: list[SkillAverage]
    weak_areas: list[SkillAverage]
    trend: Literal["improving", "declining", "neutral"]
    recent_scores: list[float]
    first_score: float
    latest_score: float


class ReadinessBreakdown(BaseModel):
    practice_frequency: int
    average_score: int
    consistency: int
    skill_coverage: int
    recent_improvement: int


class ReadinessResponse(BaseModel):
    readiness_score: int
    readiness_level: str
    breakdown: ReadinessBreakdown
    recommendations: list[str]


class TimelineBucket(BaseModel):
    period: str
    count: int
    average_score: float
    total_duration: float
    average_duration: int


class SkillGapRequest(BaseModel):
    """Target level (0-100) per skill for the role being prepared for."""

    target_skills: dict[str, float] = Field(..., description="Skill name -> target level")


class SkillGapItem(BaseModel):
    skill: str
    current_level: float
    target_level: float
    gap: float
    priority: Literal["high", "medium", "low"]


class SkillStrengthItem(BaseModel):
    skill: str
    current_level: float
    target_level: float
    surplus: float


class SkillRecommendation(BaseModel):
    skill: str
    suggestion: str


class SkillGapResponse(BaseModel):
    gaps: list[SkillGapItem]
    strengths: list[SkillStrengthItem]
    readiness_score: int
    total_skills_required: int
    skills_met: int
    skills_to_improve: int
    recommendations: list[SkillRecommendation]


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: str
    name: str | None = None
    avatar_url: str | None = None
    badges: list[str] = Field(default_factory=list)
    total_interviews: int
    average_score: float
    consistency: int
    composite_score: int
    percentile: int
