"""Pydantic schemas for request/response validation."""

from prepcoach.schemas.response import APIResponse, ErrorResponse, Pagination
from prepcoach.schemas.interview import (
    InterviewEnd,
    InterviewFeedback,
    InterviewMetricsResponse,
    InterviewResponse,
)
from prepcoach.schemas.session import (
    InterviewDeleteResponse,
    InterviewEndResponse,
    InterviewResultsResponse,
    InterviewSessionResponse,
    InterviewStartResponse,
    PartialFailureInfo,
    ResultsFeedback,
)
from prepcoach.schemas.analytics import (
    LeaderboardEntry,
    ProgressResponse,
    ReadinessResponse,
    SkillGapRequest,
    SkillGapResponse,
    TimelineBucket,
)
from prepcoach.schemas.career import (
    CareerResourceResponse,
    FeaturedContentResponse,
    JobListingResponse,
)
from prepcoach.schemas.user import UserProfileUpdate, UserResponse

__all__ = [
    "APIResponse",
    "ErrorResponse",
    "Pagination",
    "InterviewEnd",
    "InterviewFeedback",
    "InterviewMetricsResponse",
    "InterviewResponse",
    "InterviewDeleteResponse",
    "InterviewEndResponse",
    "InterviewResultsResponse",
    "InterviewSessionResponse",
    "InterviewStartResponse",
    "PartialFailureInfo",
    "ResultsFeedback",
    "LeaderboardEntry",
    "ProgressResponse",
    "ReadinessResponse",
    "SkillGapRequest",
    "SkillGapResponse",
    "TimelineBucket",
    "CareerResourceResponse",
    "FeaturedContentResponse",
    "JobListingResponse",
    "UserProfileUpdate",
    "UserResponse",
]
