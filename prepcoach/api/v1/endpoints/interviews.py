"""Interview management endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from prepcoach.api.v1.dependencies import (
    get_analytics_service,
    get_current_user_id,
    get_lifecycle_service,
)
from prepcoach.core.exceptions import PartialFailure
from prepcoach.models.interview import Interview
from prepcoach.models.interview_session import InterviewSession
from prepcoach.schemas.interview import (
    InterviewEnd,
    InterviewMetricsResponse,
    InterviewResponse,
)
from prepcoach.schemas.response import APIResponse
from prepcoach.schemas.session import (
    InterviewDeleteResponse,
    InterviewEndResponse,
    InterviewResultsResponse,
    InterviewSessionResponse,
    InterviewStartResponse,
    PartialFailureInfo,
    ResultsFeedback,
)
from prepcoach.services.analytics_service import AnalyticsService
from prepcoach.services.interview_lifecycle import InterviewLifecycleService
from prepcoach.services.storage_service import ResumeFile

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/create",
    response_model=APIResponse[InterviewResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_interview(
    role: str = Form(""),
    difficulty: str = Form(""),
    duration_minutes: str = Form(""),
    scheduled_at: str = Form(""),
    skills: str = Form("", description="Comma-separated skill tags"),
    resume: UploadFile | None = File(None),
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Schedule a new interview. Requires a resume upload."""
    resume_file = None
    if resume is not None:
        resume_file = ResumeFile(
            filename=resume.filename or "",
            content=await resume.read(),
            content_type=resume.content_type,
        )

    interview = await service.create(
        user_id=user_id,
        role=role,
        difficulty=difficulty,
        duration_minutes=_parse_int(duration_minutes),
        scheduled_at=scheduled_at,
        resume=resume_file,
        skills=skills.split(",") if skills else [],
    )
    return APIResponse(
        message="Interview created successfully",
        data=_interview_to_response(interview),
    )


@router.get("/all", response_model=APIResponse[List[InterviewResponse]])
async def list_interviews(
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """List all interviews for the current user."""
    interviews = await service.list(user_id)
    return APIResponse(data=[_interview_to_response(i) for i in interviews])


@router.get("/{interview_id}", response_model=APIResponse[InterviewResponse])
async def get_interview(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Get a specific interview by ID."""
    interview = await service.get(interview_id, user_id)
    return APIResponse(data=_interview_to_response(interview))


@router.post("/{interview_id}/start", response_model=APIResponse[InterviewStartResponse])
async def start_interview(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Start a scheduled interview and open its session with a greeting."""
    result = await service.start(interview_id, user_id)
    session = _session_to_response(result.session) if result.session else None
    return APIResponse(
        message="Interview started",
        data=InterviewStartResponse(
            interview=_interview_to_response(result.interview),
            session_id=session.id if session else None,
            session=session,
            warnings=_warnings(result.partial_failures),
        ),
    )


@router.get("/{interview_id}/session", response_model=APIResponse[InterviewSessionResponse])
async def get_interview_session(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Get the live session for an interview."""
    session = await service.get_session(interview_id, user_id)
    return APIResponse(data=_session_to_response(session))


@router.post("/{interview_id}/end", response_model=APIResponse[InterviewEndResponse])
async def end_interview(
    interview_id: str,
    data: InterviewEnd,
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Complete an in-progress interview with its scores, feedback and transcript."""
    result = await service.end(
        interview_id,
        user_id,
        overall_score=data.overall_score,
        technical_score=data.technical_score,
        communication_score=data.communication_score,
        problem_solving_score=data.problem_solving_score,
        feedback=data.feedback.model_dump() if data.feedback else None,
        transcript=data.transcript,
        evaluations=data.question_evaluations,
    )
    return APIResponse(
        message="Interview completed",
        data=InterviewEndResponse(
            interview=_interview_to_response(result.interview),
            session=_session_to_response(result.session) if result.session else None,
            warnings=_warnings(result.partial_failures),
        ),
    )


@router.delete("/{interview_id}", response_model=APIResponse[InterviewDeleteResponse])
async def delete_interview(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Delete an interview together with its session and resume."""
    result = await service.delete(interview_id, user_id)
    return APIResponse(
        message="Interview deleted successfully",
        data=InterviewDeleteResponse(
            interview_id=result.interview.id,
            warnings=_warnings(result.partial_failures),
        ),
    )


@router.get("/{interview_id}/results", response_model=APIResponse[InterviewResultsResponse])
async def get_interview_results(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    service: InterviewLifecycleService = Depends(get_lifecycle_service),
):
    """Get scores, feedback and transcript for a completed interview."""
    results = await service.get_results(interview_id, user_id)
    interview = results.interview
    feedback = interview.feedback or {}
    return APIResponse(
        data=InterviewResultsResponse(
            interview=_interview_to_response(interview),
            session=_session_to_response(results.session),
            feedback=ResultsFeedback(
                overall_score=interview.overall_score,
                technical_score=interview.technical_score,
                communication_score=interview.communication_score,
                problem_solving_score=interview.problem_solving_score,
                summary=feedback.get("summary") or "",
                strengths=feedback.get("strengths") or [],
                improvements=feedback.get("improvements") or [],
            ),
        ),
    )


@router.get("/{interview_id}/metrics", response_model=APIResponse[InterviewMetricsResponse])
async def get_interview_metrics(
    interview_id: str,
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
):
    """Get accuracy, weighted score and grade for a completed interview."""
    result = await analytics.interview_metrics(interview_id, user_id)
    return APIResponse(data=InterviewMetricsResponse(**result))


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _warnings(failures: List[PartialFailure]) -> List[PartialFailureInfo]:
    return [PartialFailureInfo(operation=f.operation, message=f.message) for f in failures]


def _interview_to_response(interview: Interview) -> InterviewResponse:
    """Convert Interview model to InterviewResponse schema."""
    return InterviewResponse(
        id=interview.id,
        user_id=interview.user_id,
        role=interview.role,
        difficulty=interview.difficulty,
        scheduled_at=interview.scheduled_at.isoformat(),
        duration_minutes=interview.duration_minutes,
        status=interview.status,
        resume_url=interview.resume_url,
        skills=interview.skills or [],
        overall_score=interview.overall_score,
        technical_score=interview.technical_score,
        communication_score=interview.communication_score,
        problem_solving_score=interview.problem_solving_score,
        feedback=interview.feedback,
        started_at=interview.started_at.isoformat() if interview.started_at else None,
        ended_at=interview.ended_at.isoformat() if interview.ended_at else None,
        created_at=interview.created_at.isoformat(),
        updated_at=interview.updated_at.isoformat(),
    )


def _session_to_response(session: InterviewSession) -> InterviewSessionResponse:
    """Convert InterviewSession model to InterviewSessionResponse schema."""
    return InterviewSessionResponse(
        id=session.id,
        interview_id=session.interview_id,
        user_id=session.user_id,
        conversation=session.conversation or [],
        question_evaluations=session.question_evaluations or [],
        session_status=session.session_status,
        overall_score=session.overall_score,
        technical_score=session.technical_score,
        communication_score=session.communication_score,
        problem_solving_score=session.problem_solving_score,
        feedback=session.feedback,
        created_at=session.created_at.isoformat(),
        updated_at=session.updated_at.isoformat(),
    )
