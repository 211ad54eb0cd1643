"""Interview-related Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, Field


class InterviewFeedback(BaseModel):
    """Written feedback attached to a completed interview."""

    summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class InterviewResponse(BaseModel):
    """Schema for interview response."""

    id: str
    user_id: str
    role: str
    difficulty: str
    scheduled_at: str
    duration_minutes: int
    status: str
    resume_url: str
    skills: list[str] = Field(default_factory=list)
    overall_score: Optional[float] = None
    technical_score: Optional[float] = None
    communication_score: Optional[float] = None
    problem_solving_score: Optional[float] = None
    feedback: Optional[dict] = None
    started_at: Optional[str] = None
    ended_at: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class InterviewEnd(BaseModel):
    """Schema for ending an in-progress interview.

    Score range and transcript ordering are checked by the lifecycle service so
    that they fail with the same error kind as every other validation failure.
    """

    overall_score: Optional[float] = None
    technical_score: Optional[float] = None
    communication_score: Optional[float] = None
    problem_solving_score: Optional[float] = None
    feedback: Optional[InterviewFeedback] = None
    transcript: list[dict] = Field(
        default_factory=list, description="Turns to append: {speaker, type, message, timestamp}")
    question_evaluations: list[dict] = Field(
        default_factory=list, description="Per-question {question, answer, score, feedback}")


class InterviewMetricsResponse(BaseModel):
    """Performance metrics for one completed interview."""

    interview_id: str
    accuracy: int
    average_score: float
    weighted_score: float
    questions_per_minute: float
    grade: str
    total_questions: int
    correct_answers: int
    duration_seconds: float
    difficulty: str
