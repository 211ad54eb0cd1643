"""Interview session Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, Field

from prepcoach.schemas.interview import InterviewResponse


class ConversationTurn(BaseModel):
    speaker: str
    type: str
    message: str
    timestamp: str


class QuestionEvaluation(BaseModel):
    question: str = ""
    answer: str = ""
    score: Optional[float] = None
    feedback: str = ""


class InterviewSessionResponse(BaseModel):
    """Schema for interview session response."""

    id: str
    interview_id: str
    user_id: str
    conversation: list[ConversationTurn] = Field(default_factory=list)
    question_evaluations: list[QuestionEvaluation] = Field(default_factory=list)
    session_status: str
    overall_score: Optional[float] = None
    technical_score: Optional[float] = None
    communication_score: Optional[float] = None
    problem_solving_score: Optional[float] = None
    feedback: Optional[dict] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class PartialFailureInfo(BaseModel):
    """A secondary effect that failed after the main change was saved."""

    operation: str
    message: str


class InterviewStartResponse(BaseModel):
    interview: InterviewResponse
    session_id: Optional[str] = None
    session: Optional[InterviewSessionResponse] = None
    warnings: list[PartialFailureInfo] = Field(default_factory=list)


class InterviewEndResponse(BaseModel):
    interview: InterviewResponse
    session: Optional[InterviewSessionResponse] = None
    warnings: list[PartialFailureInfo] = Field(default_factory=list)


class InterviewDeleteResponse(BaseModel):
    interview_id: str
    warnings: list[PartialFailureInfo] = Field(default_factory=list)


class ResultsFeedback(BaseModel):
    """Scores plus written feedback, as shown on the results page."""

    overall_score: Optional[float] = None
    technical_score: Optional[float] = None
    communication_score: Optional[float] = None
    problem_solving_score: Optional[float] = None
    summary: str = ""
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class InterviewResultsResponse(BaseModel):
    interview: InterviewResponse
    session: InterviewSessionResponse
    feedback: ResultsFeedback
