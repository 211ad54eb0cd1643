"""Interview session model."""

from datetime import datetime
from sqlalchemy import String, DateTime, JSON, Float
from sqlalchemy.orm import Mapped, mapped_column

from prepcoach.core.database import Base
from prepcoach.models.interview import STATUS_IN_PROGRESS, new_id, utcnow


class InterviewSession(Base):
    """Live transcript and per-question evaluations for one interview attempt.

    ``interview_id`` is a plain back-reference: the two records are written in
    separate steps and no foreign key ties them together.
    """

    __tablename__ = "interview_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    interview_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # [{speaker, type, message, timestamp}], append-only
    conversation: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    # [{question, answer, score, feedback}]
    question_evaluations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    session_status: Mapped[str] = mapped_column(
        String(50), default=STATUS_IN_PROGRESS, nullable=False
    )  # in-progress, completed

    overall_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    technical_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    communication_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    problem_solving_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    feedback: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<InterviewSession(id={self.id}, interview_id={self.interview_id}, "
            f"status={self.session_status})>"
        )
