"""Interview lifecycle: create, start, end, delete and results.

``InterviewLifecycleService`` is the only writer of interview status. Start and
end touch two records with no shared transaction, so they run as two steps:
the interview write is authoritative and the session write that follows is
best-effort. A failed second step is reported as a ``PartialFailure`` on the
result instead of undoing the first.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from prepcoach.core.config import settings
from prepcoach.core.exceptions import (
    InterviewNotCompletedError,
    InvalidStateError,
    NotFoundError,
    PartialFailure,
    ServiceError,
    ValidationError,
)
from prepcoach.models.interview import (
    Interview,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SCHEDULED,
    utcnow,
)
from prepcoach.models.interview_session import InterviewSession
from prepcoach.services.metrics import average_score
from prepcoach.services.repositories import InterviewRepository, InterviewSessionRepository
from prepcoach.services.storage_service import ResumeFile, ResumeStorage
from prepcoach.services.validation import (
    SPEAKERS,
    can_transition,
    has_allowed_extension,
    is_time_ordered,
    is_valid_difficulty,
    is_valid_duration,
    is_valid_score,
    parse_timestamp,
)

GREETING_TEMPLATE = (
    "Hello! Welcome to your {role} interview. "
    "Take a moment to get comfortable, and let me know when you're ready to begin."
)

TURN_TIME_STEP = timedelta(microseconds=1)

SCORE_FIELDS = ("technical_score", "communication_score", "problem_solving_score")


@dataclass
class StartResult:
    interview: Interview
    session: Optional[InterviewSession]
    partial_failures: List[PartialFailure] = field(default_factory=list)


@dataclass
class EndResult:
    interview: Interview
    session: Optional[InterviewSession]
    partial_failures: List[PartialFailure] = field(default_factory=list)


@dataclass
class DeleteResult:
    interview: Interview
    partial_failures: List[PartialFailure] = field(default_factory=list)


@dataclass
class ResultsBundle:
    interview: Interview
    session: InterviewSession


class InterviewLifecycleService:
    """Drives interviews through scheduled -> in-progress -> completed."""

    def __init__(
        self,
        interviews: InterviewRepository,
        sessions: InterviewSessionRepository,
        storage: ResumeStorage,
        logger: Optional[logging.Logger] = None,
    ):
        self.interviews = interviews
        self.sessions = sessions
        self.storage = storage
        self.logger = logger or logging.getLogger(__name__)

    async def create(
        self,
        user_id: str,
        role: str,
        difficulty: str,
        duration_minutes: int,
        scheduled_at: Any,
        resume: Optional[ResumeFile],
        skills: Optional[Iterable[str]] = None,
    ) -> Interview:
        """Validate input, upload the resume, then persist a scheduled interview."""
        if resume is None or not resume.content:
            raise ValidationError("Resume file is required")
        if not role or not role.strip():
            raise ValidationError("Role is required")
        if not is_valid_difficulty(difficulty):
            raise ValidationError("Difficulty must be one of: easy, medium, hard, expert")
        if not is_valid_duration(duration_minutes):
            raise ValidationError("Duration must be a positive number of minutes")
        scheduled = parse_timestamp(scheduled_at)
        if scheduled is None:
            raise ValidationError("scheduledAt must be a valid ISO-8601 timestamp")
        if not has_allowed_extension(resume.filename, settings.ALLOWED_RESUME_EXTENSIONS):
            raise ValidationError(
                "Invalid resume file type. Allowed: "
                + ", ".join(settings.ALLOWED_RESUME_EXTENSIONS)
            )
        if len(resume.content) > settings.MAX_UPLOAD_SIZE:
            raise ValidationError(
                f"Resume exceeds maximum allowed size of {settings.MAX_UPLOAD_SIZE} bytes"
            )

        resume_url = await self.storage.upload(user_id, resume.filename, resume.content)

        interview = Interview(
            user_id=user_id,
            role=role.strip(),
            difficulty=difficulty.lower(),
            scheduled_at=scheduled,
            duration_minutes=duration_minutes,
            status=STATUS_SCHEDULED,
            resume_url=resume_url,
            skills=[s.strip() for s in (skills or []) if s and s.strip()],
        )
        try:
            interview = await self.interviews.create(interview)
        except ServiceError:
            # No record was written, so the upload must not outlive it
            await self.storage.delete(resume_url)
            raise

        self.logger.info(f"Created interview {interview.id} for user {user_id}")
        return interview

    async def list(self, user_id: str) -> List[Interview]:
        return await self.interviews.list_for_user(user_id)

    async def get(self, interview_id: str, user_id: str) -> Interview:
        return await self._get_owned(interview_id, user_id)

    async def start(self, interview_id: str, user_id: str) -> StartResult:
        """Move a scheduled interview to in-progress and open its session."""
        interview = await self._get_owned(interview_id, user_id, for_update=True)
        if not can_transition(interview.status, STATUS_IN_PROGRESS):
            raise InvalidStateError(
                f"Interview cannot be started: it is already {interview.status}",
                current_status=interview.status,
            )

        now = utcnow()
        interview.status = STATUS_IN_PROGRESS
        interview.started_at = now
        interview = await self.interviews.save(interview)
        self.logger.info(f"Started interview {interview.id}")

        result = StartResult(interview=interview, session=None)
        greeting = {
            "speaker": "ai",
            "type": "greeting",
            "message": GREETING_TEMPLATE.format(role=interview.role),
            "timestamp": now.isoformat(),
        }
        try:
            result.session = await self.sessions.create(
                InterviewSession(
                    interview_id=interview.id,
                    user_id=user_id,
                    conversation=[greeting],
                    question_evaluations=[],
                    session_status=STATUS_IN_PROGRESS,
                )
            )
        except ServiceError as e:
            result.partial_failures.append(
                self._partial("start", interview.id, f"session could not be created: {e.message}")
            )
        return result

    async def get_session(self, interview_id: str, user_id: str) -> InterviewSession:
        session = await self.sessions.get_by_interview(interview_id)
        if session is None or session.user_id != user_id:
            raise NotFoundError("Interview session not found")
        return session

    async def end(
        self,
        interview_id: str,
        user_id: str,
        overall_score: Optional[float] = None,
        technical_score: Optional[float] = None,
        communication_score: Optional[float] = None,
        problem_solving_score: Optional[float] = None,
        feedback: Optional[Dict[str, Any]] = None,
        transcript: Optional[List[Dict[str, Any]]] = None,
        evaluations: Optional[List[Dict[str, Any]]] = None,
    ) -> EndResult:
        """Complete an in-progress interview and finalize its session."""
        interview = await self._get_owned(interview_id, user_id, for_update=True)
        if not can_transition(interview.status, STATUS_COMPLETED):
            raise InvalidStateError(
                f"Interview is not in progress (current status: {interview.status})",
                current_status=interview.status,
            )

        scores = {
            "technical_score": technical_score,
            "communication_score": communication_score,
            "problem_solving_score": problem_solving_score,
        }
        for name, value in [("overall_score", overall_score), *scores.items()]:
            if value is not None and not is_valid_score(value):
                raise ValidationError(f"{name} must be between 0 and 100")

        now = utcnow()
        new_turns = [self._normalize_turn(turn) for turn in transcript or []]
        new_evaluations = [self._normalize_evaluation(e) for e in evaluations or []]

        session = await self.sessions.get_by_interview(interview.id)
        if session is not None and session.user_id != user_id:
            session = None

        previous_turns = session.conversation if session is not None else []
        last_recorded = None
        if previous_turns:
            last_recorded = parse_timestamp(previous_turns[-1].get("timestamp"))
        new_turns = self._stamp_turns(new_turns, last_recorded, now)

        all_evaluations = list(session.question_evaluations if session is not None else [])
        all_evaluations += new_evaluations
        if overall_score is None:
            overall_score = average_score([e.get("score") for e in all_evaluations])
        for name in SCORE_FIELDS:
            if scores[name] is None:
                scores[name] = overall_score
        final_feedback = self._normalize_feedback(feedback)

        interview.status = STATUS_COMPLETED
        interview.ended_at = now
        interview.overall_score = overall_score
        interview.technical_score = scores["technical_score"]
        interview.communication_score = scores["communication_score"]
        interview.problem_solving_score = scores["problem_solving_score"]
        interview.feedback = final_feedback
        interview = await self.interviews.save(interview)
        self.logger.info(f"Completed interview {interview.id} with score {overall_score}")

        result = EndResult(interview=interview, session=session)
        if session is None:
            result.partial_failures.append(
                self._partial("end", interview.id, "no session to finalize")
            )
            return result

        session.conversation = [*previous_turns, *new_turns]
        session.question_evaluations = all_evaluations
        session.session_status = STATUS_COMPLETED
        session.overall_score = overall_score
        session.technical_score = scores["technical_score"]
        session.communication_score = scores["communication_score"]
        session.problem_solving_score = scores["problem_solving_score"]
        session.feedback = final_feedback
        try:
            result.session = await self.sessions.save(session)
        except ServiceError as e:
            result.partial_failures.append(
                self._partial("end", interview.id, f"session could not be finalized: {e.message}")
            )
        return result

    async def delete(self, interview_id: str, user_id: str) -> DeleteResult:
        """Delete an interview, then its session and resume on a best-effort basis."""
        interview = await self.interviews.delete_for_user(interview_id, user_id)
        if interview is None:
            raise NotFoundError("Interview not found")
        self.logger.info(f"Deleted interview {interview.id} for user {user_id}")

        result = DeleteResult(interview=interview)
        try:
            await self.sessions.delete_by_interview(interview.id)
        except ServiceError as e:
            result.partial_failures.append(
                self._partial("delete", interview.id, f"session could not be deleted: {e.message}")
            )
        if interview.resume_url and not await self.storage.delete(interview.resume_url):
            result.partial_failures.append(
                self._partial("delete", interview.id, "resume could not be deleted")
            )
        return result

    async def get_results(self, interview_id: str, user_id: str) -> ResultsBundle:
        interview = await self._get_owned(interview_id, user_id)
        if interview.status != STATUS_COMPLETED:
            raise InterviewNotCompletedError(
                "Interview is not yet completed", current_status=interview.status
            )
        session = await self.sessions.get_by_interview(interview.id)
        if session is None or session.user_id != user_id:
            raise NotFoundError("Interview session not found")
        return ResultsBundle(interview=interview, session=session)

    async def _get_owned(
        self, interview_id: str, user_id: str, for_update: bool = False
    ) -> Interview:
        interview = await self.interviews.get_for_user(
            interview_id, user_id, for_update=for_update
        )
        if interview is None:
            raise NotFoundError("Interview not found")
        return interview

    def _partial(self, operation: str, interview_id: str, message: str) -> PartialFailure:
        failure = PartialFailure(operation, interview_id, message)
        self.logger.warning(f"Partial failure: {failure}")
        return failure

    @staticmethod
    def _stamp_turns(
        turns: List[Dict[str, Any]], last_recorded: Optional[datetime], now: datetime
    ) -> List[Dict[str, Any]]:
        """Fill in missing timestamps and require each turn to be later than the one before.

        A turn without a timestamp gets ``now``, or one microsecond after the
        previous turn when ``now`` is not later than it.
        """
        previous = last_recorded
        moments = [] if previous is None else [previous]
        for turn in turns:
            moment = turn["timestamp"]
            if moment is None:
                moment = now if previous is None else max(now, previous + TURN_TIME_STEP)
            moments.append(moment)
            turn["timestamp"] = moment.isoformat()
            previous = moment

        if not is_time_ordered(moments):
            raise ValidationError("Transcript entries must be in chronological order")
        return turns

    @staticmethod
    def _normalize_turn(turn: Dict[str, Any]) -> Dict[str, Any]:
        speaker = turn.get("speaker")
        if speaker not in SPEAKERS:
            raise ValidationError("Transcript speaker must be 'ai' or 'user'")
        message = turn.get("message")
        if not isinstance(message, str) or not message:
            raise ValidationError("Transcript message is required")

        raw_timestamp = turn.get("timestamp")
        timestamp = None
        if raw_timestamp is not None:
            timestamp = parse_timestamp(raw_timestamp)
            if timestamp is None:
                raise ValidationError("Transcript timestamp must be a valid ISO-8601 timestamp")

        return {
            "speaker": speaker,
            "type": turn.get("type") or ("answer" if speaker == "user" else "question"),
            "message": message,
            "timestamp": timestamp,
        }

    @staticmethod
    def _normalize_evaluation(evaluation: Dict[str, Any]) -> Dict[str, Any]:
        score = evaluation.get("score")
        if score is not None and not is_valid_score(score):
            raise ValidationError("Question score must be between 0 and 100")
        return {
            "question": evaluation.get("question") or "",
            "answer": evaluation.get("answer") or "",
            "score": score,
            "feedback": evaluation.get("feedback") or "",
        }

    @staticmethod
    def _normalize_feedback(feedback: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        feedback = feedback or {}
        return {
            "summary": feedback.get("summary") or "",
            "strengths": list(feedback.get("strengths") or []),
            "improvements": list(feedback.get("improvements") or []),
        }
