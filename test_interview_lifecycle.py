"""Tests for the interview lifecycle service with fake gateways."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from prepcoach.core.exceptions import (
    InterviewNotCompletedError,
    InvalidStateError,
    NotFoundError,
    PersistenceError,
    UploadError,
    ValidationError,
)
from prepcoach.models.interview import Interview
from prepcoach.models.interview_session import InterviewSession
from prepcoach.services.interview_lifecycle import InterviewLifecycleService
from prepcoach.services.repositories import InterviewRepository, InterviewSessionRepository
from prepcoach.services.storage_service import ResumeFile, ResumeStorage
from prepcoach.services.validation import parse_timestamp

RESUME = ResumeFile(filename="resume.pdf", content=b"%PDF-1.4 resume")


def _interview(status="scheduled", interview_id="int1", **fields) -> Interview:
    return Interview(
        id=interview_id,
        user_id="user1",
        role="Backend Engineer",
        difficulty="medium",
        scheduled_at=datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
        duration_minutes=30,
        status=status,
        resume_url="/uploads/user1_abc_resume.pdf",
        skills=["python"],
        **fields,
    )


def _session(interview_id="int1", conversation=None, evaluations=None) -> InterviewSession:
    return InterviewSession(
        id="sess1",
        interview_id=interview_id,
        user_id="user1",
        conversation=conversation if conversation is not None else [{
            "speaker": "ai",
            "type": "greeting",
            "message": "Hello!",
            "timestamp": "2026-03-01T10:00:00+00:00",
        }],
        question_evaluations=evaluations or [],
        session_status="in-progress",
    )


async def _echo(record, *args, **kwargs):
    return record


@pytest.fixture
def interviews():
    gateway = AsyncMock(spec=InterviewRepository)
    gateway.create.side_effect = _echo
    gateway.save.side_effect = _echo
    return gateway


@pytest.fixture
def sessions():
    gateway = AsyncMock(spec=InterviewSessionRepository)
    gateway.create.side_effect = _echo
    gateway.save.side_effect = _echo
    gateway.get_by_interview.return_value = None
    gateway.delete_by_interview.return_value = 1
    return gateway


@pytest.fixture
def storage():
    fake = AsyncMock(spec=ResumeStorage)
    fake.upload.return_value = "/uploads/user1_abc_resume.pdf"
    fake.delete.return_value = True
    return fake


@pytest.fixture
def service(interviews, sessions, storage):
    return InterviewLifecycleService(interviews, sessions, storage)


def _create_kwargs(**overrides):
    kwargs = dict(
        user_id="user1",
        role="Backend Engineer",
        difficulty="medium",
        duration_minutes=30,
        scheduled_at="2026-03-01T10:00:00Z",
        resume=RESUME,
    )
    kwargs.update(overrides)
    return kwargs


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_scheduled_interview(self, service, interviews, storage):
        interview = await service.create(**_create_kwargs(skills=[" python ", "", "sql"]))

        assert interview.status == "scheduled"
        assert interview.resume_url == "/uploads/user1_abc_resume.pdf"
        assert interview.skills == ["python", "sql"]
        assert interview.scheduled_at == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)
        storage.upload.assert_awaited_once_with("user1", "resume.pdf", RESUME.content)
        interviews.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_resume_is_required(self, service, interviews, storage):
        with pytest.raises(ValidationError, match="(?i)resume file is required"):
            await service.create(**_create_kwargs(resume=None))
        storage.upload.assert_not_awaited()
        interviews.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_resume_is_rejected(self, service):
        with pytest.raises(ValidationError, match="Resume file is required"):
            await service.create(**_create_kwargs(resume=ResumeFile("resume.pdf", b"")))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides", [
        {"role": "  "},
        {"difficulty": "impossible"},
        {"duration_minutes": 0},
        {"duration_minutes": None},
        {"scheduled_at": "next tuesday"},
        {"resume": ResumeFile("resume.exe", b"MZ")},
    ])
    async def test_invalid_input_has_no_side_effects(self, service, interviews, storage, overrides):
        with pytest.raises(ValidationError):
            await service.create(**_create_kwargs(**overrides))
        storage.upload.assert_not_awaited()
        interviews.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_failure_creates_nothing(self, service, interviews, storage):
        storage.upload.side_effect = UploadError("Failed to upload resume")
        with pytest.raises(UploadError):
            await service.create(**_create_kwargs())
        interviews.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_persist_failure_removes_uploaded_resume(self, service, interviews, storage):
        interviews.create.side_effect = PersistenceError("Failed to save changes")
        with pytest.raises(PersistenceError):
            await service.create(**_create_kwargs())
        storage.delete.assert_awaited_once_with("/uploads/user1_abc_resume.pdf")


class TestStart:
    @pytest.mark.asyncio
    async def test_start_opens_session_with_greeting(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(interview_id="int2")

        result = await service.start("int2", "user1")

        assert result.interview.status == "in-progress"
        assert result.interview.started_at is not None
        interviews.get_for_user.assert_awaited_once_with("int2", "user1", for_update=True)
        assert interviews.save.await_count == 1
        sessions.create.assert_awaited_once()
        assert result.session.interview_id == "int2"
        assert len(result.session.conversation) == 1
        greeting = result.session.conversation[0]
        assert greeting["speaker"] == "ai"
        assert greeting["type"] == "greeting"
        assert "Backend Engineer" in greeting["message"]
        assert result.partial_failures == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["in-progress", "completed"])
    async def test_start_requires_scheduled(self, service, interviews, sessions, status):
        interviews.get_for_user.return_value = _interview(status=status)
        with pytest.raises(InvalidStateError) as exc_info:
            await service.start("int1", "user1")
        assert exc_info.value.current_status == status
        interviews.save.assert_not_awaited()
        sessions.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_start_unknown_interview(self, service, interviews):
        interviews.get_for_user.return_value = None
        with pytest.raises(NotFoundError):
            await service.start("missing", "user1")

    @pytest.mark.asyncio
    async def test_session_failure_is_partial(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview()
        sessions.create.side_effect = PersistenceError("Failed to save changes")

        result = await service.start("int1", "user1")

        assert result.interview.status == "in-progress"
        assert result.session is None
        assert len(result.partial_failures) == 1
        assert result.partial_failures[0].operation == "start"
        assert result.partial_failures[0].interview_id == "int1"


class TestEnd:
    @pytest.mark.asyncio
    async def test_end_completes_interview_and_session(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()

        result = await service.end(
            "int1",
            "user1",
            overall_score=85,
            technical_score=80,
            feedback={"summary": "Good", "strengths": ["X"], "improvements": ["Y"]},
            transcript=[
                {"speaker": "ai", "message": "Tell me about yourself",
                 "timestamp": "2026-03-01T10:01:00Z"},
                {"speaker": "user", "message": "I build APIs",
                 "timestamp": "2026-03-01T10:02:00Z"},
            ],
            evaluations=[{"question": "Tell me about yourself", "answer": "I build APIs", "score": 85}],
        )

        interview = result.interview
        assert interview.status == "completed"
        assert interview.ended_at is not None
        assert interview.overall_score == 85
        assert interview.technical_score == 80
        assert interview.communication_score == 85
        assert interview.feedback == {"summary": "Good", "strengths": ["X"], "improvements": ["Y"]}
        assert result.session.session_status == "completed"
        assert [t["type"] for t in result.session.conversation] == ["greeting", "question", "answer"]
        assert len(result.session.question_evaluations) == 1
        assert result.session.overall_score == 85
        assert result.partial_failures == []

    @pytest.mark.asyncio
    async def test_overall_score_falls_back_to_evaluations(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session(
            evaluations=[{"question": "q1", "answer": "a1", "score": 80, "feedback": ""}]
        )

        result = await service.end("int1", "user1", evaluations=[{"question": "q2", "score": 90}])

        assert result.interview.overall_score == 85
        assert result.interview.problem_solving_score == 85

    @pytest.mark.asyncio
    async def test_end_without_scores_or_evaluations_scores_zero(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        result = await service.end("int1", "user1")
        assert result.interview.overall_score == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["scheduled", "completed"])
    async def test_end_requires_in_progress(self, service, interviews, status):
        interviews.get_for_user.return_value = _interview(status=status)
        with pytest.raises(InvalidStateError):
            await service.end("int1", "user1", overall_score=80)
        interviews.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_second_end_fails(self, service, interviews, sessions):
        interview = _interview(status="in-progress")
        interviews.get_for_user.return_value = interview
        sessions.get_by_interview.return_value = _session()

        await service.end("int1", "user1", overall_score=80)
        with pytest.raises(InvalidStateError):
            await service.end("int1", "user1", overall_score=90)
        assert interview.overall_score == 80

    @pytest.mark.asyncio
    async def test_score_out_of_range(self, service, interviews):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        with pytest.raises(ValidationError):
            await service.end("int1", "user1", overall_score=101)
        interviews.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transcript_must_not_go_back_in_time(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        with pytest.raises(ValidationError, match="chronological"):
            await service.end("int1", "user1", transcript=[
                {"speaker": "user", "message": "too early", "timestamp": "2026-03-01T09:00:00Z"},
            ])
        interviews.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_turn_at_same_instant_as_last_turn_is_rejected(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        with pytest.raises(ValidationError, match="chronological"):
            await service.end("int1", "user1", transcript=[
                {"speaker": "user", "message": "same time", "timestamp": "2026-03-01T10:00:00Z"},
            ])
        interviews.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_equal_timestamps_within_transcript_are_rejected(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        with pytest.raises(ValidationError, match="chronological"):
            await service.end("int1", "user1", transcript=[
                {"speaker": "ai", "message": "Q1", "timestamp": "2026-03-01T10:05:00Z"},
                {"speaker": "user", "message": "A1", "timestamp": "2026-03-01T10:05:00Z"},
            ])

    @pytest.mark.asyncio
    async def test_turns_without_timestamps_are_strictly_increasing(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()

        result = await service.end("int1", "user1", transcript=[
            {"speaker": "ai", "message": "Q1"},
            {"speaker": "user", "message": "A1"},
            {"speaker": "ai", "message": "Q2"},
        ])

        stamps = [parse_timestamp(t["timestamp"]) for t in result.session.conversation]
        assert len(stamps) == 4
        assert all(a < b for a, b in zip(stamps, stamps[1:]))

    @pytest.mark.asyncio
    async def test_turns_without_timestamps_follow_a_future_last_turn(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session(conversation=[{
            "speaker": "ai",
            "type": "greeting",
            "message": "Hello!",
            "timestamp": "2999-01-01T00:00:00+00:00",
        }])

        result = await service.end("int1", "user1", transcript=[
            {"speaker": "ai", "message": "Q1"},
            {"speaker": "user", "message": "A1"},
        ])

        stamps = [parse_timestamp(t["timestamp"]) for t in result.session.conversation]
        assert stamps[1] == stamps[0] + timedelta(microseconds=1)
        assert stamps[2] == stamps[1] + timedelta(microseconds=1)

    @pytest.mark.asyncio
    async def test_unparseable_turn_timestamp_is_rejected(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        with pytest.raises(ValidationError, match="ISO-8601"):
            await service.end("int1", "user1", transcript=[
                {"speaker": "user", "message": "A1", "timestamp": "yesterday"},
            ])

    @pytest.mark.asyncio
    async def test_unknown_speaker_is_rejected(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        with pytest.raises(ValidationError):
            await service.end("int1", "user1", transcript=[{"speaker": "bot", "message": "hi"}])

    @pytest.mark.asyncio
    async def test_missing_session_is_partial(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = None

        result = await service.end("int1", "user1", overall_score=70)

        assert result.interview.status == "completed"
        assert result.session is None
        assert len(result.partial_failures) == 1

    @pytest.mark.asyncio
    async def test_session_save_failure_is_partial(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="in-progress")
        sessions.get_by_interview.return_value = _session()
        sessions.save.side_effect = PersistenceError("Failed to save changes")

        result = await service.end("int1", "user1", overall_score=70)

        assert result.interview.status == "completed"
        assert result.partial_failures[0].operation == "end"


class TestStartThenEnd:
    @pytest.mark.asyncio
    async def test_lifecycle_reaches_completed(self, service, interviews, sessions):
        interview = _interview()
        interviews.get_for_user.return_value = interview

        started = await service.start("int1", "user1")
        sessions.get_by_interview.return_value = started.session
        ended = await service.end("int1", "user1", overall_score=88)

        assert ended.interview is interview
        assert interview.status == "completed"
        assert ended.session.session_status == "completed"


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_session_and_resume(self, service, interviews, sessions, storage):
        interviews.delete_for_user.return_value = _interview()

        result = await service.delete("int1", "user1")

        assert result.interview.id == "int1"
        sessions.delete_by_interview.assert_awaited_once_with("int1")
        storage.delete.assert_awaited_once_with("/uploads/user1_abc_resume.pdf")
        assert result.partial_failures == []

    @pytest.mark.asyncio
    async def test_delete_unknown(self, service, interviews):
        interviews.delete_for_user.return_value = None
        with pytest.raises(NotFoundError):
            await service.delete("missing", "user1")

    @pytest.mark.asyncio
    async def test_cleanup_failures_are_partial(self, service, interviews, sessions, storage):
        interviews.delete_for_user.return_value = _interview(status="in-progress")
        sessions.delete_by_interview.side_effect = PersistenceError("Failed to delete interview session")
        storage.delete.return_value = False

        result = await service.delete("int1", "user1")

        assert len(result.partial_failures) == 2


class TestResults:
    @pytest.mark.asyncio
    async def test_results_require_completed(self, service, interviews):
        interviews.get_for_user.return_value = _interview(status="in-progress", interview_id="int3")
        with pytest.raises(InterviewNotCompletedError, match="(?i)not yet completed"):
            await service.get_results("int3", "user1")

    @pytest.mark.asyncio
    async def test_results_bundle(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(
            status="completed", interview_id="int4", overall_score=85
        )
        sessions.get_by_interview.return_value = _session(interview_id="int4")

        bundle = await service.get_results("int4", "user1")

        assert bundle.interview.overall_score == 85
        assert bundle.session.interview_id == "int4"

    @pytest.mark.asyncio
    async def test_completed_without_session(self, service, interviews, sessions):
        interviews.get_for_user.return_value = _interview(status="completed")
        sessions.get_by_interview.return_value = None
        with pytest.raises(NotFoundError):
            await service.get_results("int1", "user1")


class TestGetSession:
    @pytest.mark.asyncio
    async def test_other_users_session_is_not_found(self, service, sessions):
        session = _session()
        session.user_id = "someone-else"
        sessions.get_by_interview.return_value = session
        with pytest.raises(NotFoundError):
            await service.get_session("int1", "user1")
