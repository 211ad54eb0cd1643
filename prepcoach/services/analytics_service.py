"""Service for progress, readiness and leaderboard analytics over completed interviews."""

from collections import defaultdict
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from prepcoach.core.config import settings
from prepcoach.core.exceptions import InterviewNotCompletedError, NotFoundError
from prepcoach.models.interview import Interview, STATUS_COMPLETED, as_utc
from prepcoach.models.user import User
from prepcoach.services import metrics, progress
from prepcoach.services.leaderboard import LeaderboardCandidate, rank_leaderboard
from prepcoach.services.progress import ScoredInterview
from prepcoach.services.repositories import (
    InterviewRepository,
    InterviewSessionRepository,
    UserRepository,
)


def _to_scored(interview: Interview) -> ScoredInterview:
    duration = 0
    if interview.started_at and interview.ended_at:
        duration = int((as_utc(interview.ended_at) - as_utc(interview.started_at)).total_seconds())
    return ScoredInterview(
        created_at=interview.created_at,
        score=interview.overall_score,
        skills=list(interview.skills or []),
        duration_seconds=max(duration, 0),
    )


class AnalyticsService:
    """Loads completed interviews and feeds them to the pure aggregators."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.interviews = InterviewRepository(db)
        self.sessions = InterviewSessionRepository(db)
        self.users = UserRepository(db)

    async def _scored_history(self, user_id: str) -> List[ScoredInterview]:
        completed = await self.interviews.list_completed_for_user(user_id)
        return [_to_scored(i) for i in completed]

    async def _profile(self, user_id: str) -> Optional[User]:
        return await self.users.get(user_id)

    async def progress(self, user_id: str) -> Dict[str, Any]:
        return progress.progress_analytics(await self._scored_history(user_id))

    async def readiness(self, user_id: str) -> Dict[str, Any]:
        """
        Readiness score for a user.

        Skill coverage counts the skills on the user's profile; a user
        without a profile has zero coverage.
        """
        user = await self._profile(user_id)
        skills = list(user.skills or []) if user else []
        return progress.readiness_score(await self._scored_history(user_id), skills=skills)

    async def timeline(self, user_id: str, group_by: str = "day") -> List[Dict[str, Any]]:
        return progress.time_based_analytics(await self._scored_history(user_id), group_by)

    async def skill_gap(self, user_id: str, target_skills: Dict[str, float]) -> Dict[str, Any]:
        """Compare the user's per-skill interview averages against target levels."""
        levels = {
            entry["skill"]: entry["average"]
            for entry in progress.skill_averages(await self._scored_history(user_id))
        }
        return progress.skill_gap(levels, target_skills)

    async def leaderboard(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Rank every user with at least one completed interview.

        Args:
            limit: Maximum entries to return (defaults to LEADERBOARD_SIZE)

        Returns:
            Ranked leaderboard entries, best first
        """
        limit = limit or settings.LEADERBOARD_SIZE
        completed = await self.interviews.list_completed()

        scores_by_user: Dict[str, List[float]] = defaultdict(list)
        for interview in completed:
            scores_by_user[interview.user_id].append(interview.overall_score or 0)

        if not scores_by_user:
            return []

        profiles = {user.id: user for user in await self.users.list_by_ids(list(scores_by_user))}

        candidates = []
        for user_id, scores in scores_by_user.items():
            profile = profiles.get(user_id)
            candidates.append(LeaderboardCandidate(
                user_id=user_id,
                scores=scores,
                name=profile.full_name if profile else None,
                avatar_url=profile.avatar_url if profile else None,
                badges=list(profile.badges or []) if profile else [],
            ))

        return rank_leaderboard(candidates)[:limit]

    async def interview_metrics(self, interview_id: str, user_id: str) -> Dict[str, Any]:
        """Performance metrics for one completed interview."""
        interview = await self.interviews.get_for_user(interview_id, user_id)
        if interview is None:
            raise NotFoundError("Interview not found")
        if interview.status != STATUS_COMPLETED:
            raise InterviewNotCompletedError(
                "Interview is not yet completed", current_status=interview.status
            )

        session = await self.sessions.get_by_interview(interview.id)
        evaluations = session.question_evaluations if session and session.user_id == user_id else []
        scores = [e.get("score") for e in evaluations]
        correct = sum(
            1 for score in scores
            if isinstance(score, (int, float)) and score >= settings.CORRECT_ANSWER_THRESHOLD
        )

        result = metrics.interview_metrics(
            total_questions=len(evaluations),
            correct_answers=correct,
            duration_seconds=_to_scored(interview).duration_seconds,
            scores=scores,
            difficulty=interview.difficulty,
        )
        result["interview_id"] = interview.id
        return result
