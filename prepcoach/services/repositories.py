"""Persistence gateways for interview, interview-session and user profile records.

Each gateway commits its own writes; there is no transaction spanning both
tables. Database errors leave as ``PersistenceError``.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from prepcoach.core.exceptions import PersistenceError
from prepcoach.models.interview import Interview, STATUS_COMPLETED
from prepcoach.models.interview_session import InterviewSession
from prepcoach.models.user import User

logger = logging.getLogger(__name__)


class _Gateway:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _scalar(self, statement):
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}", exc_info=True)
            raise PersistenceError("Database query failed") from e
        return result.scalar_one_or_none()

    async def _scalars(self, statement) -> list:
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {e}", exc_info=True)
            raise PersistenceError("Database query failed") from e
        return list(result.scalars().all())

    async def _commit(self, instance=None) -> None:
        try:
            await self.db.commit()
            if instance is not None:
                await self.db.refresh(instance)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Commit failed: {e}", exc_info=True)
            raise PersistenceError("Failed to save changes") from e


class InterviewRepository(_Gateway):
    """Gateway for the interviews table."""

    async def create(self, interview: Interview) -> Interview:
        self.db.add(interview)
        await self._commit(interview)
        return interview

    async def get_for_user(
        self, interview_id: str, user_id: str, for_update: bool = False
    ) -> Optional[Interview]:
        """Find one interview by id and owner; ``for_update`` locks the row where supported."""
        statement = select(Interview).where(
            Interview.id == interview_id, Interview.user_id == user_id
        )
        if for_update:
            statement = statement.with_for_update().execution_options(populate_existing=True)
        return await self._scalar(statement)

    async def list_for_user(self, user_id: str) -> List[Interview]:
        return await self._scalars(
            select(Interview)
            .where(Interview.user_id == user_id)
            .order_by(Interview.created_at.desc())
        )

    async def list_completed_for_user(self, user_id: str) -> List[Interview]:
        return await self._scalars(
            select(Interview)
            .where(Interview.user_id == user_id, Interview.status == STATUS_COMPLETED)
            .order_by(Interview.created_at.asc())
        )

    async def list_completed(self, user_ids: Optional[Sequence[str]] = None) -> List[Interview]:
        statement = select(Interview).where(Interview.status == STATUS_COMPLETED)
        if user_ids is not None:
            statement = statement.where(Interview.user_id.in_(user_ids))
        return await self._scalars(statement.order_by(Interview.created_at.asc()))

    async def save(self, interview: Interview) -> Interview:
        self.db.add(interview)
        await self._commit(interview)
        return interview

    async def delete_for_user(self, interview_id: str, user_id: str) -> Optional[Interview]:
        """Find one interview by id and owner and delete it. Returns the deleted record."""
        interview = await self.get_for_user(interview_id, user_id)
        if interview is None:
            return None
        try:
            await self.db.delete(interview)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to delete interview") from e
        await self._commit()
        return interview


class UserRepository(_Gateway):
    """Gateway for the users (profile) table."""

    async def get(self, user_id: str) -> Optional[User]:
        return await self._scalar(select(User).where(User.id == user_id))

    async def list_by_ids(self, user_ids: Sequence[str]) -> List[User]:
        if not user_ids:
            return []
        return await self._scalars(select(User).where(User.id.in_(list(user_ids))))

    async def save(self, user: User) -> User:
        self.db.add(user)
        await self._commit(user)
        return user


class InterviewSessionRepository(_Gateway):
    """Gateway for the interview_sessions table."""

    async def create(self, session: InterviewSession) -> InterviewSession:
        self.db.add(session)
        await self._commit(session)
        return session

    async def get_by_interview(self, interview_id: str) -> Optional[InterviewSession]:
        """Latest session for an interview, if any."""
        return await self._scalar(
            select(InterviewSession)
            .where(InterviewSession.interview_id == interview_id)
            .order_by(InterviewSession.created_at.desc())
            .limit(1)
        )

    async def save(self, session: InterviewSession) -> InterviewSession:
        self.db.add(session)
        await self._commit(session)
        return session

    async def delete_by_interview(self, interview_id: str) -> int:
        try:
            result = await self.db.execute(
                delete(InterviewSession).where(InterviewSession.interview_id == interview_id)
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError("Failed to delete interview session") from e
        await self._commit()
        return result.rowcount or 0
