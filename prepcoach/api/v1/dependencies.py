"""Shared API dependencies: identity and service construction."""

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from prepcoach.core.database import get_db
from prepcoach.core.security import decode_access_token
from prepcoach.services.analytics_service import AnalyticsService
from prepcoach.services.career_service import CareerService
from prepcoach.services.interview_lifecycle import InterviewLifecycleService
from prepcoach.services.repositories import InterviewRepository, InterviewSessionRepository
from prepcoach.services.storage_service import ResumeStorage, get_resume_storage

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Resolve the authenticated user id from the bearer token's ``sub`` claim."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("sub")
    if user_id is None:
        raise credentials_exception
    return str(user_id)


def get_lifecycle_service(
    db: AsyncSession = Depends(get_db),
    storage: ResumeStorage = Depends(get_resume_storage),
) -> InterviewLifecycleService:
    return InterviewLifecycleService(
        interviews=InterviewRepository(db),
        sessions=InterviewSessionRepository(db),
        storage=storage,
        logger=logging.getLogger("prepcoach.interviews"),
    )


def get_analytics_service(db: AsyncSession = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


def get_career_service(db: AsyncSession = Depends(get_db)) -> CareerService:
    return CareerService(db)
