"""Main API v1 router."""

from fastapi import APIRouter

from prepcoach.api.v1.endpoints import analytics, career, interviews, users

api_router = APIRouter()

api_router.include_router(interviews.router, prefix="/interviews", tags=["interviews"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(career.router, prefix="/career", tags=["career"])
