"""Service for job listings and career resources."""

from typing import Any, Dict, List, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from prepcoach.core.exceptions import NotFoundError, PersistenceError
from prepcoach.models.career import CareerResource, JobListing

FEATURED_JOB_COUNT = 3
FEATURED_RESOURCE_COUNT = 4


class CareerService:
    """Read access to career content."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _all(self, statement) -> list:
        try:
            result = await self.db.execute(statement)
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to load career content") from e
        return list(result.scalars().all())

    async def list_job_listings(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        type: str = "",
        location: str = "",
    ) -> Tuple[List[JobListing], int]:
        """
        List active job listings, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            search: Case-insensitive match on title, company or description
            type: Exact job type
            location: Case-insensitive substring of the location

        Returns:
            (listings on the page, total matching listings)
        """
        conditions = [JobListing.is_active.is_(True)]
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(
                JobListing.title.ilike(pattern),
                JobListing.company.ilike(pattern),
                JobListing.description.ilike(pattern),
            ))
        if type:
            conditions.append(JobListing.type == type)
        if location:
            conditions.append(JobListing.location.ilike(f"%{location}%"))

        try:
            total = (
                await self.db.execute(select(func.count(JobListing.id)).where(*conditions))
            ).scalar() or 0
        except SQLAlchemyError as e:
            raise PersistenceError("Failed to load career content") from e

        jobs = await self._all(
            select(JobListing)
            .where(*conditions)
            .order_by(JobListing.posted_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return jobs, total

    async def get_job_listing(self, job_id: str) -> JobListing:
        jobs = await self._all(select(JobListing).where(JobListing.id == job_id))
        if not jobs:
            raise NotFoundError("Job not found")
        return jobs[0]

    async def list_resources(self, category: str = "", type: str = "") -> List[CareerResource]:
        statement = select(CareerResource)
        if category:
            statement = statement.where(CareerResource.category == category)
        if type:
            statement = statement.where(CareerResource.type == type)
        return await self._all(statement.order_by(CareerResource.published_at.desc()))

    async def featured_content(self) -> Dict[str, Any]:
        """Newest active jobs and newest featured resources for the careers landing page."""
        jobs = await self._all(
            select(JobListing)
            .where(JobListing.is_active.is_(True))
            .order_by(JobListing.posted_at.desc())
            .limit(FEATURED_JOB_COUNT)
        )
        resources = await self._all(
            select(CareerResource)
            .where(CareerResource.featured.is_(True))
            .order_by(CareerResource.published_at.desc())
            .limit(FEATURED_RESOURCE_COUNT)
        )
        return {"jobs": jobs, "resources": resources}
