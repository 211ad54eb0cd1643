"""Job listing and career resource endpoints."""

import math
from typing import List

from fastapi import APIRouter, Depends, Query

from prepcoach.api.v1.dependencies import get_career_service
from prepcoach.models.career import CareerResource, JobListing
from prepcoach.schemas.career import (
    CareerResourceResponse,
    FeaturedContentResponse,
    JobListingResponse,
)
from prepcoach.schemas.response import APIResponse, Pagination
from prepcoach.services.career_service import CareerService

router = APIRouter()


@router.get("/jobs", response_model=APIResponse[List[JobListingResponse]])
async def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    type: str = "",
    location: str = "",
    career: CareerService = Depends(get_career_service),
):
    """List active job listings."""
    jobs, total = await career.list_job_listings(
        page=page, limit=limit, search=search, type=type, location=location
    )
    return APIResponse(
        data=[_job_to_response(job) for job in jobs],
        pagination=Pagination(
            total=total, page=page, limit=limit, pages=math.ceil(total / limit)
        ),
    )


@router.get("/jobs/{job_id}", response_model=APIResponse[JobListingResponse])
async def get_job(job_id: str, career: CareerService = Depends(get_career_service)):
    return APIResponse(data=_job_to_response(await career.get_job_listing(job_id)))


@router.get("/resources", response_model=APIResponse[List[CareerResourceResponse]])
async def list_resources(
    category: str = "",
    type: str = "",
    career: CareerService = Depends(get_career_service),
):
    """List career resources, optionally filtered by category and type."""
    resources = await career.list_resources(category=category, type=type)
    return APIResponse(data=[_resource_to_response(r) for r in resources])


@router.get("/featured", response_model=APIResponse[FeaturedContentResponse])
async def get_featured(career: CareerService = Depends(get_career_service)):
    """Latest jobs and featured resources for the careers landing page."""
    featured = await career.featured_content()
    return APIResponse(
        data=FeaturedContentResponse(
            jobs=[_job_to_response(job) for job in featured["jobs"]],
            resources=[_resource_to_response(r) for r in featured["resources"]],
        )
    )


def _job_to_response(job: JobListing) -> JobListingResponse:
    return JobListingResponse(
        id=job.id,
        title=job.title,
        company=job.company,
        location=job.location,
        type=job.type,
        description=job.description,
        requirements=job.requirements or [],
        salary_range=job.salary_range,
        application_url=job.application_url,
        posted_at=job.posted_at.isoformat(),
        expires_at=job.expires_at.isoformat() if job.expires_at else None,
        is_active=job.is_active,
    )


def _resource_to_response(resource: CareerResource) -> CareerResourceResponse:
    return CareerResourceResponse(
        id=resource.id,
        title=resource.title,
        type=resource.type,
        description=resource.description,
        content=resource.content,
        category=resource.category,
        author=resource.author,
        published_at=resource.published_at.isoformat(),
        featured=resource.featured,
        thumbnail=resource.thumbnail,
    )
