"""Career content Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, Field


class JobListingResponse(BaseModel):
    """Schema for job listing response."""

    id: str
    title: str
    company: str
    location: str
    type: str
    description: str
    requirements: list[str] = Field(default_factory=list)
    salary_range: Optional[str] = None
    application_url: str
    posted_at: str
    expires_at: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class CareerResourceResponse(BaseModel):
    """Schema for career resource response."""

    id: str
    title: str
    type: str
    description: str
    content: Optional[str] = None
    category: str
    author: Optional[str] = None
    published_at: str
    featured: bool
    thumbnail: Optional[str] = None

    class Config:
        from_attributes = True


class FeaturedContentResponse(BaseModel):
    jobs: list[JobListingResponse]
    resources: list[CareerResourceResponse]
