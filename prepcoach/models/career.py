"""Career content models: job listings and resources."""

from datetime import datetime
from sqlalchemy import String, Text, DateTime, JSON, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from prepcoach.core.database import Base
from prepcoach.models.interview import new_id, utcnow

JOB_TYPES = ("Full-time", "Part-time", "Contract", "Remote", "Internship")
RESOURCE_TYPES = ("Article", "Video", "Webinar", "Guide")
RESOURCE_CATEGORIES = ("Resume Tips", "Interview Prep", "Career Growth", "Job Search")


class JobListing(Base):
    """Job listing shown on the careers page."""

    __tablename__ = "job_listings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), default="Full-time", nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    requirements: Mapped[list | None] = mapped_column(JSON, nullable=True, default=list)
    salary_range: Mapped[str | None] = mapped_column(String(100), nullable=True)
    application_url: Mapped[str] = mapped_column(String(512), nullable=False)
    posted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<JobListing(id={self.id}, title={self.title}, company={self.company})>"


class CareerResource(Base):
    """Article, video, webinar or guide."""

    __tablename__ = "career_resources"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)  # text or URL
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    author: Mapped[str | None] = mapped_column(String(255), nullable=True)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    thumbnail: Mapped[str | None] = mapped_column(String(512), nullable=True)

    def __repr__(self) -> str:
        return f"<CareerResource(id={self.id}, title={self.title}, category={self.category})>"
