"""Seed sample job listings and career resources.

Usage: python -m prepcoach.scripts.seed_career
"""

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prepcoach.core.database import AsyncSessionLocal, Base, engine
from prepcoach.core.logging import setup_logging
from prepcoach.models.career import CareerResource, JobListing

logger = logging.getLogger(__name__)

SAMPLE_JOBS = [
    {
        "title": "Frontend Developer",
        "company": "PrepCoach",
        "location": "Remote",
        "type": "Full-time",
        "description": "Join our team to build the future of AI interview preparation.",
        "requirements": ["React", "Tailwind CSS", "Node.js"],
        "salary_range": "$80k - $120k",
        "application_url": "https://prepcoach.example.com/careers/frontend",
    },
    {
        "title": "AI Research Engineer",
        "company": "PrepCoach",
        "location": "Bengaluru, India",
        "type": "Full-time",
        "description": "Develop LLM integrations for realistic mock interviews.",
        "requirements": ["Python", "PyTorch", "LLM experience"],
        "salary_range": "$100k - $160k",
        "application_url": "https://prepcoach.example.com/careers/ai-research",
    },
    {
        "title": "UI/UX Designer",
        "company": "DesignCo",
        "location": "Remote",
        "type": "Contract",
        "description": "Help us create clear, friendly experiences for candidates.",
        "requirements": ["Figma", "Design Systems", "Prototyping"],
        "salary_range": "$50/hr - $80/hr",
        "application_url": "https://prepcoach.example.com/careers/designer",
    },
]

SAMPLE_RESOURCES = [
    {
        "title": "Mastering System Design Interviews",
        "type": "Guide",
        "description": "A comprehensive guide to acing system design questions.",
        "category": "Interview Prep",
        "content": "System design basics...",
        "featured": True,
    },
    {
        "title": "Resume Building for Tech Roles",
        "type": "Article",
        "description": "How to make your resume stand out to recruiters.",
        "category": "Resume Tips",
        "content": "Your resume is your first impression...",
        "featured": True,
    },
    {
        "title": "How to Handle Behavioral Questions",
        "type": "Video",
        "description": "Learn the STAR method to answer tough interview questions.",
        "category": "Interview Prep",
        "content": "https://youtube.com/example",
        "featured": True,
    },
]


async def seed_career_content(db: AsyncSession) -> bool:
    """Insert the sample content when both career tables are empty. Returns True if seeded."""
    job_count = (await db.execute(select(func.count(JobListing.id)))).scalar() or 0
    resource_count = (await db.execute(select(func.count(CareerResource.id)))).scalar() or 0
    if job_count or resource_count:
        logger.info("Career content already present, skipping seed")
        return False

    db.add_all([JobListing(**job) for job in SAMPLE_JOBS])
    db.add_all([CareerResource(**resource) for resource in SAMPLE_RESOURCES])
    await db.commit()
    logger.info(
        f"Seeded {len(SAMPLE_JOBS)} job listings and {len(SAMPLE_RESOURCES)} career resources"
    )
    return True


async def main() -> None:
    setup_logging()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncSessionLocal() as db:
        await seed_career_content(db)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
