"""Database models."""

from prepcoach.models.user import User
from prepcoach.models.interview import Interview
from prepcoach.models.interview_session import InterviewSession
from prepcoach.models.career import JobListing, CareerResource

__all__ = ["User", "Interview", "InterviewSession", "JobListing", "CareerResource"]
