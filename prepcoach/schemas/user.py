"""User profile Pydantic schemas."""

from pydantic import BaseModel, EmailStr, Field


class UserProfileUpdate(BaseModel):
    """Schema for updating the current user's profile."""

    email: EmailStr | None = None
    full_name: str | None = Field(None, max_length=255)
    avatar_url: str | None = Field(None, max_length=512)
    skills: list[str] | None = None


class UserResponse(BaseModel):
    """Schema for user response."""

    id: str
    email: str | None
    full_name: str | None
    avatar_url: str | None
    skills: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)
    created_at: str

    class Config:
        from_attributes = True
