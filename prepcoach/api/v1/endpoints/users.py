"""Current-user profile endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prepcoach.api.v1.dependencies import get_current_user_id
from prepcoach.core.database import get_db
from prepcoach.core.exceptions import NotFoundError
from prepcoach.models.user import User
from prepcoach.schemas.response import APIResponse
from prepcoach.schemas.user import UserProfileUpdate, UserResponse
from prepcoach.services.repositories import UserRepository

router = APIRouter()


@router.get("/me", response_model=APIResponse[UserResponse])
async def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Get the current user's profile."""
    user = await UserRepository(db).get(user_id)
    if not user:
        raise NotFoundError("Profile not found")
    return APIResponse(data=_user_to_response(user))


@router.put("/me", response_model=APIResponse[UserResponse])
async def update_my_profile(
    data: UserProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create or update the current user's profile."""
    users = UserRepository(db)
    user = await users.get(user_id)
    if not user:
        user = User(id=user_id, skills=[], badges=[])

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "skills" and value is not None:
            value = [s.strip() for s in value if s and s.strip()]
        setattr(user, field, value)

    user = await users.save(user)
    return APIResponse(message="Profile updated", data=_user_to_response(user))


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        skills=user.skills or [],
        badges=user.badges or [],
        created_at=user.created_at.isoformat(),
    )
