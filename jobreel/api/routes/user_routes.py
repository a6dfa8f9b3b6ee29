"""
User Routes

GET /users/me - Get own profile
PATCH /users/me - Update own profile
GET /users/{user_id} - Get a user's public profile
GET /users/{user_id}/videos - Get a user's videos
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from jobreel.core.auth import get_current_user
from jobreel.models import User
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import UserUpdate, UserResponse, VideoResponse

router = APIRouter(prefix="/users", tags=["Users"])

# Fields that may be left out but never cleared
NON_NULLABLE_FIELDS = {"username", "email", "full_name", "skills"}


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated user's profile."""
    return UserResponse.model_validate(user)


@router.patch("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Partially update own profile. Only provided fields change."""
    changes = {
        key: value for key, value in data.model_dump(exclude_unset=True).items()
        if value is not None or key not in NON_NULLABLE_FIELDS
    }

    if "username" in changes:
        other = storage.get_user_by_username(changes["username"])
        if other and other.id != user.id:
            raise HTTPException(status_code=400, detail="Username already taken")
    if "email" in changes:
        other = storage.get_user_by_email(changes["email"])
        if other and other.id != user.id:
            raise HTTPException(status_code=400, detail="Email already in use")

    updated = storage.update_user(user.id, changes)
    if not updated:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(updated)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    """Get a user's public profile."""
    user = storage.get_user(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)


@router.get("/{user_id}/videos", response_model=List[VideoResponse])
async def get_user_videos(user_id: int, storage: Storage = Depends(get_storage)):
    """Videos posted by a user, newest first."""
    if not storage.get_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return storage.get_videos_by_user(user_id)
