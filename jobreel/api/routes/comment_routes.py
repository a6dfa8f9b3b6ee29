"""
Comment Routes

GET /videos/{video_id}/comments - List comments (public)
POST /videos/{video_id}/comments - Add a comment
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from jobreel.core.auth import get_current_user
from jobreel.models import User
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import CommentCreate, CommentResponse

router = APIRouter(prefix="/videos", tags=["Comments"])


@router.get("/{video_id}/comments", response_model=List[CommentResponse])
async def list_comments(video_id: int, storage: Storage = Depends(get_storage)):
    """Comments on a video, newest first."""
    return storage.get_comments(video_id)


@router.post("/{video_id}/comments", response_model=CommentResponse, status_code=201)
async def create_comment(
    video_id: int,
    data: CommentCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Comment on a video. Also bumps the video's comment count."""
    if not storage.get_video(video_id):
        raise HTTPException(status_code=404, detail="Video not found")
    return storage.create_comment({"video_id": video_id, "user_id": user.id, "content": data.content})
