"""
Video Routes

GET /videos - List videos of one kind (public)
GET /videos/recommended - Feed for the current user
GET /videos/{video_id} - Get video details (counts a view)
POST /videos - Post a video (employers: job, job seekers: resume)
PATCH /videos/{video_id} - Edit own video
POST /videos/{video_id}/like - Like a video
POST /videos/{video_id}/share - Share a video
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from jobreel.core.auth import get_current_user
from jobreel.models import User, VideoStat, VideoType, video_type_for
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import VideoCreate, VideoUpdate, VideoResponse

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get("", response_model=List[VideoResponse])
async def list_videos(
    video_type: Optional[VideoType] = Query(None, alias="type", description="job or resume"),
    limit: int = Query(10, ge=1, le=50),
    offset: int = Query(0, ge=0),
    storage: Storage = Depends(get_storage),
):
    """List videos of one kind, newest first."""
    if video_type is None:
        raise HTTPException(status_code=400, detail="Video type is required (job or resume)")
    return storage.get_videos_by_type(video_type, limit=limit, offset=offset)


# Declared before /{video_id} so "recommended" is not parsed as an id
@router.get("/recommended", response_model=List[VideoResponse])
async def recommended_videos(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Videos for the current user's feed.

    Job seekers see job videos, employers see resume videos.
    The user's own videos are never included.
    """
    return storage.recommend_videos(user.id, limit=limit)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: int, storage: Storage = Depends(get_storage)):
    """Get a video. Every fetch counts as a view."""
    video = storage.increment_video_stat(video_id, VideoStat.views)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    return video


@router.post("", response_model=VideoResponse, status_code=201)
async def create_video(
    data: VideoCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Post a video. The kind follows the poster's role."""
    allowed = video_type_for(user.user_type)
    if data.video_type is not None and data.video_type != allowed:
        raise HTTPException(
            status_code=400,
            detail=f"{user.user_type.value} accounts can only post {allowed.value} videos"
        )

    video_data = data.model_dump(exclude={"video_type"})
    video_data.update(user_id=user.id, video_type=allowed)
    return storage.create_video(video_data)


@router.patch("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: int,
    data: VideoUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Edit own video. The kind and counters cannot change."""
    video = storage.get_video(video_id)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    if video.user_id != user.id:
        raise HTTPException(status_code=403, detail="You can only edit your own videos")

    changes = data.model_dump(exclude_unset=True)
    if changes.get("title") is None:
        changes.pop("title", None)
    if changes.get("skills") is None:
        changes.pop("skills", None)
    return storage.update_video(video_id, changes)


@router.post("/{video_id}/like", response_model=VideoResponse)
async def like_video(
    video_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Add a like."""
    video = storage.increment_video_stat(video_id, VideoStat.likes)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    return video


@router.post("/{video_id}/share", response_model=VideoResponse)
async def share_video(
    video_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Count a share."""
    video = storage.increment_video_stat(video_id, VideoStat.shares)
    if not video:
        raise HTTPException(status_code=404, detail="Video not found")
    return video
