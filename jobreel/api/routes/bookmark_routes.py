"""
Bookmark Routes

GET /bookmarks - My bookmarks
POST /bookmarks - Bookmark a video (idempotent)
GET /bookmarks/{video_id} - Is this video bookmarked?
DELETE /bookmarks/{video_id} - Remove a bookmark
"""

from fastapi import APIRouter, HTTPException, Depends, Response
from typing import List

from jobreel.core.auth import get_current_user
from jobreel.models import User
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import (
    BookmarkCreate, BookmarkResponse, BookmarkStatusResponse
)

router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


@router.get("", response_model=List[BookmarkResponse])
async def list_bookmarks(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.get_bookmarks_by_user(user.id)


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    data: BookmarkCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Bookmark a video. Bookmarking twice returns the existing bookmark."""
    if not storage.get_video(data.video_id):
        raise HTTPException(status_code=404, detail="Video not found")
    return storage.create_bookmark({"user_id": user.id, "video_id": data.video_id})


@router.get("/{video_id}", response_model=BookmarkStatusResponse)
async def bookmark_status(
    video_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return BookmarkStatusResponse(is_bookmarked=storage.is_bookmarked(user.id, video_id))


@router.delete("/{video_id}", status_code=204)
async def delete_bookmark(
    video_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Remove a bookmark. Succeeds whether or not it existed."""
    storage.delete_bookmark(user.id, video_id)
    return Response(status_code=204)
