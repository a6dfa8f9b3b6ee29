"""
Direct Message Routes

GET /messages - All of my messages
GET /messages/unread-count - Number of unread messages to me
GET /messages/{user_id} - Conversation with a user (marks theirs as read)
POST /messages - Send a message
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from jobreel.core.auth import get_current_user
from jobreel.models import User
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import (
    DirectMessageCreate, DirectMessageResponse, UnreadCountResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.get("", response_model=List[DirectMessageResponse])
async def list_messages(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Every message sent or received, oldest first."""
    return storage.get_messages_by_user(user.id)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return UnreadCountResponse(unread=storage.count_unread(user.id))


@router.get("/{user_id}", response_model=List[DirectMessageResponse])
async def get_conversation(
    user_id: int,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Conversation with another user, oldest first.

    Their messages to me are marked read after the fetch, so the
    response still shows which ones were new.
    """
    messages = storage.get_conversation(user.id, user_id)
    marked = storage.mark_messages_as_read(sender_id=user_id, receiver_id=user.id)
    if marked:
        logger.debug("Marked %d messages from %d to %d as read", marked, user_id, user.id)
    return messages


@router.post("", response_model=DirectMessageResponse, status_code=201)
async def send_message(
    data: DirectMessageCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Send a direct message."""
    if data.receiver_id == user.id:
        raise HTTPException(status_code=400, detail="You cannot message yourself")
    if not storage.get_user(data.receiver_id):
        raise HTTPException(status_code=404, detail="Receiver not found")

    return storage.create_message({
        "sender_id": user.id,
        "receiver_id": data.receiver_id,
        "content": data.content,
    })
