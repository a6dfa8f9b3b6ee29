"""
Models module - entity records shared by storage and API layers.

Models vs schemas:
- Models: what the store holds (including secrets like password hashes)
- Schemas: API contract (what client sends/receives)
"""

from jobreel.models.entities import (
    Application,
    ApplicationStatus,
    Bookmark,
    Comment,
    Message,
    User,
    UserType,
    Video,
    VideoStat,
    VideoType,
    recommended_video_type,
    video_type_for,
)

__all__ = [
    "Application",
    "ApplicationStatus",
    "Bookmark",
    "Comment",
    "Message",
    "User",
    "UserType",
    "Video",
    "VideoStat",
    "VideoType",
    "recommended_video_type",
    "video_type_for",
]
