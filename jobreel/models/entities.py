"""
Entity records held by the storage layer.

Every entity is owned by the store. Relationships are plain id fields,
resolved by lookup at read time.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    job_seeker = "job_seeker"
    employer = "employer"


class VideoType(str, Enum):
    resume = "resume"
    job = "job"


class VideoStat(str, Enum):
    views = "views"
    likes = "likes"
    comments = "comments"
    shares = "shares"


class ApplicationStatus(str, Enum):
    pending = "pending"
    viewed = "viewed"
    interview = "interview"
    rejected = "rejected"
    offered = "offered"


def video_type_for(user_type: UserType) -> VideoType:
    """Kind of video a user of this role authors."""
    return VideoType.job if user_type == UserType.employer else VideoType.resume


def recommended_video_type(user_type: UserType) -> VideoType:
    """Kind of video shown to a user of this role: the opposite side's content."""
    return VideoType.job if user_type == UserType.job_seeker else VideoType.resume


# ============================================================
# ENTITIES
# ============================================================

class Entity(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=False)

    id: int
    created_at: datetime


class User(Entity):
    username: str
    password: str  # bcrypt hash, never leaves the API layer
    email: str
    full_name: str
    headline: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    profile_image: Optional[str] = None
    user_type: UserType
    company_name: Optional[str] = None
    company_logo: Optional[str] = None
    skills: List[str] = []
    resume_url: Optional[str] = None


class Video(Entity):
    user_id: int
    title: str
    description: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None
    video_type: VideoType
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    skills: List[str] = []
    salary: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    duration: Optional[int] = None


class Application(Entity):
    job_video_id: int
    user_video_id: int
    user_id: int
    employer_id: int
    status: ApplicationStatus = ApplicationStatus.pending
    note: Optional[str] = None
    resume_url: Optional[str] = None


class Comment(Entity):
    video_id: int
    user_id: int
    content: str


class Message(Entity):
    sender_id: int
    receiver_id: int
    content: str
    read: bool = False


class Bookmark(Entity):
    user_id: int
    video_id: int
