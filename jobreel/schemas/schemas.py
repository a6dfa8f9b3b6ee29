"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Enums live with the entities in jobreel.models and are re-exported here.
"""

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field
from typing import Annotated, Optional, List
from datetime import datetime

from jobreel.models import ApplicationStatus, UserType, VideoType


def _clean_skills(skills: List[str]) -> List[str]:
    """Strip blanks and duplicates, keeping first-seen order."""
    seen = set()
    cleaned = []
    for skill in skills:
        skill = skill.strip()
        if skill and skill.lower() not in seen:
            seen.add(skill.lower())
            cleaned.append(skill)
    return cleaned


SkillList = Annotated[List[str], AfterValidator(_clean_skills)]


# ============================================================
# AUTH / USER SCHEMAS
# ============================================================

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=8, max_length=72)
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=100)
    user_type: UserType
    headline: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    profile_image: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=200)
    company_logo: Optional[str] = None
    skills: SkillList = []
    resume_url: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str


class UserUpdate(BaseModel):
    """Profile edit. Password, role and id are not editable here."""
    model_config = ConfigDict(extra="forbid")

    username: Optional[str] = Field(None, min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=1, max_length=100)
    headline: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    profile_image: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=200)
    company_logo: Optional[str] = None
    skills: Optional[SkillList] = None
    resume_url: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
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
    created_at: datetime


class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"


# ============================================================
# VIDEO SCHEMAS
# ============================================================

class VideoCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    video_url: str = Field(..., min_length=1)
    thumbnail_url: Optional[str] = None
    # Defaults to the kind matching the poster's role
    video_type: Optional[VideoType] = None
    skills: SkillList = []
    salary: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=200)
    job_type: Optional[str] = Field(None, max_length=50)
    duration: Optional[int] = Field(None, ge=1, le=60, description="Length in seconds")


class VideoUpdate(BaseModel):
    """Owner edits. Kind and counters cannot change."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    skills: Optional[SkillList] = None
    salary: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=200)
    job_type: Optional[str] = Field(None, max_length=50)
    duration: Optional[int] = Field(None, ge=1, le=60)


class VideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    video_url: str
    thumbnail_url: Optional[str] = None
    video_type: VideoType
    views: int
    likes: int
    comments: int
    shares: int
    skills: List[str] = []
    salary: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    duration: Optional[int] = None
    created_at: datetime


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    job_video_id: int
    user_video_id: int
    note: Optional[str] = Field(None, max_length=2000)
    resume_url: Optional[str] = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    job_video_id: int
    user_video_id: int
    user_id: int
    employer_id: int
    status: ApplicationStatus
    note: Optional[str] = None
    resume_url: Optional[str] = None
    created_at: datetime


# ============================================================
# COMMENT SCHEMAS
# ============================================================

class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    video_id: int
    user_id: int
    content: str
    created_at: datetime


# ============================================================
# DIRECT MESSAGE SCHEMAS
# ============================================================

class DirectMessageCreate(BaseModel):
    receiver_id: int
    content: str = Field(..., min_length=1, max_length=2000)


class DirectMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int
    receiver_id: int
    content: str
    read: bool
    created_at: datetime


class UnreadCountResponse(BaseModel):
    unread: int


# ============================================================
# BOOKMARK SCHEMAS
# ============================================================

class BookmarkCreate(BaseModel):
    video_id: int


class BookmarkResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    video_id: int
    created_at: datetime


class BookmarkStatusResponse(BaseModel):
    is_bookmarked: bool


# ============================================================
# UPLOAD SCHEMAS
# ============================================================

class UploadResponse(BaseModel):
    bucket: str
    path: str
    url: str
    size: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True