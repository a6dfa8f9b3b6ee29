"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: what the store holds
- Schemas: API contract (what client sends/receives)
"""

from jobreel.schemas.schemas import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    AuthResponse,
    BookmarkCreate,
    BookmarkResponse,
    BookmarkStatusResponse,
    CommentCreate,
    CommentResponse,
    DirectMessageCreate,
    DirectMessageResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    UnreadCountResponse,
    UploadResponse,
    UserResponse,
    UserUpdate,
    VideoCreate,
    VideoResponse,
    VideoUpdate,
)
