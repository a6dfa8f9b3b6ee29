"""
Storage interface - the repository every backend implements.

Handlers depend on this interface only, so the in-memory store and the
SQL store are interchangeable. Lookups return None for unknown ids;
the API layer turns that into a 404.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from jobreel.models import (
    Application,
    ApplicationStatus,
    Bookmark,
    Comment,
    Message,
    User,
    Video,
    VideoStat,
    VideoType,
)

# Fields a video update may never touch
IMMUTABLE_VIDEO_FIELDS = frozenset(
    {"id", "user_id", "video_type", "created_at"} | {stat.value for stat in VideoStat}
)

# Fields a user update may never touch
IMMUTABLE_USER_FIELDS = frozenset({"id", "user_type", "created_at"})


class DuplicateError(Exception):
    """A uniqueness constraint would be violated (username, email)."""

    def __init__(self, field: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(f"{field} already exists")


class Storage(ABC):

    # ---------------- users ----------------

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, data: Dict[str, Any]) -> User:
        """Store a new user. Raises DuplicateError if username or email is taken."""

    @abstractmethod
    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]: ...

    # ---------------- videos ----------------

    @abstractmethod
    def get_video(self, video_id: int) -> Optional[Video]: ...

    @abstractmethod
    def get_videos_by_user(self, user_id: int) -> List[Video]: ...

    @abstractmethod
    def get_videos_by_type(self, video_type: VideoType, limit: int = 10, offset: int = 0) -> List[Video]: ...

    @abstractmethod
    def create_video(self, data: Dict[str, Any]) -> Video: ...

    @abstractmethod
    def update_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[Video]: ...

    @abstractmethod
    def increment_video_stat(self, video_id: int, stat: VideoStat) -> Optional[Video]:
        """Atomically add one to a counter. Returns the updated video."""

    @abstractmethod
    def recommend_videos(self, user_id: int, limit: int = 10) -> List[Video]:
        """
        Newest videos of the kind opposite to the user's role
        (job seekers get job videos, employers get resumes),
        never including the user's own videos.
        """

    # ---------------- applications ----------------

    @abstractmethod
    def get_application(self, application_id: int) -> Optional[Application]: ...

    @abstractmethod
    def get_applications_by_user(self, user_id: int) -> List[Application]: ...

    @abstractmethod
    def get_applications_by_employer(self, employer_id: int) -> List[Application]: ...

    @abstractmethod
    def create_application(self, data: Dict[str, Any]) -> Application: ...

    @abstractmethod
    def update_application_status(self, application_id: int, status: ApplicationStatus) -> Optional[Application]: ...

    # ---------------- comments ----------------

    @abstractmethod
    def get_comments(self, video_id: int) -> List[Comment]: ...

    @abstractmethod
    def create_comment(self, data: Dict[str, Any]) -> Comment:
        """Store a comment and bump the parent video's comment counter."""

    # ---------------- messages ----------------

    @abstractmethod
    def get_messages_by_user(self, user_id: int) -> List[Message]: ...

    @abstractmethod
    def get_conversation(self, user1_id: int, user2_id: int) -> List[Message]:
        """Messages in both directions, oldest first."""

    @abstractmethod
    def create_message(self, data: Dict[str, Any]) -> Message: ...

    @abstractmethod
    def mark_messages_as_read(self, sender_id: int, receiver_id: int) -> int:
        """Flip read on sender -> receiver messages. Returns how many changed."""

    @abstractmethod
    def count_unread(self, receiver_id: int) -> int: ...

    # ---------------- bookmarks ----------------

    @abstractmethod
    def get_bookmarks_by_user(self, user_id: int) -> List[Bookmark]: ...

    @abstractmethod
    def create_bookmark(self, data: Dict[str, Any]) -> Bookmark:
        """Idempotent: an existing (user, video) pair is returned as is."""

    @abstractmethod
    def delete_bookmark(self, user_id: int, video_id: int) -> None:
        """No-op when the bookmark does not exist."""

    @abstractmethod
    def is_bookmarked(self, user_id: int, video_id: int) -> bool: ...

    # ---------------- health ----------------

    def ping(self) -> bool:
        return True
