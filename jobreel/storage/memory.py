"""
In-memory storage backend.

One dict per entity kind plus a monotonic id counter per kind. Every
operation runs under a single re-entrant lock so counter increments,
uniqueness checks and bookmark upserts are atomic with respect to
concurrent requests.
"""

import itertools
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from jobreel.models.entities import Entity
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
    recommended_video_type,
)
from jobreel.storage.base import (
    IMMUTABLE_USER_FIELDS,
    IMMUTABLE_VIDEO_FIELDS,
    DuplicateError,
    Storage,
)

E = TypeVar("E", bound=Entity)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _newest_first(items: Iterable[E]) -> List[E]:
    # id breaks ties between entities created in the same clock tick
    return sorted(items, key=lambda e: (e.created_at, e.id), reverse=True)


def _oldest_first(items: Iterable[E]) -> List[E]:
    return sorted(items, key=lambda e: (e.created_at, e.id))


class MemStorage(Storage):

    def __init__(self):
        self._lock = threading.RLock()
        self._users: Dict[int, User] = {}
        self._videos: Dict[int, Video] = {}
        self._applications: Dict[int, Application] = {}
        self._comments: Dict[int, Comment] = {}
        self._messages: Dict[int, Message] = {}
        self._bookmarks: Dict[int, Bookmark] = {}
        self._ids = {
            kind: itertools.count(1)
            for kind in ("users", "videos", "applications", "comments", "messages", "bookmarks")
        }

    def _stamp(self, kind: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return {**data, "id": next(self._ids[kind]), "created_at": _now()}

    def _select(self, table: Dict[int, E], predicate: Callable[[E], bool]) -> List[E]:
        return [item for item in table.values() if predicate(item)]

    # ============================================================
    # USERS
    # ============================================================

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        wanted = username.lower()
        with self._lock:
            return next((u for u in self._users.values() if u.username.lower() == wanted), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = email.lower()
        with self._lock:
            return next((u for u in self._users.values() if u.email.lower() == wanted), None)

    def _check_unique(self, data: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        for field, finder in (("username", self.get_user_by_username), ("email", self.get_user_by_email)):
            value = data.get(field)
            if value is None:
                continue
            existing = finder(value)
            if existing is not None and existing.id != exclude_id:
                raise DuplicateError(field, value)

    def create_user(self, data: Dict[str, Any]) -> User:
        with self._lock:
            self._check_unique(data)
            user = User(**self._stamp("users", data))
            self._users[user.id] = user
            return user

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        changes = {k: v for k, v in changes.items() if k not in IMMUTABLE_USER_FIELDS}
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            self._check_unique(changes, exclude_id=user_id)
            updated = user.model_copy(update=changes)
            self._users[user_id] = updated
            return updated

    # ============================================================
    # VIDEOS
    # ============================================================

    def get_video(self, video_id: int) -> Optional[Video]:
        with self._lock:
            return self._videos.get(video_id)

    def get_videos_by_user(self, user_id: int) -> List[Video]:
        with self._lock:
            return _newest_first(self._select(self._videos, lambda v: v.user_id == user_id))

    def get_videos_by_type(self, video_type: VideoType, limit: int = 10, offset: int = 0) -> List[Video]:
        with self._lock:
            matching = _newest_first(self._select(self._videos, lambda v: v.video_type == video_type))
        return matching[offset:offset + limit]

    def create_video(self, data: Dict[str, Any]) -> Video:
        counters = {stat.value: 0 for stat in VideoStat}
        with self._lock:
            video = Video(**self._stamp("videos", {**data, **counters}))
            self._videos[video.id] = video
            return video

    def update_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[Video]:
        changes = {k: v for k, v in changes.items() if k not in IMMUTABLE_VIDEO_FIELDS}
        with self._lock:
            video = self._videos.get(video_id)
            if video is None:
                return None
            updated = video.model_copy(update=changes)
            self._videos[video_id] = updated
            return updated

    def increment_video_stat(self, video_id: int, stat: VideoStat) -> Optional[Video]:
        field = VideoStat(stat).value
        with self._lock:
            video = self._videos.get(video_id)
            if video is None:
                return None
            updated = video.model_copy(update={field: getattr(video, field) + 1})
            self._videos[video_id] = updated
            return updated

    def recommend_videos(self, user_id: int, limit: int = 10) -> List[Video]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return []
            wanted = recommended_video_type(user.user_type)
            matching = self._select(
                self._videos, lambda v: v.video_type == wanted and v.user_id != user_id
            )
        return _newest_first(matching)[:limit]

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def get_application(self, application_id: int) -> Optional[Application]:
        with self._lock:
            return self._applications.get(application_id)

    def get_applications_by_user(self, user_id: int) -> List[Application]:
        with self._lock:
            return _newest_first(self._select(self._applications, lambda a: a.user_id == user_id))

    def get_applications_by_employer(self, employer_id: int) -> List[Application]:
        with self._lock:
            return _newest_first(self._select(self._applications, lambda a: a.employer_id == employer_id))

    def create_application(self, data: Dict[str, Any]) -> Application:
        data = {"status": ApplicationStatus.pending, **data}
        with self._lock:
            application = Application(**self._stamp("applications", data))
            self._applications[application.id] = application
            return application

    def update_application_status(self, application_id: int, status: ApplicationStatus) -> Optional[Application]:
        with self._lock:
            application = self._applications.get(application_id)
            if application is None:
                return None
            updated = application.model_copy(update={"status": ApplicationStatus(status)})
            self._applications[application_id] = updated
            return updated

    # ============================================================
    # COMMENTS
    # ============================================================

    def get_comments(self, video_id: int) -> List[Comment]:
        with self._lock:
            return _newest_first(self._select(self._comments, lambda c: c.video_id == video_id))

    def create_comment(self, data: Dict[str, Any]) -> Comment:
        with self._lock:
            comment = Comment(**self._stamp("comments", data))
            self._comments[comment.id] = comment
            self.increment_video_stat(comment.video_id, VideoStat.comments)
            return comment

    # ============================================================
    # MESSAGES
    # ============================================================

    def get_messages_by_user(self, user_id: int) -> List[Message]:
        with self._lock:
            return _oldest_first(self._select(
                self._messages, lambda m: m.sender_id == user_id or m.receiver_id == user_id
            ))

    def get_conversation(self, user1_id: int, user2_id: int) -> List[Message]:
        pair = {user1_id, user2_id}
        with self._lock:
            return _oldest_first(self._select(
                self._messages, lambda m: {m.sender_id, m.receiver_id} == pair
            ))

    def create_message(self, data: Dict[str, Any]) -> Message:
        with self._lock:
            message = Message(**self._stamp("messages", {**data, "read": False}))
            self._messages[message.id] = message
            return message

    def mark_messages_as_read(self, sender_id: int, receiver_id: int) -> int:
        changed = 0
        with self._lock:
            for message in list(self._messages.values()):
                if message.sender_id == sender_id and message.receiver_id == receiver_id and not message.read:
                    self._messages[message.id] = message.model_copy(update={"read": True})
                    changed += 1
        return changed

    def count_unread(self, receiver_id: int) -> int:
        with self._lock:
            return sum(1 for m in self._messages.values() if m.receiver_id == receiver_id and not m.read)

    # ============================================================
    # BOOKMARKS
    # ============================================================

    def _find_bookmark(self, user_id: int, video_id: int) -> Optional[Bookmark]:
        return next(
            (b for b in self._bookmarks.values() if b.user_id == user_id and b.video_id == video_id),
            None,
        )

    def get_bookmarks_by_user(self, user_id: int) -> List[Bookmark]:
        with self._lock:
            return _newest_first(self._select(self._bookmarks, lambda b: b.user_id == user_id))

    def create_bookmark(self, data: Dict[str, Any]) -> Bookmark:
        with self._lock:
            existing = self._find_bookmark(data["user_id"], data["video_id"])
            if existing is not None:
                return existing
            bookmark = Bookmark(**self._stamp("bookmarks", data))
            self._bookmarks[bookmark.id] = bookmark
            return bookmark

    def delete_bookmark(self, user_id: int, video_id: int) -> None:
        with self._lock:
            existing = self._find_bookmark(user_id, video_id)
            if existing is not None:
                del self._bookmarks[existing.id]

    def is_bookmarked(self, user_id: int, video_id: int) -> bool:
        with self._lock:
            return self._find_bookmark(user_id, video_id) is not None
