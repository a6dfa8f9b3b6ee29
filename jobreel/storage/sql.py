"""
Relational storage backend (SQLAlchemy Core).

Each operation is one transaction opened with get_db_session. Counters
are bumped with `col = col + 1` in a single UPDATE ... RETURNING, user
uniqueness is backed by unique constraints, and bookmark creation is an
INSERT ... ON CONFLICT DO NOTHING followed by a read, so concurrent
requests cannot produce duplicates.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import and_, func, insert, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from jobreel.db import tables
from jobreel.db.postgres import get_db_session, get_session_factory, test_postgres_connection
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

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _to_entity(model: Type[E], row) -> Optional[E]:
    if row is None:
        return None
    return model.model_validate(dict(row))


def _to_entities(model: Type[E], rows) -> List[E]:
    return [model.model_validate(dict(row)) for row in rows]


def _plain(data: Dict[str, Any]) -> Dict[str, Any]:
    """Enums to their values so they bind as plain strings."""
    return {k: (v.value if hasattr(v, "value") else v) for k, v in data.items()}


class SqlStorage(Storage):

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    def _session(self):
        return get_db_session(self._session_factory or get_session_factory())

    def ping(self) -> bool:
        return test_postgres_connection(self._session_factory or get_session_factory())

    # ============================================================
    # USERS
    # ============================================================

    def _find_user(self, db: Session, column, value: str):
        return db.execute(
            select(tables.users).where(func.lower(column) == value.lower())
        ).mappings().first()

    def _check_unique(self, db: Session, data: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        for field in ("username", "email"):
            value = data.get(field)
            if value is None:
                continue
            row = self._find_user(db, tables.users.c[field], value)
            if row is not None and row["id"] != exclude_id:
                raise DuplicateError(field, value)

    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            row = db.execute(select(tables.users).where(tables.users.c.id == user_id)).mappings().first()
            return _to_entity(User, row)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            return _to_entity(User, self._find_user(db, tables.users.c.username, username))

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as db:
            return _to_entity(User, self._find_user(db, tables.users.c.email, email))

    def create_user(self, data: Dict[str, Any]) -> User:
        try:
            with self._session() as db:
                self._check_unique(db, data)
                row = db.execute(
                    insert(tables.users).values(**_plain(data)).returning(tables.users)
                ).mappings().one()
                return _to_entity(User, row)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration
            raise DuplicateError("username or email") from exc

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        changes = {k: v for k, v in changes.items() if k not in IMMUTABLE_USER_FIELDS}
        if not changes:
            return self.get_user(user_id)
        try:
            with self._session() as db:
                self._check_unique(db, changes, exclude_id=user_id)
                row = db.execute(
                    update(tables.users)
                    .where(tables.users.c.id == user_id)
                    .values(**_plain(changes))
                    .returning(tables.users)
                ).mappings().first()
                return _to_entity(User, row)
        except IntegrityError as exc:
            raise DuplicateError("username or email") from exc

    # ============================================================
    # VIDEOS
    # ============================================================

    def _newest_videos(self):
        v = tables.videos
        return select(v).order_by(v.c.created_at.desc(), v.c.id.desc())

    def get_video(self, video_id: int) -> Optional[Video]:
        with self._session() as db:
            row = db.execute(select(tables.videos).where(tables.videos.c.id == video_id)).mappings().first()
            return _to_entity(Video, row)

    def get_videos_by_user(self, user_id: int) -> List[Video]:
        with self._session() as db:
            rows = db.execute(self._newest_videos().where(tables.videos.c.user_id == user_id)).mappings().all()
            return _to_entities(Video, rows)

    def get_videos_by_type(self, video_type: VideoType, limit: int = 10, offset: int = 0) -> List[Video]:
        stmt = (
            self._newest_videos()
            .where(tables.videos.c.video_type == VideoType(video_type).value)
            .limit(limit)
            .offset(offset)
        )
        with self._session() as db:
            return _to_entities(Video, db.execute(stmt).mappings().all())

    def create_video(self, data: Dict[str, Any]) -> Video:
        values = _plain(data)
        values.update({stat.value: 0 for stat in VideoStat})
        with self._session() as db:
            row = db.execute(insert(tables.videos).values(**values).returning(tables.videos)).mappings().one()
            return _to_entity(Video, row)

    def update_video(self, video_id: int, changes: Dict[str, Any]) -> Optional[Video]:
        changes = {k: v for k, v in changes.items() if k not in IMMUTABLE_VIDEO_FIELDS}
        if not changes:
            return self.get_video(video_id)
        with self._session() as db:
            row = db.execute(
                update(tables.videos)
                .where(tables.videos.c.id == video_id)
                .values(**_plain(changes))
                .returning(tables.videos)
            ).mappings().first()
            return _to_entity(Video, row)

    def _increment(self, db: Session, video_id: int, stat: VideoStat):
        column = tables.videos.c[VideoStat(stat).value]
        return db.execute(
            update(tables.videos)
            .where(tables.videos.c.id == video_id)
            .values({column: column + 1})
            .returning(tables.videos)
        ).mappings().first()

    def increment_video_stat(self, video_id: int, stat: VideoStat) -> Optional[Video]:
        with self._session() as db:
            return _to_entity(Video, self._increment(db, video_id, stat))

    def recommend_videos(self, user_id: int, limit: int = 10) -> List[Video]:
        user = self.get_user(user_id)
        if user is None:
            return []
        wanted = recommended_video_type(user.user_type)
        stmt = (
            self._newest_videos()
            .where(tables.videos.c.video_type == wanted.value, tables.videos.c.user_id != user_id)
            .limit(limit)
        )
        with self._session() as db:
            return _to_entities(Video, db.execute(stmt).mappings().all())

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def _newest_applications(self):
        a = tables.applications
        return select(a).order_by(a.c.created_at.desc(), a.c.id.desc())

    def get_application(self, application_id: int) -> Optional[Application]:
        with self._session() as db:
            row = db.execute(
                select(tables.applications).where(tables.applications.c.id == application_id)
            ).mappings().first()
            return _to_entity(Application, row)

    def get_applications_by_user(self, user_id: int) -> List[Application]:
        stmt = self._newest_applications().where(tables.applications.c.user_id == user_id)
        with self._session() as db:
            return _to_entities(Application, db.execute(stmt).mappings().all())

    def get_applications_by_employer(self, employer_id: int) -> List[Application]:
        stmt = self._newest_applications().where(tables.applications.c.employer_id == employer_id)
        with self._session() as db:
            return _to_entities(Application, db.execute(stmt).mappings().all())

    def create_application(self, data: Dict[str, Any]) -> Application:
        values = _plain({"status": ApplicationStatus.pending, **data})
        with self._session() as db:
            row = db.execute(
                insert(tables.applications).values(**values).returning(tables.applications)
            ).mappings().one()
            return _to_entity(Application, row)

    def update_application_status(self, application_id: int, status: ApplicationStatus) -> Optional[Application]:
        with self._session() as db:
            row = db.execute(
                update(tables.applications)
                .where(tables.applications.c.id == application_id)
                .values(status=ApplicationStatus(status).value)
                .returning(tables.applications)
            ).mappings().first()
            return _to_entity(Application, row)

    # ============================================================
    # COMMENTS
    # ============================================================

    def get_comments(self, video_id: int) -> List[Comment]:
        c = tables.comments
        stmt = select(c).where(c.c.video_id == video_id).order_by(c.c.created_at.desc(), c.c.id.desc())
        with self._session() as db:
            return _to_entities(Comment, db.execute(stmt).mappings().all())

    def create_comment(self, data: Dict[str, Any]) -> Comment:
        with self._session() as db:
            row = db.execute(
                insert(tables.comments).values(**_plain(data)).returning(tables.comments)
            ).mappings().one()
            # Same transaction keeps the cached counter in step with the rows
            self._increment(db, data["video_id"], VideoStat.comments)
            return _to_entity(Comment, row)

    # ============================================================
    # MESSAGES
    # ============================================================

    def _oldest_messages(self, *criteria):
        m = tables.messages
        return select(m).where(*criteria).order_by(m.c.created_at.asc(), m.c.id.asc())

    def get_messages_by_user(self, user_id: int) -> List[Message]:
        m = tables.messages.c
        stmt = self._oldest_messages(or_(m.sender_id == user_id, m.receiver_id == user_id))
        with self._session() as db:
            return _to_entities(Message, db.execute(stmt).mappings().all())

    def get_conversation(self, user1_id: int, user2_id: int) -> List[Message]:
        m = tables.messages.c
        stmt = self._oldest_messages(or_(
            and_(m.sender_id == user1_id, m.receiver_id == user2_id),
            and_(m.sender_id == user2_id, m.receiver_id == user1_id),
        ))
        with self._session() as db:
            return _to_entities(Message, db.execute(stmt).mappings().all())

    def create_message(self, data: Dict[str, Any]) -> Message:
        values = {**_plain(data), "read": False}
        with self._session() as db:
            row = db.execute(insert(tables.messages).values(**values).returning(tables.messages)).mappings().one()
            return _to_entity(Message, row)

    def mark_messages_as_read(self, sender_id: int, receiver_id: int) -> int:
        m = tables.messages.c
        with self._session() as db:
            result = db.execute(
                update(tables.messages)
                .where(m.sender_id == sender_id, m.receiver_id == receiver_id, m.read.is_(False))
                .values(read=True)
            )
            return result.rowcount or 0

    def count_unread(self, receiver_id: int) -> int:
        m = tables.messages.c
        stmt = select(func.count()).select_from(tables.messages).where(
            m.receiver_id == receiver_id, m.read.is_(False)
        )
        with self._session() as db:
            return db.execute(stmt).scalar_one()

    # ============================================================
    # BOOKMARKS
    # ============================================================

    def _find_bookmark(self, db: Session, user_id: int, video_id: int):
        b = tables.bookmarks.c
        return db.execute(
            select(tables.bookmarks).where(b.user_id == user_id, b.video_id == video_id)
        ).mappings().first()

    def get_bookmarks_by_user(self, user_id: int) -> List[Bookmark]:
        b = tables.bookmarks
        stmt = select(b).where(b.c.user_id == user_id).order_by(b.c.created_at.desc(), b.c.id.desc())
        with self._session() as db:
            return _to_entities(Bookmark, db.execute(stmt).mappings().all())

    def create_bookmark(self, data: Dict[str, Any]) -> Bookmark:
        user_id, video_id = data["user_id"], data["video_id"]
        with self._session() as db:
            make_insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
            if make_insert is None:
                # Generic dialects: unique constraint still guards, read back on conflict
                if self._find_bookmark(db, user_id, video_id) is None:
                    db.execute(insert(tables.bookmarks).values(user_id=user_id, video_id=video_id))
            else:
                db.execute(
                    make_insert(tables.bookmarks)
                    .values(user_id=user_id, video_id=video_id)
                    .on_conflict_do_nothing(index_elements=["user_id", "video_id"])
                )
            return _to_entity(Bookmark, self._find_bookmark(db, user_id, video_id))

    def delete_bookmark(self, user_id: int, video_id: int) -> None:
        b = tables.bookmarks.c
        with self._session() as db:
            db.execute(tables.bookmarks.delete().where(b.user_id == user_id, b.video_id == video_id))

    def is_bookmarked(self, user_id: int, video_id: int) -> bool:
        with self._session() as db:
            return self._find_bookmark(db, user_id, video_id) is not None
