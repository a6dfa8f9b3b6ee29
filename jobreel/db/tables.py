"""
Table definitions (SQLAlchemy Core).

These mirror migrations/0001_initial_schema.up.sql, which is what
creates the tables in PostgreSQL. The metadata is also used to build a
throwaway SQLite schema in tests.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


metadata = MetaData()

# JSONB on PostgreSQL, plain JSON elsewhere
StringList = JSON().with_variant(JSONB(), "postgresql")

users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True),
    Column("username", String(50), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("full_name", String(100), nullable=False),
    Column("headline", String(200)),
    Column("bio", Text),
    Column("location", String(200)),
    Column("profile_image", Text),
    Column("user_type", String(20), nullable=False),
    Column("company_name", String(200)),
    Column("company_logo", Text),
    Column("skills", StringList, nullable=False, default=list),
    Column("resume_url", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
)

videos = Table(
    "videos", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, nullable=False, index=True),
    Column("title", String(200), nullable=False),
    Column("description", Text),
    Column("video_url", Text, nullable=False),
    Column("thumbnail_url", Text),
    Column("video_type", String(10), nullable=False, index=True),
    Column("views", Integer, nullable=False, default=0),
    Column("likes", Integer, nullable=False, default=0),
    Column("comments", Integer, nullable=False, default=0),
    Column("shares", Integer, nullable=False, default=0),
    Column("skills", StringList, nullable=False, default=list),
    Column("salary", String(100)),
    Column("location", String(200)),
    Column("job_type", String(50)),
    Column("duration", Integer),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
)

applications = Table(
    "applications", metadata,
    Column("id", Integer, primary_key=True),
    Column("job_video_id", Integer, nullable=False),
    Column("user_video_id", Integer, nullable=False),
    Column("user_id", Integer, nullable=False, index=True),
    Column("employer_id", Integer, nullable=False, index=True),
    Column("status", String(20), nullable=False, default="pending"),
    Column("note", Text),
    Column("resume_url", Text),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
)

comments = Table(
    "comments", metadata,
    Column("id", Integer, primary_key=True),
    Column("video_id", Integer, nullable=False, index=True),
    Column("user_id", Integer, nullable=False),
    Column("content", Text, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
)

messages = Table(
    "messages", metadata,
    Column("id", Integer, primary_key=True),
    Column("sender_id", Integer, nullable=False, index=True),
    Column("receiver_id", Integer, nullable=False, index=True),
    Column("content", Text, nullable=False),
    Column("read", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
)

bookmarks = Table(
    "bookmarks", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, nullable=False),
    Column("video_id", Integer, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False, default=_utcnow),
    UniqueConstraint("user_id", "video_id", name="uq_bookmarks_user_video"),
)
