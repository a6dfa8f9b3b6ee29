"""
Database module - SQLAlchemy engine/session helpers, tables and migrations.
"""
from jobreel.db.postgres import get_db_session, get_engine, test_postgres_connection

__all__ = [
    "get_db_session",
    "get_engine",
    "test_postgres_connection",
]
