"""
Migration runner - versioned SQL scripts tracked in a `migrations` table.

Layout of the migrations directory:
    0001_initial_schema.up.sql
    0001_initial_schema.down.sql
    0002_add_something.up.sql
    ...

`migrate` applies every pending up-script in version order, each in its
own transaction, and records its name. `rollback` runs down-scripts for
the most recently applied versions and deletes their records.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.dialects import postgresql
from sqlalchemy.orm import sessionmaker
from sqlalchemy.schema import CreateIndex, CreateTable

from jobreel.db.postgres import get_db_session, get_session_factory
from jobreel.db.tables import metadata

logger = logging.getLogger(__name__)

MIGRATION_FILE = re.compile(r"^(?P<version>\d{4})_(?P<slug>[a-z0-9_]+)\.(?P<direction>up|down)\.sql$")

CREATE_MIGRATIONS_TABLE = {
    "postgresql": """
        CREATE TABLE IF NOT EXISTS migrations (
            id SERIAL PRIMARY KEY,
            name VARCHAR(255) NOT NULL UNIQUE,
            timestamp TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
    "sqlite": """
        CREATE TABLE IF NOT EXISTS migrations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name VARCHAR(255) NOT NULL UNIQUE,
            timestamp TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        )
    """,
}

UP_TEMPLATE = """-- {name}: write the schema change here, e.g.
-- CREATE TABLE your_table (
--     id SERIAL PRIMARY KEY,
--     name TEXT NOT NULL
-- );
"""

DOWN_TEMPLATE = """-- {name}: undo the up-script here, e.g.
-- DROP TABLE your_table;
"""


class MigrationError(Exception):
    pass


@dataclass
class Migration:
    version: int
    name: str
    up_path: Path
    down_path: Optional[Path]

    def read_up(self) -> str:
        return self.up_path.read_text(encoding="utf-8")

    def read_down(self) -> str:
        if self.down_path is None or not self.down_path.exists():
            raise MigrationError(f"Migration {self.name} has no down script")
        return self.down_path.read_text(encoding="utf-8")


def initial_schema_sql():
    """Render (up, down) scripts for the current table definitions."""
    dialect = postgresql.dialect()
    up = []
    for table in metadata.sorted_tables:
        up.append(str(CreateTable(table).compile(dialect=dialect)).strip() + ";")
        for index in sorted(table.indexes, key=lambda i: str(i.name)):
            up.append(str(CreateIndex(index).compile(dialect=dialect)).strip() + ";")
    down = [f"DROP TABLE IF EXISTS {table.name};" for table in reversed(metadata.sorted_tables)]
    return "\n\n".join(up) + "\n", "\n".join(down) + "\n"


DOLLAR_TAG = re.compile(r"\$[A-Za-z_0-9]*\$")


def split_statements(sql: str) -> List[str]:
    """
    Split a script on top-level semicolons, dropping comment-only chunks.

    Semicolons inside '...' / "..." literals, `--` line comments and
    PostgreSQL dollar-quoted bodies ($$ ... $$, $fn$ ... $fn$) are kept.
    Block comments (/* */) are not recognised.
    """
    statements = []
    current = []
    i = 0
    while i < len(sql):
        char = sql[i]
        if char in ("'", '"'):
            end = i + 1
            while end < len(sql):
                if sql[end] == char:
                    # Doubled quote is an escaped quote
                    if end + 1 < len(sql) and sql[end + 1] == char:
                        end += 2
                        continue
                    break
                end += 1
            current.append(sql[i:end + 1])
            i = end + 1
        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            end = len(sql) if end == -1 else end
            i = end
        elif char == "$" and DOLLAR_TAG.match(sql, i):
            tag = DOLLAR_TAG.match(sql, i).group()
            end = sql.find(tag, i + len(tag))
            end = len(sql) if end == -1 else end + len(tag)
            current.append(sql[i:end])
            i = end
        elif char == ";":
            statements.append("".join(current))
            current = []
            i += 1
        else:
            current.append(char)
            i += 1
    statements.append("".join(current))
    return [statement.strip() for statement in statements if statement.strip()]


class MigrationRunner:

    def __init__(self, migrations_dir, session_factory: Optional[sessionmaker] = None):
        self.migrations_dir = Path(migrations_dir)
        self._session_factory = session_factory

    def _session(self):
        return get_db_session(self._session_factory or get_session_factory())

    # ---------------- discovery ----------------

    def discover(self) -> List[Migration]:
        """All migrations on disk, ordered by version."""
        if not self.migrations_dir.exists():
            return []
        found = {}
        for path in self.migrations_dir.iterdir():
            match = MIGRATION_FILE.match(path.name)
            if not match or match["direction"] != "up":
                continue
            version = int(match["version"])
            if version in found:
                raise MigrationError(f"Duplicate migration version {version:04d}")
            name = f"{match['version']}_{match['slug']}"
            found[version] = Migration(
                version=version,
                name=name,
                up_path=path,
                down_path=path.with_name(f"{name}.down.sql"),
            )
        return [found[v] for v in sorted(found)]

    def migrations_exist(self) -> bool:
        return bool(self.discover())

    # ---------------- bookkeeping ----------------

    def ensure_table(self) -> None:
        with self._session() as db:
            dialect = db.get_bind().dialect.name
            sql = CREATE_MIGRATIONS_TABLE.get(dialect, CREATE_MIGRATIONS_TABLE["postgresql"])
            db.execute(text(sql))

    def applied(self) -> List[str]:
        """Names of applied migrations, oldest first."""
        self.ensure_table()
        with self._session() as db:
            rows = db.execute(text("SELECT name FROM migrations ORDER BY id")).fetchall()
        return [row[0] for row in rows]

    def pending(self) -> List[Migration]:
        done = set(self.applied())
        return [m for m in self.discover() if m.name not in done]

    # ---------------- commands ----------------

    def migrate(self) -> List[str]:
        """Apply all pending migrations. Returns the names applied."""
        applied = []
        for migration in self.pending():
            with self._session() as db:
                for statement in split_statements(migration.read_up()):
                    db.connection().exec_driver_sql(statement)
                db.execute(text("INSERT INTO migrations (name) VALUES (:name)"), {"name": migration.name})
            logger.info('Migration "%s" completed', migration.name)
            applied.append(migration.name)

        if applied:
            logger.info("All migrations have been executed successfully")
        else:
            logger.info("No migrations to run - database is already up to date")
        return applied

    def rollback(self, steps: int = 1) -> List[str]:
        """Undo the most recent `steps` migrations. Returns the names reverted."""
        by_name = {m.name: m for m in self.discover()}
        reverted = []
        for name in reversed(self.applied()[-steps:] if steps > 0 else []):
            migration = by_name.get(name)
            if migration is None:
                raise MigrationError(f"Applied migration {name} is missing from {self.migrations_dir}")
            with self._session() as db:
                for statement in split_statements(migration.read_down()):
                    db.connection().exec_driver_sql(statement)
                db.execute(text("DELETE FROM migrations WHERE name = :name"), {"name": name})
            logger.info('Rolled back "%s"', name)
            reverted.append(name)
        return reverted

    def create(self, name: str, up_sql: Optional[str] = None, down_sql: Optional[str] = None) -> Path:
        """Write a new up/down pair with the next version number."""
        slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
        if not slug:
            raise MigrationError("Migration name is required")
        existing = self.discover()
        version = existing[-1].version + 1 if existing else 1
        base = f"{version:04d}_{slug}"

        self.migrations_dir.mkdir(parents=True, exist_ok=True)
        up_path = self.migrations_dir / f"{base}.up.sql"
        up_path.write_text(up_sql or UP_TEMPLATE.format(name=base), encoding="utf-8")
        (self.migrations_dir / f"{base}.down.sql").write_text(
            down_sql or DOWN_TEMPLATE.format(name=base), encoding="utf-8"
        )
        logger.info("Created migration: %s", up_path)
        return up_path

    def status(self) -> List[dict]:
        done = set(self.applied())
        return [{"name": m.name, "applied": m.name in done} for m in self.discover()]

    def init(self) -> Path:
        """Write the initial schema migration. Refuses if any migration exists."""
        if self.migrations_exist():
            raise MigrationError(
                "Migrations already exist. To initialize, please remove the migrations directory first."
            )
        up_sql, down_sql = initial_schema_sql()
        return self.create("initial_schema", up_sql=up_sql, down_sql=down_sql)
