"""Command line interface for database migrations."""

import argparse
import logging
from typing import List, Optional

from jobreel.core.config import get_settings
from jobreel.db.migrations import MigrationError, MigrationRunner

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage JobReel database migrations.")
    parser.add_argument(
        "--dir",
        dest="migrations_dir",
        default=None,
        help="Migrations directory (defaults to MIGRATIONS_DIR)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging output")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("init", help="Write the initial schema migration")
    create = commands.add_parser("create", help="Create an empty up/down migration pair")
    create.add_argument("name", help="Short description, e.g. add_video_tags")
    commands.add_parser("migrate", help="Apply all pending migrations")
    rollback = commands.add_parser("rollback", help="Undo the most recent migrations")
    rollback.add_argument("steps", nargs="?", type=int, default=1, help="How many to undo (default 1)")
    commands.add_parser("status", help="List migrations and whether they are applied")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, runner: MigrationRunner) -> int:
    if args.command == "init":
        path = runner.init()
        print(f"Initial migration written to {path}")
    elif args.command == "create":
        path = runner.create(args.name)
        print(f"Created {path}")
    elif args.command == "migrate":
        applied = runner.migrate()
        print(f"Applied {len(applied)} migration(s)")
    elif args.command == "rollback":
        reverted = runner.rollback(args.steps)
        print(f"Rolled back {len(reverted)} migration(s)")
    elif args.command == "status":
        for entry in runner.status():
            mark = "x" if entry["applied"] else " "
            print(f"[{mark}] {entry['name']}")
    return 0


def main(argv: Optional[List[str]] = None, runner: Optional[MigrationRunner] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    if runner is None:
        runner = MigrationRunner(args.migrations_dir or get_settings().migrations_dir)

    try:
        return run(args, runner)
    except MigrationError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
