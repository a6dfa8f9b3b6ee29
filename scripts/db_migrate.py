#!/usr/bin/env python3
"""
Database Migration Script

Usage:
    python scripts/db_migrate.py init
    python scripts/db_migrate.py create add_video_tags
    python scripts/db_migrate.py migrate
    python scripts/db_migrate.py rollback [steps]
    python scripts/db_migrate.py status
"""
import sys
sys.path.insert(0, '.')

from jobreel.db.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
