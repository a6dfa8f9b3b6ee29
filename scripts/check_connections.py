#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the configured database and blob store are reachable.
Usage: python scripts/check_connections.py [--create-buckets]

--create-buckets provisions the `videos` and `resumes` buckets (with their
visibility, size and type limits) when the blob store does not have them.
"""
import argparse
import sys
sys.path.insert(0, '.')

from jobreel.core.config import get_settings
from jobreel.db.postgres import test_postgres_connection
from jobreel.services.blob_storage import BlobStoreError, create_blob_store


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Check JobReel database and blob store connections")
    parser.add_argument("--create-buckets", action="store_true", help="Create missing storage buckets")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = get_settings()
    ok = True
    print("=" * 50)
    print("JOBREEL - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] PostgreSQL...")
    print(f"    URL: {settings.masked_postgres_url}")
    if settings.storage_backend != "sql":
        print("    Skipped: STORAGE_BACKEND is 'memory'")
    elif test_postgres_connection():
        print("    PostgreSQL: CONNECTED")
    else:
        print("    PostgreSQL: FAILED")
        ok = False

    print(f"\n[2] Blob store ({settings.blob_backend})...")
    try:
        store = create_blob_store(settings.blob_backend)
    except BlobStoreError as e:
        print(f"    Not configured: {e}")
        return 1

    if store.ping():
        print("    Blob store: REACHABLE")
    else:
        print("    Blob store: FAILED")
        ok = False

    if args.create_buckets and ok:
        try:
            created = store.ensure_buckets()
        except BlobStoreError as e:
            print(f"    Bucket setup FAILED: {e}")
            ok = False
        else:
            print(f"    Buckets created: {', '.join(created) or 'none, all present'}")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
