"""
Blob Storage Service - where uploaded videos and resume PDFs live.

Two backends behind one interface:
- LocalBlobStore: files under MEDIA_ROOT, served by the app at /media
- SupabaseBlobStore: Supabase Storage REST API (service role key)

The `videos` bucket is public, `resumes` is private.
"""

import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Optional

import requests

from jobreel.core.config import get_settings
from jobreel.utils.file_upload import BUCKET_RULES

logger = logging.getLogger(__name__)


class BlobStoreError(Exception):
    """Upload or bucket operation failed on the storage side."""


class BlobStore(ABC):

    @abstractmethod
    def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> str:
        """Store an object and return the URL clients should use for it."""

    @abstractmethod
    def get_public_url(self, bucket: str, path: str) -> str: ...

    def ensure_buckets(self) -> list:
        """Create any known bucket that does not exist yet. Returns the names created."""
        return []

    def ping(self) -> bool:
        return True


class LocalBlobStore(BlobStore):
    """Objects on the local filesystem, one directory per bucket."""

    def __init__(self, root, base_url: str = "/media"):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = (self.root / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise BlobStoreError(f"Invalid object path: {path}")
        return target

    def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> str:
        target = self._resolve(bucket, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.info("Stored %d bytes at %s/%s", len(content), bucket, path)
        return self.get_public_url(bucket, path)

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/{bucket}/{path}"

    def ensure_buckets(self) -> list:
        created = []
        for name in BUCKET_RULES:
            bucket_dir = self.root / name
            if not bucket_dir.exists():
                bucket_dir.mkdir(parents=True)
                created.append(name)
        return created

    def ping(self) -> bool:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning("Media root %s is not writable: %s", self.root, e)
            return False
        return True


class SupabaseBlobStore(BlobStore):
    """Supabase Storage over its REST API."""

    def __init__(self, url: str, service_role_key: str, session: Optional[requests.Session] = None,
                 timeout: float = 30):
        if not url:
            raise BlobStoreError("SUPABASE_URL is not set")
        if not service_role_key:
            raise BlobStoreError("SUPABASE_SERVICE_ROLE_KEY is not set")
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "apikey": service_role_key,
            "Authorization": f"Bearer {service_role_key}",
        })

    def _endpoint(self, *parts: str) -> str:
        return "/".join([f"{self.url}/storage/v1", *parts])

    def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> str:
        try:
            response = self.session.post(
                self._endpoint("object", bucket, path),
                data=content,
                headers={"Content-Type": content_type, "x-upsert": "false"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Supabase upload to %s/%s failed: %s", bucket, path, e)
            raise BlobStoreError(f"Upload failed: {e}") from e
        return self.get_public_url(bucket, path)

    def get_public_url(self, bucket: str, path: str) -> str:
        rule = BUCKET_RULES.get(bucket)
        visibility = "public" if rule is None or rule.public else "authenticated"
        return self._endpoint("object", visibility, bucket, path)

    def create_bucket(self, name: str) -> dict:
        """Create one of the known buckets with its visibility, size and type limits."""
        rule = BUCKET_RULES[name]
        payload = {
            "id": name,
            "name": name,
            "public": rule.public,
            "file_size_limit": rule.max_size_bytes,
            "allowed_mime_types": sorted(rule.content_types),
        }
        try:
            response = self.session.post(self._endpoint("bucket"), json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise BlobStoreError(f"Could not create bucket {name}: {e}") from e
        logger.info("Created bucket %s", name)
        return response.json()

    def ensure_buckets(self) -> list:
        """Create any known bucket the project is missing. Returns the names created."""
        try:
            response = self.session.get(self._endpoint("bucket"), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise BlobStoreError(f"Could not list buckets: {e}") from e
        existing = {bucket["name"] for bucket in response.json()}
        created = []
        for name in BUCKET_RULES:
            if name not in existing:
                self.create_bucket(name)
                created.append(name)
        return created

    def ping(self) -> bool:
        try:
            response = self.session.get(self._endpoint("bucket"), timeout=self.timeout)
            return response.ok
        except requests.RequestException as e:
            logger.warning("Supabase storage unreachable: %s", e)
            return False


def create_blob_store(backend: str) -> BlobStore:
    settings = get_settings()
    if backend == "local":
        return LocalBlobStore(settings.media_root, settings.media_base_url)
    if backend == "supabase":
        return SupabaseBlobStore(settings.supabase_url, settings.supabase_service_role_key)
    raise ValueError(f"Unknown blob backend: {backend}")


@lru_cache()
def get_blob_store() -> BlobStore:
    """FastAPI dependency - the configured blob store."""
    return create_blob_store(get_settings().blob_backend)
