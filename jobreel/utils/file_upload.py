"""
File Upload Utility - validate media before it goes to the blob store.

Buckets:
- videos  (public)  .mp4 / .webm, max 100MB
- resumes (private) .pdf, max 10MB, must open with PyPDF2
"""

import io
import uuid
from dataclasses import dataclass
from typing import FrozenSet, Tuple

from fastapi import HTTPException, UploadFile
from PyPDF2 import PdfReader


@dataclass(frozen=True)
class BucketRule:
    public: bool
    max_size_mb: int
    extensions: FrozenSet[str]
    content_types: FrozenSet[str]

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


BUCKET_RULES = {
    "videos": BucketRule(
        public=True,
        max_size_mb=100,
        extensions=frozenset({".mp4", ".webm"}),
        content_types=frozenset({"video/mp4", "video/webm"}),
    ),
    "resumes": BucketRule(
        public=False,
        max_size_mb=10,
        extensions=frozenset({".pdf"}),
        content_types=frozenset({"application/pdf"}),
    ),
}

CONTENT_TYPE_BY_EXTENSION = {
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".pdf": "application/pdf",
}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def get_bucket_rule(bucket: str) -> BucketRule:
    rule = BUCKET_RULES.get(bucket)
    if rule is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown bucket '{bucket}'. Allowed: {', '.join(sorted(BUCKET_RULES))}"
        )
    return rule


def validate_resume_pdf(content: bytes) -> int:
    """Open the PDF and return its page count. Unreadable files are a 400."""
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = len(reader.pages)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Error reading PDF: {str(e)}")
    if pages == 0:
        raise HTTPException(status_code=400, detail="PDF has no pages")
    return pages


def build_object_path(user_id: int, ext: str) -> str:
    """Objects are grouped per user with a random name."""
    return f"{user_id}/{uuid.uuid4().hex}{ext}"


async def read_upload(bucket: str, file: UploadFile) -> Tuple[bytes, str, str]:
    """
    Read and validate an upload for a bucket.

    Args:
        bucket: target bucket name
        file: FastAPI UploadFile

    Returns:
        Tuple of (content, extension, content_type)

    Raises:
        HTTPException on validation errors
    """
    rule = get_bucket_rule(bucket)

    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in rule.extensions:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(rule.extensions))}"
        )

    content = await file.read()

    if len(content) > rule.max_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {rule.max_size_mb}MB"
        )
    if not content:
        raise HTTPException(status_code=400, detail="File is empty")

    content_type = file.content_type
    if content_type not in rule.content_types:
        # Browsers often send application/octet-stream, trust the extension
        content_type = CONTENT_TYPE_BY_EXTENSION[ext]

    if bucket == "resumes":
        validate_resume_pdf(content)

    return content, ext, content_type
