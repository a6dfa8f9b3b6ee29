"""
Upload Routes

POST /uploads/{bucket} - Upload a video (videos) or resume PDF (resumes)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File

from jobreel.core.auth import get_current_user
from jobreel.models import User
from jobreel.services.blob_storage import BlobStore, BlobStoreError, get_blob_store
from jobreel.utils.file_upload import read_upload, build_object_path
from jobreel.schemas.schemas import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["Uploads"])


@router.post("/{bucket}", response_model=UploadResponse, status_code=201)
async def upload_file(
    bucket: str,
    file: UploadFile = File(...),
    user: User = Depends(get_current_user),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """
    Upload media for a video post or a resume.

    - videos: MP4 or WebM, max 100MB, public URL
    - resumes: PDF, max 10MB, private URL
    """
    content, ext, content_type = await read_upload(bucket, file)
    path = build_object_path(user.id, ext)

    try:
        url = blob_store.upload(bucket, path, content, content_type)
    except BlobStoreError as e:
        logger.error("Upload for user %s failed: %s", user.id, e)
        raise HTTPException(status_code=502, detail="Storage service unavailable")

    return UploadResponse(bucket=bucket, path=path, url=url, size=len(content))
