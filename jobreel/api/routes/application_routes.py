"""
Application Routes

POST /applications - Apply to a job video with a resume video
GET /applications - Own applications (job seekers) or received ones (employers)
PATCH /applications/{application_id}/status - Employer updates status
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from jobreel.core.auth import get_current_user
from jobreel.models import User, UserType, VideoType
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    data: ApplicationCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Apply to a job.

    The job video must be a job posting and the resume video must be
    one of the applicant's own resume videos. The employer is the
    owner of the job video.
    """
    job_video = storage.get_video(data.job_video_id)
    if not job_video or job_video.video_type != VideoType.job:
        raise HTTPException(status_code=400, detail="Job video not found")

    resume_video = storage.get_video(data.user_video_id)
    if (
        not resume_video
        or resume_video.video_type != VideoType.resume
        or resume_video.user_id != user.id
    ):
        raise HTTPException(status_code=400, detail="Resume video must be one of your own resume videos")

    return storage.create_application({
        "job_video_id": job_video.id,
        "user_video_id": resume_video.id,
        "user_id": user.id,
        "employer_id": job_video.user_id,
        "note": data.note,
        "resume_url": data.resume_url,
    })


@router.get("", response_model=List[ApplicationResponse])
async def list_applications(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Job seekers see what they applied to, employers see what they received."""
    if user.user_type == UserType.employer:
        return storage.get_applications_by_employer(user.id)
    return storage.get_applications_by_user(user.id)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    data: ApplicationStatusUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Change an application's status. Only the receiving employer may."""
    application = storage.get_application(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    if application.employer_id != user.id:
        raise HTTPException(status_code=403, detail="Only the employer can update this application")

    return storage.update_application_status(application_id, data.status)
