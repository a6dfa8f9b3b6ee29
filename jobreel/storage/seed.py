"""
Demo data - two employers, two job seekers and a little activity
between them, so a fresh install has a feed to swipe through.
"""

import logging

from jobreel.core.security import hash_password
from jobreel.models import ApplicationStatus, UserType, VideoType
from jobreel.storage.base import Storage

logger = logging.getLogger(__name__)

SAMPLE_VIDEO_URL = "https://storage.googleapis.com/webfundamentals-assets/videos/chrome.mp4"
DEMO_PASSWORD = "password123"


def seed_demo_data(storage: Storage) -> None:
    """Populate an empty store. Does nothing if the demo users already exist."""
    if storage.get_user_by_username("techcorp") is not None:
        logger.info("Demo data already present, skipping seed")
        return

    password = hash_password(DEMO_PASSWORD)

    techcorp = storage.create_user({
        "username": "techcorp",
        "password": password,
        "email": "hiring@techcorp.com",
        "full_name": "TechCorp Inc.",
        "headline": "Leading Technology Company",
        "bio": "We build innovative software solutions for businesses worldwide.",
        "location": "San Francisco, CA",
        "user_type": UserType.employer,
        "company_name": "TechCorp",
        "company_logo": "https://via.placeholder.com/150",
        "skills": [],
    })
    innovate = storage.create_user({
        "username": "innovatedesign",
        "password": password,
        "email": "careers@innovatedesign.com",
        "full_name": "Innovate Design",
        "headline": "Creative Design Agency",
        "bio": "Award-winning design studio specializing in digital experiences.",
        "location": "New York, NY",
        "user_type": UserType.employer,
        "company_name": "Innovate Design",
        "company_logo": "https://via.placeholder.com/150",
        "skills": [],
    })
    sarah = storage.create_user({
        "username": "sarahjohnson",
        "password": password,
        "email": "sarah@example.com",
        "full_name": "Sarah Johnson",
        "headline": "Full Stack Developer",
        "bio": "Passionate full stack developer with 4+ years of experience building scalable web applications.",
        "location": "San Francisco, CA",
        "user_type": UserType.job_seeker,
        "skills": ["JavaScript", "React", "Node.js", "MongoDB"],
    })
    michael = storage.create_user({
        "username": "michaelwilson",
        "password": password,
        "email": "michael@example.com",
        "full_name": "Michael Wilson",
        "headline": "UX/UI Designer",
        "bio": "Creative designer focused on creating intuitive user experiences.",
        "location": "Seattle, WA",
        "user_type": UserType.job_seeker,
        "skills": ["UI Design", "Figma", "User Research", "Prototyping"],
    })

    engineer_job = storage.create_video({
        "user_id": techcorp.id,
        "title": "Senior Software Engineer",
        "description": "We're looking for a passionate Senior Software Engineer to join our growing team!",
        "video_url": SAMPLE_VIDEO_URL,
        "video_type": VideoType.job,
        "skills": ["React", "Node.js", "AWS"],
        "salary": "$120-150k",
        "location": "Remote",
        "job_type": "Full-time",
        "duration": 58,
    })
    designer_job = storage.create_video({
        "user_id": innovate.id,
        "title": "UX Designer",
        "description": "Join our creative team to design beautiful digital experiences.",
        "video_url": SAMPLE_VIDEO_URL,
        "video_type": VideoType.job,
        "skills": ["UI Design", "Figma", "User Research"],
        "salary": "$90-120k",
        "location": "New York, NY",
        "job_type": "Full-time",
        "duration": 45,
    })
    sarah_resume = storage.create_video({
        "user_id": sarah.id,
        "title": "My Skills & Experience",
        "description": "Here's a brief overview of my skills, experience, and what I can bring to your team.",
        "video_url": "https://example.com/videos/sarah-resume.mp4",
        "thumbnail_url": "https://via.placeholder.com/300x500",
        "video_type": VideoType.resume,
        "skills": ["JavaScript", "React", "Node.js", "MongoDB"],
        "duration": 58,
    })
    michael_resume = storage.create_video({
        "user_id": michael.id,
        "title": "UX Design Portfolio",
        "description": "A walkthrough of my recent design projects and my approach to solving user problems.",
        "video_url": "https://example.com/videos/michael-resume.mp4",
        "thumbnail_url": "https://via.placeholder.com/300x500",
        "video_type": VideoType.resume,
        "skills": ["UI Design", "Figma", "User Research", "Prototyping"],
        "duration": 52,
    })

    storage.create_application({
        "job_video_id": engineer_job.id,
        "user_video_id": sarah_resume.id,
        "user_id": sarah.id,
        "employer_id": techcorp.id,
        "status": ApplicationStatus.pending,
        "note": "I'm very interested in this position and believe my skills are a perfect match.",
    })
    storage.create_application({
        "job_video_id": designer_job.id,
        "user_video_id": michael_resume.id,
        "user_id": michael.id,
        "employer_id": innovate.id,
        "status": ApplicationStatus.viewed,
        "note": "I'm excited about the opportunity to join your creative team.",
    })

    storage.create_comment({
        "video_id": engineer_job.id,
        "user_id": sarah.id,
        "content": "This looks like an exciting opportunity! What tech stack does your team use?",
    })
    storage.create_comment({
        "video_id": sarah_resume.id,
        "user_id": techcorp.id,
        "content": "Impressive skills! I'd like to learn more about your experience with MongoDB.",
    })

    storage.create_message({
        "sender_id": techcorp.id,
        "receiver_id": sarah.id,
        "content": "Hi Sarah, we liked your application. Would you be available for an interview next week?",
    })
    storage.create_message({
        "sender_id": sarah.id,
        "receiver_id": techcorp.id,
        "content": "Yes, I'm available. I'd be happy to schedule an interview. What times work for you?",
    })

    storage.create_bookmark({"user_id": sarah.id, "video_id": engineer_job.id})
    storage.create_bookmark({"user_id": michael.id, "video_id": designer_job.id})

    logger.info("Seeded demo data: 4 users, 4 videos")
