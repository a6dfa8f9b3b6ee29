"""
JobReel - Short Video Job Matching
A backend for 60-second video resumes and job videos.

Architecture:
- Storage: injected repository (in-memory or PostgreSQL via SQLAlchemy)
- API: FastAPI routers under /api
- Feed: navigator and playback state machines for clients
"""

__version__ = "1.0.0"
