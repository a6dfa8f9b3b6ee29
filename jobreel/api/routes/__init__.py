"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobreel.api.routes.auth_routes import router as auth_router
from jobreel.api.routes.user_routes import router as user_router
from jobreel.api.routes.video_routes import router as video_router
from jobreel.api.routes.comment_routes import router as comment_router
from jobreel.api.routes.application_routes import router as application_router
from jobreel.api.routes.message_routes import router as message_router
from jobreel.api.routes.bookmark_routes import router as bookmark_router
from jobreel.api.routes.upload_routes import router as upload_router
from jobreel.api.routes.health_routes import router as health_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(video_router)
api_router.include_router(comment_router)
api_router.include_router(application_router)
api_router.include_router(message_router)
api_router.include_router(bookmark_router)
api_router.include_router(upload_router)
api_router.include_router(health_router)
