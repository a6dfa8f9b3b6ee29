"""
Health Routes

GET /health - Service status plus storage and blob store reachability
"""

from fastapi import APIRouter, Depends

from jobreel.services.blob_storage import BlobStore, get_blob_store
from jobreel.storage import Storage, get_storage

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    storage: Storage = Depends(get_storage),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Detailed health check."""
    storage_ok = storage.ping()
    blob_ok = blob_store.ping()
    return {
        "status": "healthy" if storage_ok and blob_ok else "degraded",
        "storage": "connected" if storage_ok else "disconnected",
        "blob_store": "connected" if blob_ok else "disconnected",
    }
