"""Health check and root endpoints."""

import structlog
from fastapi import APIRouter, Depends

from ..dependencies import get_store
from ..services.store import NoteStore

# Initialize logger
logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint."""
    logger.info("root_endpoint_accessed")
    return {"message": "Welcome to Ocean Notes"}


@router.get("/health")
async def health(store: NoteStore = Depends(get_store)):
    """Health check endpoint."""
    logger.debug("health_check_requested")
    return {
        "status": "healthy",
        "service": "ocean-notes",
        "hydrated": store.hydrated,
        "persistent": store.storage is not None,
    }
