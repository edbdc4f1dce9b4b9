"""API route handlers organized by domain."""

from .health import router as health_router
from .notes import router as notes_router
from .preview import router as preview_router

__all__ = ["health_router", "notes_router", "preview_router"]
