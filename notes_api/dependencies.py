"""FastAPI dependencies."""

from fastapi import Request

from .services.store import NoteStore


def get_store(request: Request) -> NoteStore:
    """Get the note store created by the application lifespan."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Note store not initialized. Is the app lifespan running?")
    return store
