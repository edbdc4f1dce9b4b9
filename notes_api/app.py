"""FastAPI application for Ocean Notes."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from .observability import initialize_observability
from .routes import health_router, notes_router, preview_router
from .services.store import NoteStore
from .storage import get_storage

# Initialize logger
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build and hydrate the note store for the lifetime of the app."""
    logger.info("api_starting")

    initialize_observability()

    store = NoteStore(get_storage())
    store.initialize()
    app.state.store = store
    logger.info("api_started", notes=len(store.notes))

    yield

    logger.info("api_shutting_down")
    store.reset()
    app.state.store = None
    logger.info("api_shutdown_complete")


app = FastAPI(
    title="Ocean Notes API",
    description="Local-first notes with tags, search and markdown preview",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with OpenTelemetry
FastAPIInstrumentor.instrument_app(app)

# Include routers
app.include_router(health_router)
app.include_router(notes_router)
app.include_router(preview_router)
