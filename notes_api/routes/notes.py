"""Notes endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_store
from ..models import Note, NoteListResponse, NoteUpdate, PreviewResponse, TagListResponse
from ..observability import get_tracer
from ..services.markdown import render_markdown
from ..services.store import NoteStore

# Initialize logger
logger = structlog.get_logger(__name__)

# Get tracer
tracer = get_tracer(__name__)

router = APIRouter(tags=["notes"])


def _require_note(store: NoteStore, note_id: str) -> Note:
    note = store.get_note(note_id)
    if note is None:
        logger.warning("note_not_found", note_id=note_id)
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.get("/notes", response_model=NoteListResponse)
async def list_notes(
    q: str | None = None,
    tag: str | None = None,
    store: NoteStore = Depends(get_store),
):
    """
    List notes, most recently updated first.

    Optionally filter with a free-text query and/or a tag.
    """
    with tracer.start_as_current_span("list_notes") as span:
        if q:
            span.set_attribute("query.text", q)
        if tag:
            span.set_attribute("query.tag", tag)

        notes = store.search(query=q, tag=tag)

        span.set_attribute("notes.count", len(notes))
        logger.info("notes_listed", count=len(notes), total=len(store.notes))

        return NoteListResponse(notes=notes, total=len(notes), selected_id=store.selected_id)


@router.post("/notes", response_model=Note, status_code=201)
async def create_note(store: NoteStore = Depends(get_store)):
    """Create an empty note and select it."""
    return store.create_note()


@router.get("/notes/selected", response_model=Note)
async def get_selected_note(store: NoteStore = Depends(get_store)):
    """Retrieve the currently selected note."""
    note = store.selected_note
    if note is None:
        raise HTTPException(status_code=404, detail="No note selected")
    return note


@router.get("/notes/{note_id}", response_model=Note)
async def get_note(note_id: str, store: NoteStore = Depends(get_store)):
    """Retrieve a specific note by ID."""
    return _require_note(store, note_id)


@router.patch("/notes/{note_id}", response_model=Note)
async def update_note(
    note_id: str, note_update: NoteUpdate, store: NoteStore = Depends(get_store)
):
    """
    Update a note.

    Supports partial updates - only provided fields are changed.
    Tags are normalized before they are stored.
    """
    _require_note(store, note_id)
    store.update_note(
        note_id,
        title=note_update.title,
        body=note_update.body,
        tags=note_update.tags,
    )
    return store.get_note(note_id)


@router.delete("/notes/{note_id}", status_code=204)
async def delete_note(note_id: str, store: NoteStore = Depends(get_store)):
    """
    Delete a note permanently.

    Deleting an unknown note is not an error.
    """
    store.delete_note(note_id)


@router.post("/notes/{note_id}/select", status_code=204)
async def select_note(note_id: str, store: NoteStore = Depends(get_store)):
    """Make a note the current selection."""
    store.select_note(note_id)


@router.get("/notes/{note_id}/preview", response_model=PreviewResponse)
async def preview_note(note_id: str, store: NoteStore = Depends(get_store)):
    """Render a note's body to HTML."""
    note = _require_note(store, note_id)
    return PreviewResponse(id=note.id, html=render_markdown(note.body))


@router.get("/tags", response_model=TagListResponse)
async def list_tags(store: NoteStore = Depends(get_store)):
    """List every tag in use, sorted."""
    return TagListResponse(tags=store.all_tags)
