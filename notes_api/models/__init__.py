"""Pydantic models for notes, persistence and API payloads."""

from .notes import (
    Note,
    NoteListResponse,
    NoteUpdate,
    PersistedState,
    TagListResponse,
)
from .preview import PreviewRequest, PreviewResponse

__all__ = [
    # Notes models
    "Note",
    "NoteListResponse",
    "NoteUpdate",
    "PersistedState",
    # Preview models
    "PreviewRequest",
    "PreviewResponse",
    "TagListResponse",
]
