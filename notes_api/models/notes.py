"""Notes-related Pydantic models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    """A single note as held by the store and persisted to storage."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    body: str = ""
    tags: list[str] = Field(default_factory=list)
    created_at: int = Field(..., alias="createdAt")
    updated_at: int = Field(..., alias="updatedAt")


class PersistedState(BaseModel):
    """Versioned envelope around the whole store state."""

    model_config = ConfigDict(populate_by_name=True)

    version: Literal[1] = 1
    notes: list[Note] = Field(default_factory=list)
    selected_id: str | None = Field(default=None, alias="selectedId")


class NoteUpdate(BaseModel):
    """Request model for patching a note. Omitted fields are left as-is."""

    title: str | None = None
    body: str | None = None
    tags: list[str] | None = None


class NoteListResponse(BaseModel):
    """Response model for listing notes, most recently updated first."""

    model_config = ConfigDict(populate_by_name=True)

    notes: list[Note]
    total: int
    selected_id: str | None = Field(default=None, alias="selectedId")


class TagListResponse(BaseModel):
    """Response model for all known tags."""

    tags: list[str]
