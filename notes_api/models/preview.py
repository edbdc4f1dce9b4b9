"""Markdown preview Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel


class PreviewRequest(BaseModel):
    """Request model for rendering arbitrary markdown."""

    markdown: str


class PreviewResponse(BaseModel):
    """Rendered HTML for a note body or a markdown snippet."""

    id: str | None = None
    html: str
