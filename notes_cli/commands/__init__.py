"""CLI command handlers."""

from .notes import (
    create_note,
    delete_note,
    edit_note,
    list_notes,
    list_tags,
    preview_note,
    rename_note,
    select_note,
    tag_note,
    view_note,
)

__all__ = [
    "create_note",
    "delete_note",
    "edit_note",
    "list_notes",
    "list_tags",
    "preview_note",
    "rename_note",
    "select_note",
    "tag_note",
    "view_note",
]
