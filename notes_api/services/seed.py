"""Example notes for a first run with no usable saved state."""

from __future__ import annotations

from ..models import Note
from .identifiers import new_id
from .tags import normalize_tags

MINUTE_MS = 60 * 1000

# (title, body, tags, created minutes ago, updated minutes ago)
SEED_NOTES = [
    (
        "Welcome to Ocean Notes",
        "This is a local-first notes app.\n\n"
        "- Create notes with **tags**\n"
        "- Search + filter\n"
        "- Autosave while typing\n\n"
        "Try adding a tag like: `productivity` or `ideas`.",
        ["welcome", "getting-started"],
        30,
        5,
    ),
    (
        "Ocean Professional style checklist",
        "- Primary: #2563EB (blue)\n"
        "- Secondary: #F59E0B (amber)\n"
        "- Rounded corners + subtle shadows\n"
        "- Minimal UI, smooth transitions\n"
        "- Responsive split layout",
        ["design", "ocean"],
        90,
        45,
    ),
    (
        "Markdown quick tips",
        "# Title\n\n"
        "- Use **bold** and *italic*\n"
        "- Links: [FastAPI](https://fastapi.tiangolo.com)\n\n"
        "> Optional: switch to Preview to render markdown.",
        ["markdown", "tips"],
        240,
        240,
    ),
]


def seed_notes(now_ms: int) -> list[Note]:
    """Build the seed notes with timestamps in the past relative to now_ms."""
    return [
        Note(
            id=new_id(),
            title=title,
            body=body,
            tags=normalize_tags(tags),
            created_at=now_ms - created_ago * MINUTE_MS,
            updated_at=now_ms - updated_ago * MINUTE_MS,
        )
        for title, body, tags, created_ago, updated_ago in SEED_NOTES
    ]
