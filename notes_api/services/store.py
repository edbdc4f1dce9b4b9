"""In-memory note store with write-through persistence."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from ..models import Note
from ..observability import get_app_metrics, get_tracer
from ..storage import StorageMedium
from . import persistence
from .identifiers import new_id, now
from .seed import seed_notes
from .tags import normalize_tags, sort_tags

logger = structlog.get_logger(__name__)
tracer = get_tracer(__name__)

DEFAULT_TITLE = "Untitled note"


def _conform(note: Note) -> Note:
    """Normalize tags and keep updated_at >= created_at on a loaded note."""
    tags = normalize_tags(note.tags)
    updated_at = max(note.updated_at, note.created_at)
    if tags == note.tags and updated_at == note.updated_at:
        return note

    logger.warning("stored_note_repaired", note_id=note.id)
    return note.model_copy(update={"tags": tags, "updated_at": updated_at})


class NoteStore:
    """
    Owns the note collection and the selection cursor.

    Notes are kept newest-created-first. Every mutation, selection
    included, is written to storage before the method returns. Methods
    given an unknown note ID do nothing.
    """

    def __init__(self, storage: StorageMedium | None = None):
        self.storage = storage
        self.notes: list[Note] = []
        self.selected_id: str | None = None
        self.hydrated = False

    def initialize(self) -> None:
        """Load saved state, or seed example notes when there is none."""
        if self.hydrated:
            return

        with tracer.start_as_current_span("store.initialize") as span:
            state = persistence.load(self.storage)

            if state is not None:
                self.notes = [_conform(note) for note in state.notes]
                self.selected_id = state.selected_id
                if self.selected_id is None and self.notes:
                    self.selected_id = self.notes[0].id
                span.set_attribute("store.seeded", False)
                logger.info("store_hydrated", notes=len(self.notes), selected_id=self.selected_id)
            else:
                self.notes = seed_notes(now())
                self.selected_id = self.notes[0].id if self.notes else None
                self._persist()
                span.set_attribute("store.seeded", True)
                get_app_metrics().store_seeded.add(1)
                logger.info("store_seeded", notes=len(self.notes))

            span.set_attribute("store.notes_count", len(self.notes))
            self.hydrated = True

    def reset(self) -> None:
        """Drop in-memory state so the next initialize() reloads from storage."""
        self.notes = []
        self.selected_id = None
        self.hydrated = False
        logger.debug("store_reset")

    def _persist(self) -> None:
        persistence.encode(self.notes, self.selected_id, self.storage)

    def _index_of(self, note_id: str) -> int:
        for idx, note in enumerate(self.notes):
            if note.id == note_id:
                return idx
        return -1

    # Views

    def get_note(self, note_id: str) -> Note | None:
        idx = self._index_of(note_id)
        return self.notes[idx] if idx != -1 else None

    @property
    def notes_by_updated_desc(self) -> list[Note]:
        # sorted() is stable, so ties keep storage order
        return sorted(self.notes, key=lambda n: n.updated_at, reverse=True)

    @property
    def selected_note(self) -> Note | None:
        if self.selected_id is None:
            return None
        return self.get_note(self.selected_id)

    @property
    def all_tags(self) -> list[str]:
        return sort_tags({tag for note in self.notes for tag in note.tags})

    def search(self, query: str | None = None, tag: str | None = None) -> list[Note]:
        """
        Filter notes by free text and/or tag, most recently updated first.

        The query matches case-insensitively against title, body and tags.
        The tag is normalized before comparison, so "Getting Started"
        finds notes tagged "getting-started".
        """
        results = self.notes_by_updated_desc

        if tag:
            wanted = normalize_tags([tag])
            if wanted:
                results = [n for n in results if wanted[0] in n.tags]

        if query and query.strip():
            needle = query.strip().lower()
            results = [
                n
                for n in results
                if needle in n.title.lower()
                or needle in n.body.lower()
                or any(needle in t for t in n.tags)
            ]

        return results

    # Operations

    def select_note(self, note_id: str) -> None:
        """Select a note. The ID is not checked against the collection."""
        self.selected_id = note_id
        self._persist()
        logger.debug("note_selected", note_id=note_id)

    def create_note(self) -> Note:
        """Create an empty note at the front of the collection and select it."""
        with tracer.start_as_current_span("store.create_note") as span:
            timestamp = now()
            note = Note(
                id=new_id(),
                title=DEFAULT_TITLE,
                body="",
                tags=[],
                created_at=timestamp,
                updated_at=timestamp,
            )
            self.notes = [note, *self.notes]
            self.selected_id = note.id
            self._persist()

            span.set_attribute("note.id", note.id)
            get_app_metrics().notes_created.add(1)
            logger.info("note_created", note_id=note.id, total=len(self.notes))

            return note

    def delete_note(self, note_id: str) -> None:
        """Remove a note. Selection falls back to the first remaining note."""
        with tracer.start_as_current_span("store.delete_note") as span:
            span.set_attribute("note.id", note_id)

            if self._index_of(note_id) == -1:
                span.set_attribute("note.found", False)
                logger.debug("delete_note_not_found", note_id=note_id)
                return

            self.notes = [n for n in self.notes if n.id != note_id]
            if self.selected_id == note_id:
                self.selected_id = self.notes[0].id if self.notes else None
            self._persist()

            get_app_metrics().notes_deleted.add(1)
            logger.info(
                "note_deleted",
                note_id=note_id,
                selected_id=self.selected_id,
                total=len(self.notes),
            )

    def update_note(
        self,
        note_id: str,
        title: str | None = None,
        body: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> None:
        """
        Patch a note's title, body and/or tags.

        Omitted fields keep their value. Tags are normalized before being
        stored. updated_at is refreshed even when nothing was supplied.
        """
        with tracer.start_as_current_span("store.update_note") as span:
            span.set_attribute("note.id", note_id)

            idx = self._index_of(note_id)
            if idx == -1:
                span.set_attribute("note.found", False)
                logger.debug("update_note_not_found", note_id=note_id)
                return

            current = self.notes[idx]
            changes = {"updated_at": max(now(), current.created_at)}
            if title is not None:
                changes["title"] = title
            if body is not None:
                changes["body"] = body
            if tags is not None:
                changes["tags"] = normalize_tags(tags)

            updated = current.model_copy(update=changes)
            self.notes = [*self.notes[:idx], updated, *self.notes[idx + 1 :]]
            self._persist()

            get_app_metrics().notes_updated.add(1)
            logger.info("note_updated", note_id=note_id, fields=sorted(changes))
