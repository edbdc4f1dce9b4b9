"""Versioned envelope encoding between the note store and durable storage."""

from __future__ import annotations

import json

import structlog
from pydantic import ValidationError

from ..models import Note, PersistedState
from ..storage import StorageMedium

logger = structlog.get_logger(__name__)

STORAGE_KEY = "ocean-notes:v1"
ENVELOPE_VERSION = 1


def encode(
    notes: list[Note], selected_id: str | None, storage: StorageMedium | None
) -> str:
    """Serialize the store state and write it to the storage slot.

    Args:
        notes: Full note collection in storage order
        selected_id: Currently selected note ID, if any
        storage: Storage medium, or None when running without one

    Returns:
        The JSON blob that was (or would have been) written
    """
    envelope = PersistedState(version=ENVELOPE_VERSION, notes=notes, selected_id=selected_id)
    blob = envelope.model_dump_json(by_alias=True)

    if storage is None:
        logger.debug("persist_skipped_no_storage")
        return blob

    storage.set_item(STORAGE_KEY, blob)
    return blob


def decode(blob: str | None) -> PersistedState | None:
    """Parse a stored blob. Returns None for anything that isn't a valid envelope."""
    if not blob:
        return None

    try:
        raw = json.loads(blob)
    except (ValueError, RecursionError):
        logger.warning("persisted_state_unparseable")
        return None

    if not isinstance(raw, dict):
        logger.warning("persisted_state_not_an_object")
        return None

    # `True == 1` in Python, so check the type too
    version = raw.get("version")
    if type(version) is not int or version != ENVELOPE_VERSION:
        logger.warning("persisted_state_version_mismatch", version=version)
        return None

    if not isinstance(raw.get("notes"), list):
        logger.warning("persisted_state_notes_invalid")
        return None

    try:
        return PersistedState.model_validate(raw)
    except ValidationError as e:
        logger.warning("persisted_state_invalid", errors=e.error_count())
        return None


def load(storage: StorageMedium | None) -> PersistedState | None:
    """Read and decode the storage slot."""
    if storage is None:
        return None
    return decode(storage.get_item(STORAGE_KEY))
