"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from notes_api.services.store import NoteStore
from notes_api.storage import MemoryStorage


class FakeClock:
    """Controllable replacement for identifiers.now()."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.current = start

    def __call__(self) -> int:
        return self.current

    def advance(self, ms: int = 1000) -> int:
        self.current += ms
        return self.current


@pytest.fixture
def clock(monkeypatch):
    """Freeze the store's clock; advance it explicitly in tests."""
    fake = FakeClock()
    monkeypatch.setattr("notes_api.services.store.now", fake)
    return fake


@pytest.fixture
def memory_storage():
    """Empty in-memory storage medium."""
    return MemoryStorage()


@pytest.fixture
def store(memory_storage, clock):
    """Hydrated store seeded into in-memory storage."""
    note_store = NoteStore(memory_storage)
    note_store.initialize()
    return note_store


@pytest.fixture
def api_client(monkeypatch):
    """FastAPI test client fixture with lifespan context and in-memory storage."""
    monkeypatch.setenv("OCEAN_NOTES_STORAGE", "memory")
    monkeypatch.setenv("OTEL_TRACES_EXPORTER", "none")
    monkeypatch.setenv("OTEL_METRICS_EXPORTER", "none")

    from notes_api.app import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def sample_markdown():
    """Markdown exercising headings, lists and inline spans."""
    return "# Title\n\n- a\n- b\n\n**bold** and *italic* and `code`"
