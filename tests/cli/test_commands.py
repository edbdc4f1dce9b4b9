"""Tests for CLI note commands against a stubbed API."""

import httpx
import pytest

from notes_cli.client import handle_command
from notes_cli.commands import notes as notes_commands

NOTE = {
    "id": "abc-123",
    "title": "Plan",
    "body": "# Plan\n- step",
    "tags": ["ideas", "work"],
    "createdAt": 1_700_000_000_000,
    "updatedAt": 1_700_000_060_000,
}


def _response(method: str, url: str, status_code: int = 200, json=None) -> httpx.Response:
    return httpx.Response(status_code, json=json, request=httpx.Request(method, url))


@pytest.fixture
def calls(monkeypatch):
    """Record httpx calls made by the commands and answer from a table."""
    recorded = []
    answers = {}

    def fake(method):
        def _call(url, **kwargs):
            recorded.append((method, url, kwargs))
            status_code, payload = answers.get((method, url), (200, {}))
            return _response(method, url, status_code, payload)

        return _call

    for method in ("get", "post", "patch", "delete"):
        monkeypatch.setattr(notes_commands.httpx, method, fake(method.upper()))

    return recorded, answers


class TestNoteCommands:
    """Test suite for CLI note commands."""

    def test_list_notes_marks_selection(self, calls, capsys):
        """Test listing prints titles and marks the selected note."""
        recorded, answers = calls
        url = f"{notes_commands.API_URL}/notes"
        answers[("GET", url)] = (200, {"notes": [NOTE], "total": 1, "selectedId": "abc-123"})

        notes_commands.list_notes(query="plan")

        out = capsys.readouterr().out
        assert "▶ Plan" in out
        assert "ideas, work" in out
        assert recorded[0][2]["params"] == {"q": "plan"}

    def test_view_unknown_note(self, calls, capsys):
        """Test a 404 is reported with the note ID."""
        _, answers = calls
        url = f"{notes_commands.API_URL}/notes/nope"
        answers[("GET", url)] = (404, {"detail": "Note not found"})

        notes_commands.view_note("nope")

        assert "Note with ID 'nope' not found" in capsys.readouterr().out

    def test_tag_note_sends_list(self, calls, capsys):
        """Test comma-separated tags are sent as a list."""
        recorded, answers = calls
        url = f"{notes_commands.API_URL}/notes/abc-123"
        answers[("PATCH", url)] = (200, NOTE)

        notes_commands.tag_note("abc-123 Work, ideas ,")

        assert recorded[0][2]["json"] == {"tags": ["Work", " ideas "]}
        assert "ideas, work" in capsys.readouterr().out

    def test_rename_requires_title(self, calls, capsys):
        """Test usage is printed when the title is missing."""
        recorded, _ = calls

        notes_commands.rename_note("abc-123")

        assert recorded == []
        assert "Usage: /rename" in capsys.readouterr().out

    def test_preview_prints_html(self, calls, capsys):
        """Test the preview command prints rendered HTML."""
        _, answers = calls
        url = f"{notes_commands.API_URL}/notes/abc-123/preview"
        answers[("GET", url)] = (200, {"id": "abc-123", "html": "<h1>Plan</h1>"})

        notes_commands.preview_note("abc-123")

        assert "<h1>Plan</h1>" in capsys.readouterr().out

    def test_connection_error(self, monkeypatch, capsys):
        """Test an unreachable server is reported, not raised."""

        def refuse(url, **kwargs):
            raise httpx.ConnectError("refused", request=httpx.Request("POST", url))

        monkeypatch.setattr(notes_commands.httpx, "post", refuse)

        notes_commands.create_note()

        assert "Could not connect to API server" in capsys.readouterr().out


class TestHandleCommand:
    """Test suite for REPL command dispatch."""

    def test_dispatches_select(self, calls):
        """Test /select posts to the select endpoint."""
        recorded, _ = calls

        assert handle_command("/select abc-123") is True
        assert recorded[0][:2] == ("POST", f"{notes_commands.API_URL}/notes/abc-123/select")

    def test_unknown_command(self, calls):
        """Test unknown commands are reported to the caller."""
        assert handle_command("/frobnicate") is False
