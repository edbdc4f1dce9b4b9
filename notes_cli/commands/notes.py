"""Notes command handlers."""

import os
import subprocess
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import httpx

from ..config import API_URL, REQUEST_TIMEOUT


def _format_ms(timestamp_ms: int | None) -> str:
    """Format a millisecond timestamp for display."""
    if timestamp_ms is None:
        return "unknown"
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _report_http_error(e: httpx.HTTPError, action: str, note_id: str | None = None):
    """Print a readable message for a failed API call."""
    if isinstance(e, httpx.ConnectError):
        print("Error: Could not connect to API server.")
        print("Please start the server with: python -m notes_api.server\n")
    elif isinstance(e, httpx.HTTPStatusError):
        if e.response.status_code == 404 and note_id:
            print(f"Error: Note with ID '{note_id}' not found.\n")
        else:
            try:
                detail = e.response.json().get("detail", "Unknown error")
            except ValueError:
                detail = e.response.text or "Unknown error"
            print(f"Error: Failed to {action}: {detail}\n")
    else:
        print(f"Error: API request failed: {e}\n")


def _split_id(args: str, usage: str) -> tuple[str, str] | None:
    """Split '<note_id> <rest>' arguments, printing usage when incomplete."""
    parts = args.strip().split(maxsplit=1)
    if len(parts) < 2:
        print(f"Error: Usage: {usage}\n")
        return None
    return parts[0], parts[1]


def create_note():
    """Create a new empty note and select it."""
    try:
        response = httpx.post(f"{API_URL}/notes", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        note = response.json()

        print("\n✓ Note created!")
        print(f"  ID: {note['id']}")
        print(f"  Title: {note['title']}")
        print("  Use /edit <id> to write its body.\n")
    except httpx.HTTPError as e:
        _report_http_error(e, "create note")


def list_notes(query: str = "", tag: str = ""):
    """List notes, most recently updated first, optionally filtered."""
    params = {}
    if query.strip():
        params["q"] = query.strip()
    if tag.strip():
        params["tag"] = tag.strip()

    try:
        response = httpx.get(f"{API_URL}/notes", params=params, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        _report_http_error(e, "list notes")
        return

    notes = data.get("notes", [])
    selected_id = data.get("selectedId")

    if not notes:
        print("\nNo notes found.\n")
        return

    print(f"\n=== Your Notes ({data.get('total', len(notes))}) ===\n")
    for note in notes:
        marker = "▶ " if note["id"] == selected_id else "  "
        tags = ", ".join(note.get("tags", [])) or "no tags"
        print(f"{marker}{note['title'] or '(untitled)'}")
        print(f"    ID: {note['id']}")
        print(f"    Tags: {tags} | Updated: {_format_ms(note.get('updatedAt'))}\n")


def list_tags():
    """List every tag in use."""
    try:
        response = httpx.get(f"{API_URL}/tags", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        tags = response.json().get("tags", [])
    except httpx.HTTPError as e:
        _report_http_error(e, "list tags")
        return

    if not tags:
        print("\nNo tags yet.\n")
        return
    print("\nTags: " + ", ".join(tags) + "\n")


def view_note(note_id: str):
    """View a specific note by ID."""
    if not note_id or not note_id.strip():
        print("Error: Note ID is required. Usage: /view <note_id>\n")
        return

    note_id = note_id.strip()

    try:
        response = httpx.get(f"{API_URL}/notes/{note_id}", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        note = response.json()
    except httpx.HTTPError as e:
        _report_http_error(e, "retrieve note", note_id)
        return

    tags = ", ".join(note.get("tags", [])) or "no tags"

    print(f"\n{'=' * 60}")
    print(f"Title: {note['title']}")
    print(f"ID: {note['id']}")
    print(f"Tags: {tags}")
    print(f"Created: {_format_ms(note.get('createdAt'))}")
    print(f"Updated: {_format_ms(note.get('updatedAt'))}")
    print(f"{'=' * 60}\n")
    print(note.get("body", ""))
    print(f"\n{'=' * 60}\n")


def preview_note(note_id: str):
    """Print the HTML preview of a note's body."""
    if not note_id or not note_id.strip():
        print("Error: Note ID is required. Usage: /preview <note_id>\n")
        return

    note_id = note_id.strip()

    try:
        response = httpx.get(f"{API_URL}/notes/{note_id}/preview", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        html = response.json()["html"]
    except httpx.HTTPError as e:
        _report_http_error(e, "render preview", note_id)
        return

    print(f"\n{html}\n")


def _patch_note(note_id: str, payload: dict, action: str) -> dict | None:
    try:
        response = httpx.patch(
            f"{API_URL}/notes/{note_id}", json=payload, timeout=REQUEST_TIMEOUT
        )
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        _report_http_error(e, action, note_id)
        return None


def rename_note(args: str):
    """Rename a note (update its title)."""
    parsed = _split_id(args, "/rename <note_id> <new_title>")
    if parsed is None:
        return
    note_id, new_title = parsed

    note = _patch_note(note_id, {"title": new_title}, "rename note")
    if note is not None:
        print("\n✓ Note renamed!")
        print(f"  ID: {note['id']}")
        print(f"  New title: {note['title']}\n")


def tag_note(args: str):
    """Replace a note's tags with a comma-separated list."""
    parsed = _split_id(args, "/tags <note_id> <tag1, tag2, ...>")
    if parsed is None:
        return
    note_id, tags_input = parsed

    tags = [tag for tag in tags_input.split(",") if tag.strip()]
    note = _patch_note(note_id, {"tags": tags}, "update tags")
    if note is not None:
        print(f"\n✓ Tags: {', '.join(note['tags']) or 'no tags'}\n")


def select_note(note_id: str):
    """Make a note the current selection."""
    if not note_id or not note_id.strip():
        print("Error: Note ID is required. Usage: /select <note_id>\n")
        return

    note_id = note_id.strip()

    try:
        response = httpx.post(f"{API_URL}/notes/{note_id}/select", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        print(f"\n✓ Selected {note_id}\n")
    except httpx.HTTPError as e:
        _report_http_error(e, "select note", note_id)


def delete_note(note_id: str):
    """Delete a note after confirmation."""
    if not note_id or not note_id.strip():
        print("Error: Note ID is required. Usage: /delete <note_id>\n")
        return

    note_id = note_id.strip()

    confirm = input(f"Delete note {note_id}? [y/N]: ").strip().lower()
    if confirm not in ("y", "yes"):
        print("Cancelled.\n")
        return

    try:
        response = httpx.delete(f"{API_URL}/notes/{note_id}", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        print(f"\n✓ Deleted {note_id}\n")
    except httpx.HTTPError as e:
        _report_http_error(e, "delete note", note_id)


def edit_note(note_id: str):
    """Edit a note's body in an external text editor."""
    if not note_id or not note_id.strip():
        print("Error: Note ID is required. Usage: /edit <note_id>\n")
        return

    note_id = note_id.strip()

    try:
        response = httpx.get(f"{API_URL}/notes/{note_id}", timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        note = response.json()
    except httpx.HTTPError as e:
        _report_http_error(e, "retrieve note", note_id)
        return

    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".md", delete=False, encoding="utf-8"
    ) as tmp_file:
        tmp_file.write(note.get("body", ""))
        tmp_file_path = Path(tmp_file.name)

    try:
        editor = _get_editor()
        print(f"\nOpening editor ({editor})... save and close it to update the note.\n")

        try:
            subprocess.run([editor, str(tmp_file_path)], check=True)
        except subprocess.CalledProcessError:
            print(f"\nError: Editor '{editor}' exited with an error.\n")
            return
        except FileNotFoundError:
            print(f"\nError: Editor '{editor}' not found.\n")
            print("You can set your preferred editor with: export EDITOR=nano\n")
            return

        body = tmp_file_path.read_text(encoding="utf-8")
        if body == note.get("body", ""):
            print("No changes.\n")
            return

        updated = _patch_note(note_id, {"body": body}, "update note")
        if updated is not None:
            print("\n✓ Note saved!")
            print(f"  Updated: {_format_ms(updated.get('updatedAt'))}\n")
    finally:
        tmp_file_path.unlink(missing_ok=True)


def _get_editor():
    """Get the user's preferred text editor."""
    editor = os.environ.get("EDITOR") or os.environ.get("VISUAL")
    if editor:
        return editor

    if sys.platform == "win32":
        return "notepad"

    for editor_cmd in ["nano", "vim", "vi"]:
        try:
            subprocess.run(
                ["which", editor_cmd],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=True,
            )
            return editor_cmd
        except (subprocess.CalledProcessError, FileNotFoundError):
            continue

    return "vi"
