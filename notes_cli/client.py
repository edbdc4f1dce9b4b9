"""Main CLI client with REPL loop."""

import os

from .commands import (
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

HELP = """
Note Commands:
  /new - Create a new note
  /list [query] - List notes, optionally filtered by text
  /tag <tag> - List notes carrying a tag
  /view <id> - Show a note
  /preview <id> - Show a note's HTML preview
  /edit <id> - Edit a note's body in $EDITOR
  /rename <id> <title> - Change a note's title
  /tags <id> <tag1, tag2> - Replace a note's tags
  /select <id> - Select a note
  /delete <id> - Delete a note
  /alltags - List every tag in use

Utility Commands:
  /help - Show this help
  /clear - Clear the terminal screen
"""


def handle_command(user_input: str) -> bool:
    """Dispatch one line of input. Returns False for unknown commands."""
    command, _, args = user_input.partition(" ")
    command = command.lower()

    if command == "/new":
        create_note()
    elif command == "/list":
        list_notes(query=args)
    elif command == "/tag":
        list_notes(tag=args)
    elif command == "/view":
        view_note(args)
    elif command == "/preview":
        preview_note(args)
    elif command == "/edit":
        edit_note(args)
    elif command == "/rename":
        rename_note(args)
    elif command == "/tags":
        tag_note(args)
    elif command == "/select":
        select_note(args)
    elif command == "/delete":
        delete_note(args)
    elif command == "/alltags":
        list_tags()
    elif command == "/help":
        print(HELP)
    elif command == "/clear":
        os.system("cls" if os.name == "nt" else "clear")
    else:
        return False
    return True


def main():
    """CLI client for the Ocean Notes API."""
    print("Welcome to Ocean Notes CLI!")
    print(HELP)
    print("Type 'exit' or 'quit' to leave.")
    print("Note: Make sure the API server is running (python -m notes_api.server)\n")

    while True:
        try:
            user_input = input("notes> ").strip()

            if user_input.lower() in ["exit", "quit"]:
                print("\nGoodbye!")
                break

            if not user_input:
                continue

            if not handle_command(user_input):
                print(f"Unknown command: {user_input.split()[0]}. Type /help for commands.\n")

        except KeyboardInterrupt:
            print("\n\nGoodbye!")
            break
        except EOFError:
            print("\n\nGoodbye!")
            break
