"""Domain services for the note store and markdown preview."""
