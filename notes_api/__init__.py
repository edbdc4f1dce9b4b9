"""Local-first notes service: note store, persistence and markdown preview."""

__version__ = "0.1.0"
