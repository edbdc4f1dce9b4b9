"""Durable key-value storage for the note store."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

import structlog

# Initialize logger
logger = structlog.get_logger(__name__)

DEFAULT_HOME = Path.home() / ".ocean-notes"


class StorageMedium(Protocol):
    """A string key-value slot that survives restarts."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class FileStorage:
    """One UTF-8 file per key under a data directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path_for(self, key: str) -> Path:
        # Keys like "ocean-notes:v1" are not valid file names everywhere
        return self.root / f"{quote(key, safe='')}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("persisted_state_unparseable", key=key, path=str(path))
            return None

    def set_item(self, key: str, value: str) -> None:
        """Replace the value for key. Errors from the filesystem propagate."""
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)

        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("storage_item_written", key=key, path=str(path), size=len(value))


class MemoryStorage:
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


def get_storage_home() -> Path:
    """Get the data directory (~/.ocean-notes or OCEAN_NOTES_HOME)."""
    if env_home := os.getenv("OCEAN_NOTES_HOME"):
        return Path(env_home)
    return DEFAULT_HOME


def get_storage() -> StorageMedium | None:
    """
    Build the storage medium selected by OCEAN_NOTES_STORAGE.

    Returns None for "none": the store then runs without persistence.
    """
    kind = os.getenv("OCEAN_NOTES_STORAGE", "file").lower()

    if kind == "none":
        logger.info("storage_disabled")
        return None

    if kind == "memory":
        logger.info("storage_configured", kind="memory")
        return MemoryStorage()

    if kind != "file":
        raise ValueError(f"Invalid OCEAN_NOTES_STORAGE: {kind}")

    home = get_storage_home()
    logger.info("storage_configured", kind="file", path=str(home))
    return FileStorage(home)
