"""Goal annotation store backed by a single JSON file.

The document maps a member tag to a target trophy count:

    {
      "#ABC123": 30000,
      "#XYZ789": 25000
    }

Design goals:
- first run bootstraps an empty document instead of failing
- a present but unreadable document is an error (`StoreCorrupt`), never
  silently treated as empty, so the next write cannot wipe real data
- writes replace the file atomically (temp file + `os.replace`)
- read-modify-write in `upsert` is serialized by a per-store lock

Processes that share the same file are not coordinated with each other: the
last writer wins.
"""

import json
import logging
import os
import tempfile
import threading

from fastapi import Request

from .errors import StoreCorrupt, StoreIOError

logger = logging.getLogger(__name__)


class GoalStore:
    """Tag -> goal mapping persisted as one JSON document."""

    def __init__(self, path):
        self.path = os.fspath(path)
        self._lock = threading.Lock()

    def read_all(self) -> dict[str, int]:
        """Return the full goal mapping.

        Creates an empty document when the file does not exist yet.

        Raises:
            StoreCorrupt: The file is not a JSON object.
            StoreIOError: The file cannot be read or created.
        """
        with self._lock:
            return self._load()

    def upsert(self, tag: str, value: int) -> None:
        """Set the goal for `tag`, keeping every other entry.

        Raises:
            StoreCorrupt: The existing document cannot be parsed; nothing is written.
            StoreIOError: The document cannot be read or written.
        """
        with self._lock:
            goals = self._load()
            goals[tag] = value
            self._dump(goals)
        logger.info("Saved goal %s for %s", value, tag)

    def _load(self) -> dict:
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            logger.info("Goal file %s not found, initializing an empty one", self.path)
            self._dump({})
            return {}
        except OSError as exc:
            raise StoreIOError(f"Failed to read goals: {exc.strerror}") from exc

        try:
            goals = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise StoreCorrupt(f"Goal file {self.path} is not valid JSON") from exc
        if not isinstance(goals, dict):
            raise StoreCorrupt(f"Goal file {self.path} does not contain a JSON object")
        return goals

    def _dump(self, goals: dict) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".goals-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(goals, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StoreIOError(f"Failed to save goals: {exc.strerror}") from exc


def get_store(request: Request) -> GoalStore:
    """FastAPI dependency returning the store built at startup."""
    return request.app.state.store
