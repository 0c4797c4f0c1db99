# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""File-based persistence for league documents.

Each franchise is one JSON document keyed by an opaque caller-supplied id
(a user or session id). Writes merge into the stored document and go
through a temp file plus rename so a crash never leaves a half-written
league behind. Subscribers are notified after every successful write or
delete.

Usage::

    from data.store import LeagueStore

    store = LeagueStore()                      # uses FRANCHISE_DATA_DIR
    store = LeagueStore("/tmp/leagues")        # custom directory

    store.save("user-123", state, extra={"last_game_result": result.model_dump()})
    state = store.load("user-123")
    store.subscribe("user-123", lambda key, state: print(state.year))
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any, Callable

from pydantic import ValidationError

from models import LeagueState

logger = logging.getLogger(__name__)

STATE_FIELD = "league"

Subscriber = Callable[[str, LeagueState | None], None]


class PersistenceError(Exception):
    """A league document could not be read or written.

    The in-memory state the caller holds is still valid; the operation may
    be retried.
    """


# ---------------------------------------------------------------------------
# Key generation
# ---------------------------------------------------------------------------

def make_key(key: str) -> str:
    """Map an opaque document key to a filesystem-safe name.

    The name is the SHA-256 hex digest of the key, so any characters are
    allowed and the same key always maps to the same file.
    """
    return hashlib.sha256(key.encode()).hexdigest()


def _now() -> float:
    return time.time()


# ---------------------------------------------------------------------------
# Store class
# ---------------------------------------------------------------------------

class LeagueStore:
    """JSON-file store with merge writes and change notification.

    Each document lives at ``<root_dir>/<sha256(key)>.json`` and looks like
    ``{"key": ..., "updated": <timestamp>, "league": {...}, ...extra}``.

    Args:
        root_dir: Directory holding league documents. Created on first
            write. Defaults to the configured data directory.
    """

    def __init__(self, root_dir: str | Path | None = None) -> None:
        if root_dir is None:
            from config import get_data_dir

            root_dir = get_data_dir()
        self._root = Path(root_dir)
        self._subscribers: dict[str, list[Subscriber]] = {}

    # -- public API --------------------------------------------------------

    @property
    def root_dir(self) -> Path:
        return self._root

    def exists(self, key: str) -> bool:
        return self._path_for(key).exists()

    def load_document(self, key: str) -> dict[str, Any] | None:
        """Return the raw stored document, or ``None`` if there is none.

        Raises:
            PersistenceError: the file exists but cannot be read or parsed.
        """
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to read league document %s: %s", path, e)
            raise PersistenceError(f"Could not read league {key!r}: {e}") from e

    def load(self, key: str) -> LeagueState | None:
        """Load the league stored under *key*, or ``None`` if missing.

        Raises:
            PersistenceError: the document is unreadable or fails validation.
        """
        document = self.load_document(key)
        if document is None or STATE_FIELD not in document:
            return None
        try:
            return LeagueState.model_validate(document[STATE_FIELD])
        except ValidationError as e:
            logger.error("League document for %r failed validation: %s", key, e)
            raise PersistenceError(f"League {key!r} is malformed: {e}") from e

    def save(self, key: str, state: LeagueState, extra: dict[str, Any] | None = None) -> Path:
        """Merge *state* (and any *extra* fields) into the stored document.

        Fields already in the document and not given here are kept. An
        unreadable existing document is replaced outright.

        Returns:
            The :class:`Path` of the written document.

        Raises:
            PersistenceError: the document could not be written. The file on
                disk is left as it was.
        """
        path = self._path_for(key)
        try:
            document = self.load_document(key) or {}
        except PersistenceError:
            logger.warning("Replacing unreadable league document for %r", key)
            document = {}
        document.update(extra or {})
        document.update({
            "key": key,
            "updated": _now(),
            STATE_FIELD: state.model_dump(mode="json"),
        })

        tmp_path = path.with_suffix(".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w") as f:
                json.dump(document, f, separators=(",", ":"))
            tmp_path.replace(path)  # atomic rename
        except (OSError, TypeError, ValueError) as e:
            if tmp_path.exists():
                tmp_path.unlink()
            logger.error("Failed to save league %r: %s", key, e)
            raise PersistenceError(f"Could not save league {key!r}: {e}") from e

        self._notify(key, state)
        return path

    def delete(self, key: str) -> bool:
        """Remove the document for *key*. Returns ``False`` if there was none."""
        path = self._path_for(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            logger.error("Failed to delete league %r: %s", key, e)
            raise PersistenceError(f"Could not delete league {key!r}: {e}") from e
        self._notify(key, None)
        return True

    def subscribe(self, key: str, callback: Subscriber) -> None:
        """Call ``callback(key, state)`` after each save or delete of *key*.

        ``state`` is ``None`` when the document was deleted.
        """
        self._subscribers.setdefault(key, []).append(callback)

    def unsubscribe(self, key: str, callback: Subscriber) -> bool:
        callbacks = self._subscribers.get(key, [])
        if callback not in callbacks:
            return False
        callbacks.remove(callback)
        return True

    # -- helpers -----------------------------------------------------------

    def _notify(self, key: str, state: LeagueState | None) -> None:
        for callback in list(self._subscribers.get(key, [])):
            callback(key, state)

    def _path_for(self, key: str) -> Path:
        return self._root / f"{make_key(key)}.json"
