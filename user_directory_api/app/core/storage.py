"""
Flat-file persistence for the user collection.

The whole collection lives in one JSON document: an array of record
objects written with two-space indentation.  ``RecordStore`` reads and
rewrites that document as a unit and hands out new ids.  Mutating
callers should go through :meth:`RecordStore.transaction`, which holds
the store lock across load, mutation and save so that two concurrent
creates cannot compute the same id or overwrite each other's write.

Reads fail open: a missing, empty or unparsable document is treated as
an empty collection and the problem is logged.  Writes do not: a failed
save is logged and re-raised as :class:`StorageError`.
"""

from __future__ import annotations

import json
import logging
import math
import os
import re
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence

from .config import settings

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


class StorageError(Exception):
    """Raised when the collection cannot be written to disk."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Failed to write {path}: {cause}")
        self.path = path
        self.cause = cause


def parse_id(value: Any) -> Optional[int]:
    """Return the integer id represented by ``value`` or ``None``.

    Integers are used as-is, finite floats are truncated and strings
    contribute their leading (optionally signed) digits, so ``"7"`` and
    ``" 7x"`` both give 7.  Booleans, ``None`` and strings without
    leading digits are not ids.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def next_id(records: Sequence[Record]) -> int:
    """Return the id for a new record: one more than the largest numeric id, or 1."""
    numeric_ids = [
        parsed
        for parsed in (parse_id(record.get("id")) for record in records if isinstance(record, dict))
        if parsed is not None
    ]
    if not numeric_ids:
        return 1
    return max(numeric_ids) + 1


class RecordStore:
    """Whole-collection JSON store for user records."""

    def __init__(self, path: os.PathLike | str) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> List[Record]:
        """Read the collection, returning ``[]`` when it is absent or unreadable."""
        with self._lock:
            if not self.path.exists():
                return []
            try:
                text = self.path.read_text(encoding="utf-8")
            except OSError as exc:
                logger.error("Error reading %s: %s", self.path, exc)
                return []
            if not text.strip():
                return []
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                logger.error("Error parsing %s: %s", self.path, exc)
                return []
            if not isinstance(data, list):
                logger.error(
                    "Error parsing %s: expected a JSON array, got %s",
                    self.path,
                    type(data).__name__,
                )
                return []
            return data

    def save(self, records: Sequence[Record]) -> None:
        """Overwrite the document with ``records``.

        The collection is written to a temporary sibling first and moved
        into place with ``os.replace`` so readers never see a half
        written file.
        """
        with self._lock:
            tmp = self.path.with_name(self.path.name + ".tmp")
            try:
                payload = json.dumps(list(records), indent=2, ensure_ascii=False)
                self.path.parent.mkdir(parents=True, exist_ok=True)
                tmp.write_text(payload, encoding="utf-8")
                os.replace(tmp, self.path)
            except (OSError, TypeError, ValueError) as exc:
                logger.error("Error writing %s: %s", self.path, exc)
                tmp.unlink(missing_ok=True)
                raise StorageError(self.path, exc) from exc

    def next_id(self, records: Sequence[Record]) -> int:
        return next_id(records)

    @contextmanager
    def transaction(self) -> Iterator[List[Record]]:
        """Hold the store lock and yield the loaded collection.

        The caller mutates the yielded list and calls :meth:`save`
        itself; nothing is written implicitly.
        """
        with self._lock:
            yield self.load()


_stores: Dict[Path, RecordStore] = {}
_stores_lock = threading.Lock()


def get_store() -> RecordStore:
    """Return the shared store for ``settings.data_file``.

    One instance exists per resolved path so every request for the same
    document shares a lock.  Used as a FastAPI dependency.
    """
    path = Path(settings.data_file).resolve()
    with _stores_lock:
        store = _stores.get(path)
        if store is None:
            store = RecordStore(path)
            _stores[path] = store
        return store
