"""
Business logic for user records.

Every operation reloads the whole collection from the store, works on
it in memory and, for writes, saves the whole collection back.  Ids are
compared after parsing with :func:`parse_id`, so a record stored with
``"id": "3"`` answers to ``/data/3`` and a non-numeric path id never
matches anything.

Write failures surface as :class:`StorageError`; the endpoints turn
them into 500 responses.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from user_directory_api.app.core.storage import Record, RecordStore, parse_id
from user_directory_api.app.schemas.user import UserPayload

logger = logging.getLogger(__name__)


def _matches(record: Any, wanted: int) -> bool:
    return isinstance(record, dict) and parse_id(record.get("id")) == wanted


class UserService:
    """CRUD operations over the user collection."""

    @classmethod
    async def list_users(cls, store: RecordStore) -> List[Record]:
        """Return the whole collection as stored."""
        return store.load()

    @classmethod
    async def get_user(cls, store: RecordStore, raw_id: Any) -> Optional[Record]:
        """Return the first record whose id matches ``raw_id``, or ``None``."""
        wanted = parse_id(raw_id)
        if wanted is None:
            return None
        return next((record for record in store.load() if _matches(record, wanted)), None)

    @classmethod
    async def create_user(cls, store: RecordStore, data: UserPayload) -> Record:
        """Append a new record with a freshly assigned id and persist it."""
        with store.transaction() as records:
            record: Dict[str, Any] = {"id": store.next_id(records), **data.to_fields()}
            records.append(record)
            store.save(records)
        logger.info("Created user %s", record["id"])
        return record

    @classmethod
    async def update_user(cls, store: RecordStore, raw_id: Any, data: UserPayload) -> Optional[Record]:
        """Replace the matching record wholesale, keeping its id.

        Fields missing from ``data`` are not carried over from the
        previous version.  Returns ``None`` when no record matches.
        """
        wanted = parse_id(raw_id)
        if wanted is None:
            return None
        with store.transaction() as records:
            index = next((i for i, record in enumerate(records) if _matches(record, wanted)), None)
            if index is None:
                return None
            record = {"id": wanted, **data.to_fields()}
            records[index] = record
            store.save(records)
        logger.info("Updated user %s", wanted)
        return record

    @classmethod
    async def delete_user(cls, store: RecordStore, raw_id: Any) -> bool:
        """Remove every record whose id matches.

        Returns ``True`` if at least one record was removed.  Nothing is
        written when there was no match.
        """
        wanted = parse_id(raw_id)
        if wanted is None:
            return False
        with store.transaction() as records:
            remaining = [record for record in records if not _matches(record, wanted)]
            if len(remaining) == len(records):
                return False
            store.save(remaining)
        logger.info("Deleted user %s", wanted)
        return True
