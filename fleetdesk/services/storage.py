"""Persistent store: whole-collection JSON values kept under fixed string keys.

Responsibilities:
  - Map each collection (users, ships, components, jobs, notifications,
    current session user) to a storage key
  - Load a collection, tolerating absent or corrupt values
  - Save a collection by rewriting it in full (last write wins)
  - Seed the built-in dataset for keys that do not exist yet

There is no business logic here; repositories own the record semantics.
"""

import enum
import json
import logging
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from fleetdesk.exceptions import StoreFailure
from fleetdesk.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)


class CollectionKey(str, enum.Enum):
    users = "users"
    ships = "ships"
    components = "components"
    jobs = "jobs"
    notifications = "notifications"
    current_user = "current_user"


class KeyValueStore:
    def __init__(
        self,
        session_factory: sessionmaker[Session],
        key_prefix: str = "ship_maintenance_",
        quota_bytes: int | None = None,
    ):
        self._session_factory = session_factory
        self.key_prefix = key_prefix
        self.quota_bytes = quota_bytes

    def storage_key(self, key: CollectionKey) -> str:
        return f"{self.key_prefix}{key.value}"

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def _read(self, key: CollectionKey) -> str | None:
        with self._session_factory() as session:
            entry = session.get(StorageEntry, self.storage_key(key))
            return entry.value if entry is not None else None

    def _write(self, key: CollectionKey, payload: Any) -> None:
        storage_key = self.storage_key(key)
        text = json.dumps(payload, ensure_ascii=False)
        if self.quota_bytes is not None and len(text.encode("utf-8")) > self.quota_bytes:
            raise StoreFailure(
                f"Storage quota exceeded writing {storage_key} "
                f"({len(text.encode('utf-8'))} > {self.quota_bytes} bytes)",
                key=storage_key,
            )
        try:
            with self._session_factory() as session:
                entry = session.get(StorageEntry, storage_key)
                if entry is None:
                    session.add(StorageEntry(key=storage_key, value=text))
                else:
                    entry.value = text
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to write %s: %s", storage_key, exc)
            raise StoreFailure(f"Failed to write {storage_key}", key=storage_key) from exc
        logger.debug("Saved %s (%d bytes)", storage_key, len(text))

    def contains(self, key: CollectionKey) -> bool:
        with self._session_factory() as session:
            result = session.execute(
                select(StorageEntry.key).where(StorageEntry.key == self.storage_key(key))
            )
            return result.scalar_one_or_none() is not None

    def remove(self, key: CollectionKey) -> None:
        storage_key = self.storage_key(key)
        try:
            with self._session_factory() as session:
                entry = session.get(StorageEntry, storage_key)
                if entry is not None:
                    session.delete(entry)
                    session.commit()
        except SQLAlchemyError as exc:
            logger.error("Failed to remove %s: %s", storage_key, exc)
            raise StoreFailure(f"Failed to remove {storage_key}", key=storage_key) from exc

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def load(self, key: CollectionKey) -> list[dict[str, Any]]:
        """Return the records stored under ``key``; ``[]`` if absent or unreadable."""
        text = self._read(key)
        if text is None:
            return []
        try:
            payload = json.loads(text)
        except ValueError:
            logger.warning("Discarding corrupt value under %s", self.storage_key(key))
            return []
        if not isinstance(payload, list):
            logger.warning("Expected a list under %s, got %s", self.storage_key(key), type(payload).__name__)
            return []
        return [record for record in payload if isinstance(record, dict)]

    def save(self, key: CollectionKey, records: Iterable[dict[str, Any]]) -> None:
        """Rewrite the whole collection. Raises StoreFailure; never retries."""
        self._write(key, list(records))

    # ------------------------------------------------------------------
    # Single values
    # ------------------------------------------------------------------

    def load_value(self, key: CollectionKey) -> dict[str, Any] | None:
        text = self._read(key)
        if text is None:
            return None
        try:
            payload = json.loads(text)
        except ValueError:
            logger.warning("Discarding corrupt value under %s", self.storage_key(key))
            return None
        return payload if isinstance(payload, dict) else None

    def save_value(self, key: CollectionKey, record: dict[str, Any]) -> None:
        self._write(key, record)


def seed_defaults(
    store: KeyValueStore, dataset: dict[CollectionKey, list[dict[str, Any]]] | None = None
) -> list[CollectionKey]:
    """Write the built-in dataset under every key that is still absent.

    Existing keys are never touched, so calling this repeatedly is safe.
    Returns the keys that were seeded.
    """
    if dataset is None:
        from fleetdesk.data.seed import SEED_DATA

        dataset = SEED_DATA

    seeded: list[CollectionKey] = []
    for key, records in dataset.items():
        if store.contains(key):
            continue
        store.save(key, records)
        seeded.append(key)
        logger.info("Seeded %s with %d records", store.storage_key(key), len(records))
    return seeded
