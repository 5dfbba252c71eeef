"""Tests for the key/value store and first-run seeding.

Covers:
- load of an absent key returns []
- save/load of a collection
- corrupt or non-list values are tolerated
- single-value session record: save_value/load_value/remove
- quota overflow raises StoreFailure and leaves the old value
- seed_defaults seeds every collection once and never overwrites
"""

import pytest
from sqlalchemy import select

from fleetdesk.exceptions import StoreFailure
from fleetdesk.models.storage_entry import StorageEntry
from fleetdesk.services.storage import CollectionKey, KeyValueStore, seed_defaults


def _write_raw(store: KeyValueStore, key: CollectionKey, text: str) -> None:
    with store._session_factory() as session:
        session.add(StorageEntry(key=store.storage_key(key), value=text))
        session.commit()


class TestKeyValueStore:
    def test_absent_key_loads_empty(self, store):
        assert store.load(CollectionKey.ships) == []
        assert store.contains(CollectionKey.ships) is False

    def test_save_and_load(self, store):
        records = [{"id": "s1", "name": "Ever Given"}, {"id": "s2", "name": "MSC Oscar"}]
        store.save(CollectionKey.ships, records)

        assert store.contains(CollectionKey.ships) is True
        assert store.load(CollectionKey.ships) == records

    def test_save_rewrites_whole_collection(self, store):
        store.save(CollectionKey.ships, [{"id": "s1"}, {"id": "s2"}])
        store.save(CollectionKey.ships, [{"id": "s3"}])
        assert store.load(CollectionKey.ships) == [{"id": "s3"}]

    def test_keys_are_prefixed(self, store):
        store.save(CollectionKey.jobs, [])
        with store._session_factory() as session:
            keys = session.execute(select(StorageEntry.key)).scalars().all()
        assert keys == ["ship_maintenance_jobs"]

    def test_corrupt_value_loads_empty(self, store):
        _write_raw(store, CollectionKey.components, "{not json")
        assert store.load(CollectionKey.components) == []

    def test_non_list_value_loads_empty(self, store):
        _write_raw(store, CollectionKey.components, '{"id": "c1"}')
        assert store.load(CollectionKey.components) == []

    def test_session_value_roundtrip(self, store):
        assert store.load_value(CollectionKey.current_user) is None
        store.save_value(CollectionKey.current_user, {"id": "1", "name": "John Admin"})
        assert store.load_value(CollectionKey.current_user) == {"id": "1", "name": "John Admin"}

        store.remove(CollectionKey.current_user)
        assert store.load_value(CollectionKey.current_user) is None

    def test_remove_absent_key_is_noop(self, store):
        store.remove(CollectionKey.current_user)
        assert store.contains(CollectionKey.current_user) is False

    def test_quota_exceeded_raises_and_keeps_old_value(self, store):
        store.quota_bytes = 64
        store.save(CollectionKey.ships, [{"id": "s1"}])

        with pytest.raises(StoreFailure) as exc_info:
            store.save(CollectionKey.ships, [{"id": f"s{i}", "name": "x" * 20} for i in range(10)])

        assert exc_info.value.key == "ship_maintenance_ships"
        assert store.load(CollectionKey.ships) == [{"id": "s1"}]


class TestSeeding:
    def test_seeds_every_collection(self, store):
        seeded = seed_defaults(store)

        assert set(seeded) == {
            CollectionKey.users,
            CollectionKey.ships,
            CollectionKey.components,
            CollectionKey.jobs,
            CollectionKey.notifications,
        }
        assert len(store.load(CollectionKey.users)) == 3
        assert len(store.load(CollectionKey.ships)) == 3
        assert len(store.load(CollectionKey.components)) == 4
        assert len(store.load(CollectionKey.jobs)) == 3
        assert store.load(CollectionKey.notifications) == []
        assert store.contains(CollectionKey.current_user) is False

    def test_seeding_is_idempotent(self, store):
        seed_defaults(store)
        store.save(CollectionKey.ships, [{"id": "s9", "name": "Only Ship"}])

        assert seed_defaults(store) == []
        assert store.load(CollectionKey.ships) == [{"id": "s9", "name": "Only Ship"}]

    def test_seeds_only_missing_keys(self, store):
        store.save(CollectionKey.jobs, [])
        seeded = seed_defaults(store)

        assert CollectionKey.jobs not in seeded
        assert store.load(CollectionKey.jobs) == []
        assert len(store.load(CollectionKey.ships)) == 3
