"""Entity repository: typed CRUD over the stored collections.

Every operation reads the whole collection from the store, applies its change
and writes the whole collection back. The repository performs no business
validation: foreign keys, required fields and the completed-date convention
belong to the caller (see ``fleetdesk.services.validation``).

Unknown ids are not errors: ``update`` returns ``None`` and ``delete``
returns ``False`` without writing anything.

Stored records that cannot be decoded at all (no id, a non-text id) are
skipped with a warning, like the corrupt values the store itself discards.
The next write of that collection drops them.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Generic, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from fleetdesk.exceptions import ValidationFailure
from fleetdesk.schemas.component import Component, ComponentCreate, ComponentUpdate
from fleetdesk.schemas.job import Job, JobCreate, JobUpdate
from fleetdesk.schemas.notification import Notification
from fleetdesk.schemas.ship import Ship, ShipCreate, ShipUpdate
from fleetdesk.schemas.user import Role, User, UserWithPassword
from fleetdesk.services.storage import CollectionKey, KeyValueStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

Fields = Mapping[str, Any] | BaseModel


def new_id(prefix: str) -> str:
    """Return a fresh id such as ``s3f2a...``; unique per call, never reused."""
    return f"{prefix}{uuid.uuid4().hex}"


def decode_records(model: type[RecordT], raw_records: list[dict[str, Any]], key: CollectionKey) -> list[RecordT]:
    records = []
    for raw in raw_records:
        try:
            records.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning(
                "Skipping undecodable record %r in %s (%d errors)", raw.get("id"), key.value, exc.error_count()
            )
    return records


def _invalid(key: CollectionKey, exc: ValidationError) -> ValidationFailure:
    fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
    return ValidationFailure(f"Invalid {key.value} fields", fields=fields)


class Repository(Generic[RecordT]):
    """CRUD over one collection.

    Subclasses set ``key``, ``id_prefix`` and the record/create/update models.
    """

    key: CollectionKey
    id_prefix: str
    record_model: type[RecordT]
    create_model: type[BaseModel]
    update_model: type[BaseModel]

    def __init__(self, store: KeyValueStore):
        self.store = store

    # ------------------------------------------------------------------
    # Serialization helpers
    # ------------------------------------------------------------------

    def _load(self) -> list[RecordT]:
        return decode_records(self.record_model, self.store.load(self.key), self.key)

    def _save(self, records: list[RecordT]) -> None:
        self.store.save(self.key, [record.to_record() for record in records])

    def _create_fields(self, fields: Fields) -> dict[str, Any]:
        if not isinstance(fields, self.create_model):
            fields = self.create_model.model_validate(
                fields.model_dump(exclude_unset=True) if isinstance(fields, BaseModel) else dict(fields)
            )
        data = fields.model_dump()
        data.pop("id", None)
        return data

    def _update_fields(self, changes: Fields) -> dict[str, Any]:
        if not isinstance(changes, self.update_model):
            raw = changes.model_dump(exclude_unset=True) if isinstance(changes, BaseModel) else dict(changes)
            raw.pop("id", None)
            changes = self.update_model.model_validate(raw)
        return changes.model_dump(exclude_unset=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[RecordT]:
        return self._load()

    def get_by_id(self, record_id: str) -> RecordT | None:
        for record in self._load():
            if record.id == record_id:
                return record
        return None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add(self, fields: Fields) -> RecordT:
        """Append a new record built from ``fields`` under a fresh id."""
        try:
            record = self.record_model.model_validate({**self._create_fields(fields), "id": new_id(self.id_prefix)})
        except ValidationError as exc:
            raise _invalid(self.key, exc) from exc
        records = self._load()
        records.append(record)
        self._save(records)
        logger.debug("Added %s %s", self.key.value, record.id)
        return record

    def update(self, record_id: str, changes: Fields) -> RecordT | None:
        """Shallow-merge ``changes`` into the record; omitted fields keep their value."""
        records = self._load()
        for index, record in enumerate(records):
            if record.id != record_id:
                continue
            try:
                merged = {**record.model_dump(), **self._update_fields(changes), "id": record.id}
                records[index] = self.record_model.model_validate(merged)
            except ValidationError as exc:
                raise _invalid(self.key, exc) from exc
            self._save(records)
            logger.debug("Updated %s %s", self.key.value, record_id)
            return records[index]
        logger.debug("Update of unknown %s %s ignored", self.key.value, record_id)
        return None

    def delete(self, record_id: str) -> bool:
        """Remove the record. Dependent records are left in place."""
        records = self._load()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        logger.debug("Deleted %s %s", self.key.value, record_id)
        return True


class ShipRepository(Repository[Ship]):
    key = CollectionKey.ships
    id_prefix = "s"
    record_model = Ship
    create_model = ShipCreate
    update_model = ShipUpdate


class ComponentRepository(Repository[Component]):
    key = CollectionKey.components
    id_prefix = "c"
    record_model = Component
    create_model = ComponentCreate
    update_model = ComponentUpdate

    def list_by_ship(self, ship_id: str) -> list[Component]:
        return [c for c in self._load() if c.ship_id == ship_id]


class JobRepository(Repository[Job]):
    key = CollectionKey.jobs
    id_prefix = "j"
    record_model = Job
    create_model = JobCreate
    update_model = JobUpdate

    def list_by_ship(self, ship_id: str) -> list[Job]:
        return [j for j in self._load() if j.ship_id == ship_id]

    def list_by_component(self, component_id: str) -> list[Job]:
        return [j for j in self._load() if j.component_id == component_id]


class NotificationRepository:
    """The notification feed, most recent first."""

    key = CollectionKey.notifications
    id_prefix = "n"

    def __init__(self, store: KeyValueStore):
        self.store = store

    def list(self) -> list[Notification]:
        return decode_records(Notification, self.store.load(self.key), self.key)

    def _save(self, notifications: list[Notification]) -> None:
        self.store.save(self.key, [n.to_record() for n in notifications])

    def prepend(self, notification: Notification) -> Notification:
        notifications = self.list()
        notifications.insert(0, notification)
        self._save(notifications)
        return notification

    def mark_read(self, notification_id: str) -> bool:
        notifications = self.list()
        for index, notification in enumerate(notifications):
            if notification.id == notification_id:
                notifications[index] = notification.model_copy(update={"read": True})
                self._save(notifications)
                return True
        return False

    def unread_count(self) -> int:
        return sum(1 for n in self.list() if not n.read)

    def for_user(self, user_id: str) -> list[Notification]:
        """Broadcasts plus the notifications addressed to ``user_id``."""
        return [n for n in self.list() if n.audience.includes(user_id)]


class UserDirectory:
    """Read-only access to the seeded user list."""

    key = CollectionKey.users

    def __init__(self, store: KeyValueStore):
        self.store = store

    def credentials(self) -> list[UserWithPassword]:
        return decode_records(UserWithPassword, self.store.load(self.key), self.key)

    def list(self) -> list[User]:
        return [user.without_password() for user in self.credentials()]

    def get_by_id(self, user_id: str) -> User | None:
        for user in self.list():
            if user.id == user_id:
                return user
        return None

    def list_by_role(self, role: Role | str) -> list[User]:
        return [user for user in self.list() if user.role == role]
