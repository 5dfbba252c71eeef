"""FleetDesk: the query/command surface used by pages and forms.

A ``FleetDesk`` is an explicit state object. Callers create one with
``open_desk`` and keep it; nothing in the package holds a global instance.

Commands write through immediately and then call every subscribed listener
with the ``CollectionKey`` that changed, so views know what to re-query.
Passing ``actor`` to a command checks the permission table first and raises
``PermissionDenied`` if the role may not perform it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from sqlalchemy.engine import Engine

from fleetdesk.config import Settings, settings as default_settings
from fleetdesk.database import create_tables, make_engine, make_session_factory
from fleetdesk.exceptions import PermissionDenied
from fleetdesk.schemas.component import Component
from fleetdesk.schemas.job import Job, JobPriority, JobStatus
from fleetdesk.schemas.notification import Notification
from fleetdesk.schemas.ship import Ship
from fleetdesk.schemas.user import Role, User
from fleetdesk.services import job_service, metrics
from fleetdesk.services.auth_service import AuthGate
from fleetdesk.services.permissions import Action, allowed_actions, can_perform
from fleetdesk.services.repository import (
    ComponentRepository,
    Fields,
    JobRepository,
    NotificationRepository,
    ShipRepository,
    UserDirectory,
)
from fleetdesk.services.storage import CollectionKey, KeyValueStore, seed_defaults

logger = logging.getLogger(__name__)

Listener = Callable[[CollectionKey], None]


class FleetDesk:
    def __init__(self, store: KeyValueStore, config: Settings | None = None):
        self.config = config or default_settings
        self.store = store
        self.ships = ShipRepository(store)
        self.components = ComponentRepository(store)
        self.jobs = JobRepository(store)
        self.notifications = NotificationRepository(store)
        self.users = UserDirectory(store)
        self.auth = AuthGate(store, self.users)
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self, *keys: CollectionKey) -> None:
        for key in keys:
            for listener in list(self._listeners):
                listener(key)

    def _authorize(self, actor: Role | str | None, action: Action) -> None:
        if actor is not None and not can_perform(actor, action):
            raise PermissionDenied(getattr(actor, "value", actor), action.value)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def current_user(self) -> User | None:
        return self.auth.current_user

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated

    def allowed_actions(self) -> list[Action]:
        """Actions the signed-in user may perform; none when signed out."""
        user = self.auth.current_user
        return allowed_actions(user.role if user is not None else None)

    def login(self, email: str, password: str) -> User | None:
        user = self.auth.login(email, password)
        if user is not None:
            self._changed(CollectionKey.current_user)
        return user

    def logout(self) -> None:
        self.auth.logout()
        self._changed(CollectionKey.current_user)

    # ------------------------------------------------------------------
    # Ships
    # ------------------------------------------------------------------

    def list_ships(self) -> list[Ship]:
        return self.ships.list()

    def get_ship(self, ship_id: str) -> Ship | None:
        return self.ships.get_by_id(ship_id)

    def add_ship(self, fields: Fields, actor: Role | str | None = None) -> Ship:
        self._authorize(actor, Action.create_ship)
        ship = self.ships.add(fields)
        self._changed(CollectionKey.ships)
        return ship

    def update_ship(self, ship_id: str, changes: Fields, actor: Role | str | None = None) -> Ship | None:
        self._authorize(actor, Action.edit_ship)
        ship = self.ships.update(ship_id, changes)
        if ship is not None:
            self._changed(CollectionKey.ships)
        return ship

    def delete_ship(self, ship_id: str, actor: Role | str | None = None) -> bool:
        """Remove the ship only; its components and jobs are left dangling."""
        self._authorize(actor, Action.delete_ship)
        deleted = self.ships.delete(ship_id)
        if deleted:
            self._changed(CollectionKey.ships)
        return deleted

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def list_components(self, ship_id: str | None = None) -> list[Component]:
        if ship_id is not None:
            return self.components.list_by_ship(ship_id)
        return self.components.list()

    def get_component(self, component_id: str) -> Component | None:
        return self.components.get_by_id(component_id)

    def add_component(self, fields: Fields, actor: Role | str | None = None) -> Component:
        self._authorize(actor, Action.create_component)
        component = self.components.add(fields)
        self._changed(CollectionKey.components)
        return component

    def update_component(
        self, component_id: str, changes: Fields, actor: Role | str | None = None
    ) -> Component | None:
        self._authorize(actor, Action.edit_component)
        component = self.components.update(component_id, changes)
        if component is not None:
            self._changed(CollectionKey.components)
        return component

    def delete_component(self, component_id: str, actor: Role | str | None = None) -> bool:
        self._authorize(actor, Action.delete_component)
        deleted = self.components.delete(component_id)
        if deleted:
            self._changed(CollectionKey.components)
        return deleted

    def overdue_components(self, now: datetime | None = None) -> list[Component]:
        return metrics.overdue_components(self.components.list(), now)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def list_jobs(self, ship_id: str | None = None, component_id: str | None = None) -> list[Job]:
        jobs = self.jobs.list()
        if ship_id is not None:
            jobs = [j for j in jobs if j.ship_id == ship_id]
        if component_id is not None:
            jobs = [j for j in jobs if j.component_id == component_id]
        return jobs

    def get_job(self, job_id: str) -> Job | None:
        return self.jobs.get_by_id(job_id)

    def add_job(self, fields: Fields, actor: Role | str | None = None, now: datetime | None = None) -> Job:
        self._authorize(actor, Action.create_job)
        job, _ = job_service.create_job(self.jobs, self.notifications, fields, now)
        self._changed(CollectionKey.jobs, CollectionKey.notifications)
        return job

    def update_job(
        self,
        job_id: str,
        changes: Fields,
        actor: Role | str | None = None,
        now: datetime | None = None,
    ) -> Job | None:
        self._authorize(actor, Action.edit_job)
        job, notification = job_service.update_job(self.jobs, self.notifications, job_id, changes, now)
        if job is not None:
            self._changed(CollectionKey.jobs)
        if notification is not None:
            self._changed(CollectionKey.notifications)
        return job

    def delete_job(self, job_id: str, actor: Role | str | None = None) -> bool:
        self._authorize(actor, Action.delete_job)
        deleted = job_service.delete_job(self.jobs, job_id)
        if deleted:
            self._changed(CollectionKey.jobs)
        return deleted

    def search_ships(self, term: str = "") -> list[Ship]:
        return metrics.search_ships(self.ships.list(), term)

    def search_jobs(
        self,
        term: str = "",
        status: JobStatus | str | None = None,
        priority: JobPriority | str | None = None,
    ) -> list[Job]:
        return metrics.filter_jobs(
            self.jobs.list(), self.ships.list(), self.components.list(), term, status, priority
        )

    def job_listings(self) -> list[metrics.JobListing]:
        return metrics.describe_jobs(self.jobs.list(), self.ships.list(), self.components.list())

    def engineers(self) -> list[User]:
        return self.users.list_by_role(Role.engineer)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def list_notifications(self, user_id: str | None = None) -> list[Notification]:
        if user_id is not None:
            return self.notifications.for_user(user_id)
        return self.notifications.list()

    def unread_count(self) -> int:
        return self.notifications.unread_count()

    def mark_notification_read(self, notification_id: str) -> bool:
        marked = self.notifications.mark_read(notification_id)
        if marked:
            self._changed(CollectionKey.notifications)
        return marked

    # ------------------------------------------------------------------
    # Dashboard and calendar
    # ------------------------------------------------------------------

    def kpis(self, now: datetime | None = None) -> metrics.KpiSnapshot:
        return metrics.kpi_snapshot(self.ships.list(), self.components.list(), self.jobs.list(), now)

    def ship_summary(self, ship_id: str) -> metrics.ShipSummary:
        return metrics.ship_summary(ship_id, self.components.list(), self.jobs.list())

    def jobs_on_day(self, day: date | datetime) -> list[Job]:
        return metrics.jobs_on_day(self.jobs.list(), day)

    def month_summary(self, year: int, month: int) -> metrics.MonthSummary:
        return metrics.month_summary(self.jobs.list(), year, month)

    def upcoming_high_priority(self, now: datetime | None = None) -> list[Job]:
        return metrics.upcoming_high_priority(self.jobs.list(), now, limit=self.config.upcoming_jobs_limit)


def open_desk(config: Settings | None = None, engine: Engine | None = None) -> FleetDesk:
    """Open the store, seed missing collections and restore the session."""
    config = config or default_settings
    engine = engine or make_engine(config.database_url)
    create_tables(engine)
    store = KeyValueStore(
        make_session_factory(engine),
        key_prefix=config.storage_key_prefix,
        quota_bytes=config.storage_quota_bytes,
    )
    if config.seed_on_startup:
        seed_defaults(store)
    desk = FleetDesk(store, config)
    user = desk.auth.restore()
    logger.info("Desk opened (%s)", f"signed in as {user.id}" if user else "anonymous")
    return desk
