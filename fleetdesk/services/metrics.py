"""Derived views over ship/component/job snapshots.

Everything here is a pure function of the records passed in (and ``now``).
Nothing is persisted: overdue status and KPIs are recomputed on every call.

Dates without a time component are treated as local midnight of that day,
so a component due "2024-09-12" becomes overdue at 2024-09-12 00:00:00.001.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Iterable, Sequence

from fleetdesk.schemas.component import Component, ComponentStatus
from fleetdesk.schemas.job import Job, JobPriority, JobStatus
from fleetdesk.schemas.ship import Ship, ShipStatus

HIGH_PRIORITIES = frozenset({JobPriority.high, JobPriority.critical})


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------

def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now()


def day_start(day: date, reference: datetime) -> datetime:
    """Midnight of ``day`` in the same timezone (or naivety) as ``reference``."""
    return datetime.combine(day, time.min, tzinfo=reference.tzinfo)


def _local_naive(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def _as_day(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def percentage(part: int, whole: int, empty: int = 0) -> int:
    """Rounded percentage, halves rounded up; ``empty`` when ``whole`` is 0."""
    if whole == 0:
        return empty
    return math.floor(100 * part / whole + 0.5)


# ---------------------------------------------------------------------------
# Overdue detection
# ---------------------------------------------------------------------------

def is_overdue(component: Component, now: datetime | None = None) -> bool:
    """True iff ``now`` is strictly after the component's next maintenance date.

    A component without a due date is never overdue.
    """
    if component.next_maintenance_date is None:
        return False
    now = _now(now)
    return now > day_start(component.next_maintenance_date, now)


def overdue_components(components: Iterable[Component], now: datetime | None = None) -> list[Component]:
    now = _now(now)
    return [c for c in components if is_overdue(c, now)]


# ---------------------------------------------------------------------------
# KPIs
# ---------------------------------------------------------------------------

def fleet_efficiency(ships: Sequence[Ship]) -> int:
    active = sum(1 for s in ships if s.status == ShipStatus.active)
    return percentage(active, len(ships), empty=0)


def maintenance_compliance(components: Sequence[Component], now: datetime | None = None) -> int:
    overdue = len(overdue_components(components, now))
    return percentage(len(components) - overdue, len(components), empty=100)


def completion_rate(jobs: Sequence[Job]) -> int:
    completed = sum(1 for j in jobs if j.status == JobStatus.completed)
    return percentage(completed, len(jobs), empty=0)


def active_jobs_count(jobs: Iterable[Job]) -> int:
    """Jobs that are Open or In Progress."""
    return sum(1 for j in jobs if j.is_active)


def outstanding_by_priority(jobs: Iterable[Job]) -> dict[JobPriority, int]:
    """Count of not-yet-completed jobs per priority, every priority present."""
    counts = Counter(j.priority for j in jobs if j.status != JobStatus.completed)
    return {priority: counts.get(priority, 0) for priority in JobPriority}


@dataclass(frozen=True)
class KpiSnapshot:
    total_ships: int
    active_ships: int
    ships_under_maintenance: int
    total_components: int
    overdue_components: int
    total_jobs: int
    open_jobs: int
    in_progress_jobs: int
    completed_jobs: int
    active_jobs: int
    critical_jobs: int
    high_priority_jobs: int
    fleet_efficiency: int
    maintenance_compliance: int
    completion_rate: int


def kpi_snapshot(
    ships: Sequence[Ship],
    components: Sequence[Component],
    jobs: Sequence[Job],
    now: datetime | None = None,
) -> KpiSnapshot:
    now = _now(now)
    statuses = Counter(j.status for j in jobs)
    outstanding = outstanding_by_priority(jobs)
    return KpiSnapshot(
        total_ships=len(ships),
        active_ships=sum(1 for s in ships if s.status == ShipStatus.active),
        ships_under_maintenance=sum(1 for s in ships if s.status == ShipStatus.under_maintenance),
        total_components=len(components),
        overdue_components=len(overdue_components(components, now)),
        total_jobs=len(jobs),
        open_jobs=statuses.get(JobStatus.open, 0),
        in_progress_jobs=statuses.get(JobStatus.in_progress, 0),
        completed_jobs=statuses.get(JobStatus.completed, 0),
        active_jobs=active_jobs_count(jobs),
        critical_jobs=outstanding[JobPriority.critical],
        high_priority_jobs=outstanding[JobPriority.high],
        fleet_efficiency=fleet_efficiency(ships),
        maintenance_compliance=maintenance_compliance(components, now),
        completion_rate=completion_rate(jobs),
    )


# ---------------------------------------------------------------------------
# Cross references
# ---------------------------------------------------------------------------

def ship_name_for(job: Job, ships: Iterable[Ship]) -> str | None:
    """Name of the job's ship, or None if that ship no longer exists."""
    return next((s.name for s in ships if s.id == job.ship_id), None)


def component_name_for(job: Job, components: Iterable[Component]) -> str | None:
    return next((c.name for c in components if c.id == job.component_id), None)


@dataclass(frozen=True)
class JobListing:
    job: Job
    ship_name: str | None
    component_name: str | None


def describe_jobs(jobs: Iterable[Job], ships: Sequence[Ship], components: Sequence[Component]) -> list[JobListing]:
    return [
        JobListing(job=j, ship_name=ship_name_for(j, ships), component_name=component_name_for(j, components))
        for j in jobs
    ]


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

def jobs_on_day(jobs: Iterable[Job], day: date | datetime) -> list[Job]:
    day = _as_day(day)
    return [j for j in jobs if j.scheduled_date == day]


def _in_month(job: Job, year: int, month: int) -> bool:
    if job.scheduled_date is None:
        return False
    return job.scheduled_date.year == year and job.scheduled_date.month == month


def days_with_jobs(jobs: Iterable[Job], year: int, month: int) -> list[date]:
    """Sorted days of the given month that have at least one scheduled job."""
    return sorted({j.scheduled_date for j in jobs if _in_month(j, year, month)})


def has_jobs_on(jobs: Iterable[Job], day: date | datetime) -> bool:
    return bool(jobs_on_day(jobs, day))


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    total: int
    open: int
    in_progress: int
    completed: int
    days_with_jobs: list[date] = field(default_factory=list)


def month_summary(jobs: Sequence[Job], year: int, month: int) -> MonthSummary:
    in_month = [j for j in jobs if _in_month(j, year, month)]
    statuses = Counter(j.status for j in in_month)
    return MonthSummary(
        year=year,
        month=month,
        total=len(in_month),
        open=statuses.get(JobStatus.open, 0),
        in_progress=statuses.get(JobStatus.in_progress, 0),
        completed=statuses.get(JobStatus.completed, 0),
        days_with_jobs=days_with_jobs(in_month, year, month),
    )


def upcoming_high_priority(jobs: Iterable[Job], now: datetime | None = None, limit: int = 5) -> list[Job]:
    """High/Critical jobs not yet completed, scheduled from ``now`` on, soonest first."""
    now = _now(now)
    upcoming = [
        j
        for j in jobs
        if j.scheduled_date is not None
        and day_start(j.scheduled_date, now) >= now
        and j.priority in HIGH_PRIORITIES
        and j.status != JobStatus.completed
    ]
    upcoming.sort(key=lambda j: j.scheduled_date)
    return upcoming[:limit]


# ---------------------------------------------------------------------------
# Ship detail
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShipSummary:
    ship_id: str
    component_count: int
    components_requiring_maintenance: int
    open_jobs: int
    completed_jobs: int
    maintenance_history: list[Job]


def maintenance_history(jobs: Iterable[Job]) -> list[Job]:
    """Completed jobs, most recently completed first; undated ones last."""
    completed = [j for j in jobs if j.status == JobStatus.completed]
    return sorted(
        completed,
        key=lambda j: (j.completed_date is not None, _local_naive(j.completed_date) if j.completed_date else datetime.min),
        reverse=True,
    )


def ship_summary(ship_id: str, components: Iterable[Component], jobs: Iterable[Job]) -> ShipSummary:
    ship_components = [c for c in components if c.ship_id == ship_id]
    ship_jobs = [j for j in jobs if j.ship_id == ship_id]
    history = maintenance_history(ship_jobs)
    return ShipSummary(
        ship_id=ship_id,
        component_count=len(ship_components),
        components_requiring_maintenance=sum(
            1 for c in ship_components if c.status == ComponentStatus.maintenance_required
        ),
        open_jobs=sum(1 for j in ship_jobs if j.status != JobStatus.completed),
        completed_jobs=len(history),
        maintenance_history=history,
    )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def search_ships(ships: Iterable[Ship], term: str = "") -> list[Ship]:
    """Case-insensitive match on name or flag; IMO matched as typed."""
    needle = term.lower()
    return [s for s in ships if needle in s.name.lower() or term in s.imo or needle in s.flag.lower()]


def filter_jobs(
    jobs: Iterable[Job],
    ships: Sequence[Ship],
    components: Sequence[Component],
    term: str = "",
    status: JobStatus | str | None = None,
    priority: JobPriority | str | None = None,
) -> list[Job]:
    """Jobs whose description, ship name or component name contains ``term``."""
    needle = term.lower()
    matches = []
    for listing in describe_jobs(jobs, ships, components):
        job = listing.job
        names = [job.description, listing.ship_name or "", listing.component_name or ""]
        if needle and not any(needle in name.lower() for name in names):
            continue
        if status is not None and job.status != status:
            continue
        if priority is not None and job.priority != priority:
            continue
        matches.append(job)
    return matches
