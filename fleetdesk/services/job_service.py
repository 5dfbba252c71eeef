"""Job commands: repository mutations followed by the notification rules.

The job write happens first; a notification is only composed once the job
has been saved.
"""

from datetime import datetime

from fleetdesk.schemas.job import Job
from fleetdesk.schemas.notification import Notification
from fleetdesk.services.notification_service import notify_job_created, notify_job_updated
from fleetdesk.services.repository import Fields, JobRepository, NotificationRepository


def create_job(
    jobs: JobRepository, feed: NotificationRepository, fields: Fields, now: datetime | None = None
) -> tuple[Job, Notification]:
    job = jobs.add(fields)
    return job, notify_job_created(feed, job, now)


def update_job(
    jobs: JobRepository,
    feed: NotificationRepository,
    job_id: str,
    changes: Fields,
    now: datetime | None = None,
) -> tuple[Job | None, Notification | None]:
    """Apply ``changes``; an unknown ``job_id`` is a no-op with no notification."""
    previous = jobs.get_by_id(job_id)
    if previous is None:
        return None, None
    updated = jobs.update(job_id, changes)
    if updated is None:
        return None, None
    return updated, notify_job_updated(feed, previous, updated, now)


def delete_job(jobs: JobRepository, job_id: str) -> bool:
    return jobs.delete(job_id)
