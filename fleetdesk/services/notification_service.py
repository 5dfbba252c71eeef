"""Notification service: composes feed entries for job lifecycle events.

Rules:
  - job created                      -> job_created
  - status changed to Completed      -> job_completed
  - status changed to anything else  -> job_updated (names the new status)
  - status unchanged / other fields  -> nothing
"""

import logging
from datetime import datetime

from fleetdesk.schemas.base import label
from fleetdesk.schemas.job import Job, JobStatus
from fleetdesk.schemas.notification import Broadcast, Notification, NotificationType, SpecificUser
from fleetdesk.services.repository import NotificationRepository, new_id

logger = logging.getLogger(__name__)


def _compose(
    type_: NotificationType,
    title: str,
    message: str,
    audience: Broadcast | SpecificUser | None = None,
    now: datetime | None = None,
) -> Notification:
    return Notification(
        id=new_id(NotificationRepository.id_prefix),
        type=type_,
        title=title,
        message=message,
        timestamp=now or datetime.now(),
        read=False,
        audience=audience or Broadcast(),
    )


def job_created_notification(job: Job, now: datetime | None = None) -> Notification:
    return _compose(
        NotificationType.job_created,
        "New Job Created",
        f'Job "{job.description}" has been created for {label(job.type)}',
        now=now,
    )


def job_status_notification(
    previous: Job, new_status: JobStatus | str | None, now: datetime | None = None
) -> Notification | None:
    """Return the notification for a status transition, or None if the status did not change."""
    if new_status is None or new_status == previous.status:
        return None
    if new_status == JobStatus.completed:
        return _compose(
            NotificationType.job_completed,
            "Job Completed",
            f'Job "{previous.description}" has been completed',
            now=now,
        )
    return _compose(
        NotificationType.job_updated,
        "Job Updated",
        f'Job "{previous.description}" status changed to {label(new_status)}',
        now=now,
    )


def notify_job_created(feed: NotificationRepository, job: Job, now: datetime | None = None) -> Notification:
    notification = feed.prepend(job_created_notification(job, now))
    logger.info("Job %s created; notified %s", job.id, notification.id)
    return notification


def notify_job_updated(
    feed: NotificationRepository, previous: Job, updated: Job, now: datetime | None = None
) -> Notification | None:
    notification = job_status_notification(previous, updated.status, now)
    if notification is None:
        return None
    feed.prepend(notification)
    logger.info("Job %s moved %s -> %s", previous.id, label(previous.status), label(updated.status))
    return notification
