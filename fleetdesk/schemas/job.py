import enum
from datetime import datetime
from typing import Optional

from pydantic import Field

from fleetdesk.schemas.base import OptionalDate, OptionalDateTime, OptionalNumber, RecordModel, Text, lenient_enum


class JobType(str, enum.Enum):
    inspection = "Inspection"
    repair = "Repair"
    replacement = "Replacement"
    routine_maintenance = "Routine Maintenance"


class JobPriority(str, enum.Enum):
    low = "Low"
    medium = "Medium"
    high = "High"
    critical = "Critical"


class JobStatus(str, enum.Enum):
    open = "Open"
    in_progress = "In Progress"
    completed = "Completed"
    cancelled = "Cancelled"


ACTIVE_JOB_STATUSES = frozenset({JobStatus.open, JobStatus.in_progress})

JobTypeField = lenient_enum(JobType)
JobPriorityField = lenient_enum(JobPriority)
JobStatusField = lenient_enum(JobStatus)


class JobCreate(RecordModel):
    """Fields of a maintenance job.

    ``ship_id`` and ``component_id`` must name a component installed on that
    ship; that pairing is the caller's responsibility. ``completed_date`` is
    set only while the status is Completed, by the same convention.
    A job without a ``scheduled_date`` never shows up on the calendar.
    """

    ship_id: Text = ""
    component_id: Text = ""
    type: JobTypeField = JobType.inspection
    priority: JobPriorityField = JobPriority.medium
    status: JobStatusField = JobStatus.open
    assigned_engineer_id: Text = ""
    scheduled_date: OptionalDate = None
    completed_date: OptionalDateTime = None
    description: Text = ""
    estimated_hours: OptionalNumber = 0
    actual_hours: OptionalNumber = None
    created_date: OptionalDateTime = Field(default_factory=datetime.now)


class Job(JobCreate):
    id: str

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_JOB_STATUSES


class JobUpdate(RecordModel):
    ship_id: Optional[str] = None
    component_id: Optional[str] = None
    type: JobTypeField = None
    priority: JobPriorityField = None
    status: JobStatusField = None
    assigned_engineer_id: Optional[str] = None
    scheduled_date: OptionalDate = None
    completed_date: OptionalDateTime = None
    description: Optional[str] = None
    estimated_hours: OptionalNumber = None
    actual_hours: OptionalNumber = None
    created_date: OptionalDateTime = None
