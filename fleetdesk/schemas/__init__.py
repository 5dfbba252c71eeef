from fleetdesk.schemas.component import Component, ComponentCreate, ComponentStatus, ComponentUpdate  # noqa: F401
from fleetdesk.schemas.job import Job, JobCreate, JobPriority, JobStatus, JobType, JobUpdate  # noqa: F401
from fleetdesk.schemas.notification import (  # noqa: F401
    Broadcast,
    Notification,
    NotificationType,
    SpecificUser,
)
from fleetdesk.schemas.ship import Ship, ShipCreate, ShipStatus, ShipUpdate  # noqa: F401
from fleetdesk.schemas.user import Role, User, UserWithPassword  # noqa: F401
