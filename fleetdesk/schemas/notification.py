import enum
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from fleetdesk.schemas.base import RecordModel

BROADCAST_USER_ID = "all"


class NotificationType(str, enum.Enum):
    job_created = "job_created"
    job_updated = "job_updated"
    job_completed = "job_completed"
    maintenance_due = "maintenance_due"


class Broadcast(BaseModel):
    """Audience of every user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["broadcast"] = "broadcast"

    def includes(self, user_id: str) -> bool:
        return True


class SpecificUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    user_id: str

    def includes(self, user_id: str) -> bool:
        return self.user_id == user_id


Audience = Annotated[Union[Broadcast, SpecificUser], Field(discriminator="kind")]


class Notification(RecordModel):
    """A feed entry. Stored with ``userId`` set to ``"all"`` for broadcasts."""

    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    audience: Audience = Field(default_factory=Broadcast, alias="userId")

    @field_validator("audience", mode="before")
    @classmethod
    def _parse_audience(cls, value: Any) -> Any:
        if isinstance(value, str):
            if value == BROADCAST_USER_ID:
                return Broadcast()
            return SpecificUser(user_id=value)
        return value

    @field_serializer("audience")
    def _serialize_audience(self, audience: Union[Broadcast, SpecificUser]) -> str:
        if isinstance(audience, SpecificUser):
            return audience.user_id
        return BROADCAST_USER_ID
