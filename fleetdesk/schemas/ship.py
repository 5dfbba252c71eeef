import enum
from typing import Optional

from fleetdesk.schemas.base import OptionalDate, RecordModel, Text, lenient_enum


class ShipStatus(str, enum.Enum):
    active = "Active"
    under_maintenance = "Under Maintenance"
    decommissioned = "Decommissioned"


ShipStatusField = lenient_enum(ShipStatus)


class ShipCreate(RecordModel):
    name: Text = ""
    imo: Text = ""
    flag: Text = ""
    status: ShipStatusField = ShipStatus.active
    registration_date: OptionalDate = None
    description: Optional[str] = None


class Ship(ShipCreate):
    id: str


class ShipUpdate(RecordModel):
    name: Optional[str] = None
    imo: Optional[str] = None
    flag: Optional[str] = None
    status: ShipStatusField = None
    registration_date: OptionalDate = None
    description: Optional[str] = None
