import enum
from typing import Optional

from fleetdesk.schemas.base import OptionalDate, RecordModel, Text, lenient_enum


class ComponentStatus(str, enum.Enum):
    active = "Active"
    maintenance_required = "Maintenance Required"
    out_of_service = "Out of Service"


ComponentStatusField = lenient_enum(ComponentStatus)


class ComponentCreate(RecordModel):
    """Fields of an installed component.

    ``next_maintenance_date`` is ``None`` when the form left it blank; such a
    component is never reported overdue.
    """

    ship_id: Text = ""
    name: Text = ""
    serial_number: Text = ""
    install_date: OptionalDate = None
    last_maintenance_date: OptionalDate = None
    next_maintenance_date: OptionalDate = None
    status: ComponentStatusField = ComponentStatus.active
    description: Optional[str] = None


class Component(ComponentCreate):
    id: str


class ComponentUpdate(RecordModel):
    ship_id: Optional[str] = None
    name: Optional[str] = None
    serial_number: Optional[str] = None
    install_date: OptionalDate = None
    last_maintenance_date: OptionalDate = None
    next_maintenance_date: OptionalDate = None
    status: ComponentStatusField = None
    description: Optional[str] = None
