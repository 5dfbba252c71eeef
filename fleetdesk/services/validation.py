"""Pre-command checks for callers that want them.

Repositories accept whatever they are given; forms run these first and show
the resulting ``ValidationFailure`` instead of issuing the command.
"""

from datetime import datetime
from typing import Any, Iterable, Mapping

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from fleetdesk.exceptions import ValidationFailure
from fleetdesk.schemas.component import Component
from fleetdesk.schemas.job import JobStatus
from fleetdesk.schemas.ship import Ship

SHIP_REQUIRED = ("name", "imo", "flag")
COMPONENT_REQUIRED = ("ship_id", "name", "serial_number")
JOB_REQUIRED = ("description", "ship_id", "component_id", "assigned_engineer_id")

_CHECKED_FIELDS = set(SHIP_REQUIRED + COMPONENT_REQUIRED + JOB_REQUIRED) | {"status", "completed_date"}
_SNAKE_NAMES = {to_camel(name): name for name in _CHECKED_FIELDS}


def _as_dict(fields: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    if isinstance(fields, BaseModel):
        return fields.model_dump(exclude_unset=True)
    return {_SNAKE_NAMES.get(key, key): value for key, value in fields.items()}


def _require(fields: Mapping[str, Any] | BaseModel, required: Iterable[str]) -> dict[str, Any]:
    data = _as_dict(fields)
    missing = [name for name in required if not str(data.get(name) or "").strip()]
    if missing:
        raise ValidationFailure("Please fill in all required fields", fields=missing)
    return data


def validate_ship_fields(fields: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    return _require(fields, SHIP_REQUIRED)


def validate_component_fields(fields: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    return _require(fields, COMPONENT_REQUIRED)


def validate_job_fields(fields: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    return _require(fields, JOB_REQUIRED)


def check_job_references(
    fields: Mapping[str, Any] | BaseModel,
    ships: Iterable[Ship],
    components: Iterable[Component],
) -> None:
    """Raise if the job's ship is unknown or its component is not on that ship."""
    data = _as_dict(fields)
    ship_id = data.get("ship_id")
    component_id = data.get("component_id")
    if not any(s.id == ship_id for s in ships):
        raise ValidationFailure(f"Unknown ship {ship_id!r}", fields=["ship_id"])
    component = next((c for c in components if c.id == component_id), None)
    if component is None:
        raise ValidationFailure(f"Unknown component {component_id!r}", fields=["component_id"])
    if component.ship_id != ship_id:
        raise ValidationFailure(
            f"Component {component_id!r} is not installed on ship {ship_id!r}",
            fields=["component_id"],
        )


def apply_completion_convention(
    fields: Mapping[str, Any] | BaseModel, now: datetime | None = None
) -> dict[str, Any]:
    """Return the fields with ``completed_date`` set iff the status is Completed.

    An existing completed date is kept; otherwise ``now`` is used.
    """
    data = _as_dict(fields)
    if "status" not in data:
        return data
    if data["status"] == JobStatus.completed:
        if not data.get("completed_date"):
            data["completed_date"] = now or datetime.now()
    else:
        data["completed_date"] = None
    return data
