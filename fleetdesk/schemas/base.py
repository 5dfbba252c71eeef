"""Shared pydantic configuration for persisted records.

Attributes are snake_case in Python and camelCase in the stored JSON
(``shipId``, ``nextMaintenanceDate``), matching the original storage layout.

Records are permissive: the repository stores what forms send, so the field
types below coerce instead of rejecting. A value outside an enum is kept as a
plain string, a blank or unparseable date becomes ``None``, a missing text
field is ``""`` and unknown keys are carried along untouched.
"""

import enum
from datetime import date, datetime
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, TypeAdapter, ValidationError, WrapValidator
from pydantic.alias_generators import to_camel

_DATETIME = TypeAdapter(datetime)


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def none_to_blank(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _lenient(value: Any, handler) -> Any:
    value = blank_to_none(value)
    if value is None:
        return None
    try:
        return handler(value)
    except ValidationError:
        return None


def _lenient_date(value: Any, handler) -> Any:
    value = blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    try:
        return handler(value)
    except ValidationError:
        pass
    # "2024-06-10T14:00:00Z" is a date with a time attached
    try:
        return _DATETIME.validate_python(value).date()
    except ValidationError:
        return None


# Forms submit "" for an untouched date input.
OptionalDate = Annotated[Optional[date], WrapValidator(_lenient_date)]
OptionalDateTime = Annotated[Optional[datetime], WrapValidator(_lenient)]
OptionalNumber = Annotated[Optional[float], WrapValidator(_lenient)]
Text = Annotated[str, BeforeValidator(none_to_blank)]


def lenient_enum(enum_cls: type[enum.Enum]) -> Any:
    """Field type holding a member of ``enum_cls``, or the raw string if it is not one."""

    def coerce(value: Any) -> Any:
        if value is None or isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            return value if isinstance(value, str) else str(value)

    return Annotated[Optional[Union[enum_cls, str]], BeforeValidator(coerce)]


class RecordModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-ready dict written to storage."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def label(value: Any) -> str:
    """Display text of an enum member or of a raw stored string."""
    return str(value.value) if isinstance(value, enum.Enum) else str(value)
