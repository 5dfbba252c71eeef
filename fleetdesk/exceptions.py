"""Domain exception hierarchy.

Only failures the caller must react to are exceptions. Unknown ids on
update/delete are silent no-ops and a failed login is a ``None`` result.
"""

from __future__ import annotations


class FleetDeskError(Exception):
    """Base exception for all domain errors."""

    code: str = "FLEETDESK_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreFailure(FleetDeskError):
    code = "STORE_FAILURE"

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class ValidationFailure(FleetDeskError):
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class PermissionDenied(FleetDeskError):
    code = "FORBIDDEN"

    def __init__(self, role: str | None, action: str) -> None:
        super().__init__(f"Role {role!r} may not perform {action!r}")
        self.role = role
        self.action = action
