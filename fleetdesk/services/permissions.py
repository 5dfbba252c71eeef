"""Role-based permission table.

Pure lookups with no state: an unknown role, action or capability is simply
not allowed.
"""

import enum
from typing import Any

from fleetdesk.schemas.user import Role


class Capability(str, enum.Enum):
    create_ships = "create_ships"
    edit_ships = "edit_ships"
    delete_ships = "delete_ships"
    create_components = "create_components"
    edit_components = "edit_components"
    delete_components = "delete_components"
    create_jobs = "create_jobs"
    edit_jobs = "edit_jobs"
    delete_jobs = "delete_jobs"
    assign_jobs = "assign_jobs"
    view_all_data = "view_all_data"
    manage_users = "manage_users"


class Action(str, enum.Enum):
    create_ship = "create_ship"
    edit_ship = "edit_ship"
    delete_ship = "delete_ship"
    create_component = "create_component"
    edit_component = "edit_component"
    delete_component = "delete_component"
    create_job = "create_job"
    edit_job = "edit_job"
    delete_job = "delete_job"
    assign_job = "assign_job"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.admin: frozenset(Capability),
    Role.inspector: frozenset(
        {
            Capability.edit_ships,
            Capability.create_components,
            Capability.edit_components,
            Capability.create_jobs,
            Capability.edit_jobs,
            Capability.assign_jobs,
            Capability.view_all_data,
        }
    ),
    Role.engineer: frozenset({Capability.edit_jobs, Capability.view_all_data}),
}

ACTION_CAPABILITY: dict[Action, Capability] = {
    Action.create_ship: Capability.create_ships,
    Action.edit_ship: Capability.edit_ships,
    Action.delete_ship: Capability.delete_ships,
    Action.create_component: Capability.create_components,
    Action.edit_component: Capability.edit_components,
    Action.delete_component: Capability.delete_components,
    Action.create_job: Capability.create_jobs,
    Action.edit_job: Capability.edit_jobs,
    Action.delete_job: Capability.delete_jobs,
    Action.assign_job: Capability.assign_jobs,
}


def _coerce(enum_cls: type[enum.Enum], value: Any) -> Any:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        return None


def has_permission(role: Role | str | None, capability: Capability | str) -> bool:
    role_ = _coerce(Role, role)
    capability_ = _coerce(Capability, capability)
    if role_ is None or capability_ is None:
        return False
    return capability_ in ROLE_CAPABILITIES[role_]


def can_perform(role: Role | str | None, action: Action | str) -> bool:
    """Return True if ``role`` may perform ``action`` (e.g. ``"create_ship"``)."""
    action_ = _coerce(Action, action)
    if action_ is None:
        return False
    return has_permission(role, ACTION_CAPABILITY[action_])


def allowed_actions(role: Role | str | None) -> list[Action]:
    return [action for action in Action if can_perform(role, action)]
