"""Tests for the role permission table."""

import pytest

from fleetdesk.schemas.user import Role
from fleetdesk.services.permissions import (
    Action,
    Capability,
    allowed_actions,
    can_perform,
    has_permission,
)


class TestCanPerform:
    def test_engineer_cannot_create_ship(self):
        assert can_perform("Engineer", "create_ship") is False

    def test_admin_can_create_ship(self):
        assert can_perform("Admin", "create_ship") is True

    def test_engineer_can_edit_job(self):
        assert can_perform("Engineer", "edit_job") is True

    @pytest.mark.parametrize("action", list(Action))
    def test_admin_can_do_everything(self, action):
        assert can_perform(Role.admin, action) is True

    def test_inspector(self):
        assert allowed_actions(Role.inspector) == [
            Action.edit_ship,
            Action.create_component,
            Action.edit_component,
            Action.create_job,
            Action.edit_job,
            Action.assign_job,
        ]

    def test_engineer(self):
        assert allowed_actions("Engineer") == [Action.edit_job]

    @pytest.mark.parametrize(
        "role, action",
        [
            ("Captain", "create_ship"),
            ("Admin", "launch_ship"),
            (None, "edit_job"),
            ("admin", "create_ship"),
            ("Admin", ""),
        ],
    )
    def test_unknown_values_are_denied(self, role, action):
        assert can_perform(role, action) is False


class TestHasPermission:
    def test_view_and_manage(self):
        assert has_permission("Engineer", Capability.view_all_data) is True
        assert has_permission("Inspector", "manage_users") is False
        assert has_permission("Admin", "manage_users") is True

    def test_unknown_capability(self):
        assert has_permission("Admin", "launch_missiles") is False
