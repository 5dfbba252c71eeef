"""Tests for the explicit pre-command validation helpers."""

from datetime import datetime

import pytest

from fleetdesk.exceptions import ValidationFailure
from fleetdesk.schemas.ship import ShipCreate
from fleetdesk.services.repository import ComponentRepository, ShipRepository
from fleetdesk.services.validation import (
    apply_completion_convention,
    check_job_references,
    validate_component_fields,
    validate_job_fields,
    validate_ship_fields,
)

NOW = datetime(2024, 6, 10, 9, 30)


class TestRequiredFields:
    def test_ship_missing_fields(self):
        with pytest.raises(ValidationFailure) as exc_info:
            validate_ship_fields({"name": "Nordic Star", "imo": "  "})
        assert exc_info.value.fields == ["imo", "flag"]

    def test_ship_model(self):
        data = validate_ship_fields(ShipCreate(name="A", imo="1", flag="Malta"))
        assert data == {"name": "A", "imo": "1", "flag": "Malta"}

    def test_component_accepts_camel_case(self):
        data = validate_component_fields({"shipId": "s1", "name": "Pump", "serialNumber": "P-1"})
        assert data["ship_id"] == "s1"

    def test_component_missing_ship(self):
        with pytest.raises(ValidationFailure) as exc_info:
            validate_component_fields({"name": "Pump", "serialNumber": "P-1"})
        assert exc_info.value.fields == ["ship_id"]

    def test_job_missing_engineer(self):
        with pytest.raises(ValidationFailure) as exc_info:
            validate_job_fields({"description": "x", "shipId": "s1", "componentId": "c1", "assignedEngineerId": ""})
        assert exc_info.value.fields == ["assigned_engineer_id"]

    def test_repository_accepts_what_validation_rejects(self, seeded_store):
        ship = ShipRepository(seeded_store).add({"name": ""})
        assert ship.name == ""


class TestJobReferences:
    def test_valid_pair(self, seeded_store):
        ships = ShipRepository(seeded_store).list()
        components = ComponentRepository(seeded_store).list()
        check_job_references({"shipId": "s1", "componentId": "c3"}, ships, components)

    @pytest.mark.parametrize(
        "fields, bad_field",
        [
            ({"shipId": "s9", "componentId": "c1"}, "ship_id"),
            ({"shipId": "s1", "componentId": "c9"}, "component_id"),
            ({"shipId": "s1", "componentId": "c2"}, "component_id"),
        ],
    )
    def test_invalid_pairs(self, seeded_store, fields, bad_field):
        ships = ShipRepository(seeded_store).list()
        components = ComponentRepository(seeded_store).list()
        with pytest.raises(ValidationFailure) as exc_info:
            check_job_references(fields, ships, components)
        assert exc_info.value.fields == [bad_field]


class TestCompletionConvention:
    def test_sets_completed_date(self):
        assert apply_completion_convention({"status": "Completed"}, NOW)["completed_date"] == NOW

    def test_keeps_existing_completed_date(self):
        data = apply_completion_convention({"status": "Completed", "completedDate": "2024-06-01"}, NOW)
        assert data["completed_date"] == "2024-06-01"

    def test_clears_for_other_status(self):
        data = apply_completion_convention({"status": "In Progress", "completedDate": "2024-06-01"}, NOW)
        assert data["completed_date"] is None

    def test_no_status_untouched(self):
        assert apply_completion_convention({"description": "x"}, NOW) == {"description": "x"}
