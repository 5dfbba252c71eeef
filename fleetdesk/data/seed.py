"""Built-in dataset written on first run: three users, three ships, four
components, three jobs and an empty notification feed.

Records are kept in their stored (camelCase) form.
"""

from typing import Any

from fleetdesk.services.storage import CollectionKey

SEED_USERS: list[dict[str, Any]] = [
    {"id": "1", "role": "Admin", "email": "admin@entnt.in", "password": "admin123", "name": "John Admin"},
    {"id": "2", "role": "Inspector", "email": "inspector@entnt.in", "password": "inspect123", "name": "Jane Inspector"},
    {"id": "3", "role": "Engineer", "email": "engineer@entnt.in", "password": "engine123", "name": "Bob Engineer"},
]

SEED_SHIPS: list[dict[str, Any]] = [
    {
        "id": "s1",
        "name": "Ever Given",
        "imo": "9811000",
        "flag": "Panama",
        "status": "Active",
        "registrationDate": "2020-01-01",
        "description": "Large container vessel",
    },
    {
        "id": "s2",
        "name": "Maersk Alabama",
        "imo": "9164263",
        "flag": "USA",
        "status": "Under Maintenance",
        "registrationDate": "2019-06-15",
        "description": "Cargo container ship",
    },
    {
        "id": "s3",
        "name": "MSC Oscar",
        "imo": "9703291",
        "flag": "Panama",
        "status": "Active",
        "registrationDate": "2021-03-20",
        "description": "Ultra large container vessel",
    },
]

SEED_COMPONENTS: list[dict[str, Any]] = [
    {
        "id": "c1",
        "shipId": "s1",
        "name": "Main Engine",
        "serialNumber": "ME-1234",
        "installDate": "2020-01-10",
        "lastMaintenanceDate": "2024-03-12",
        "nextMaintenanceDate": "2024-09-12",
        "status": "Active",
        "description": "Primary propulsion engine",
    },
    {
        "id": "c2",
        "shipId": "s2",
        "name": "Radar",
        "serialNumber": "RAD-5678",
        "installDate": "2021-07-18",
        "lastMaintenanceDate": "2023-12-01",
        "nextMaintenanceDate": "2024-06-01",
        "status": "Maintenance Required",
        "description": "Navigation radar system",
    },
    {
        "id": "c3",
        "shipId": "s1",
        "name": "Generator",
        "serialNumber": "GEN-9012",
        "installDate": "2020-02-05",
        "lastMaintenanceDate": "2024-04-20",
        "nextMaintenanceDate": "2024-10-20",
        "status": "Active",
        "description": "Auxiliary power generator",
    },
    {
        "id": "c4",
        "shipId": "s3",
        "name": "Crane",
        "serialNumber": "CR-3456",
        "installDate": "2021-03-25",
        "lastMaintenanceDate": "2024-01-15",
        "nextMaintenanceDate": "2024-07-15",
        "status": "Active",
        "description": "Container loading crane",
    },
]

SEED_JOBS: list[dict[str, Any]] = [
    {
        "id": "j1",
        "componentId": "c1",
        "shipId": "s1",
        "type": "Inspection",
        "priority": "High",
        "status": "Open",
        "assignedEngineerId": "3",
        "scheduledDate": "2024-06-15",
        "description": "Routine engine inspection",
        "estimatedHours": 8,
        "createdDate": "2024-05-29",
    },
    {
        "id": "j2",
        "componentId": "c2",
        "shipId": "s2",
        "type": "Repair",
        "priority": "Critical",
        "status": "In Progress",
        "assignedEngineerId": "3",
        "scheduledDate": "2024-06-01",
        "description": "Radar calibration and repair",
        "estimatedHours": 12,
        "createdDate": "2024-05-25",
    },
    {
        "id": "j3",
        "componentId": "c3",
        "shipId": "s1",
        "type": "Routine Maintenance",
        "priority": "Medium",
        "status": "Completed",
        "assignedEngineerId": "3",
        "scheduledDate": "2024-05-20",
        "completedDate": "2024-05-20",
        "description": "Generator maintenance and oil change",
        "estimatedHours": 6,
        "actualHours": 5,
        "createdDate": "2024-05-15",
    },
]

SEED_DATA: dict[CollectionKey, list[dict[str, Any]]] = {
    CollectionKey.users: SEED_USERS,
    CollectionKey.ships: SEED_SHIPS,
    CollectionKey.components: SEED_COMPONENTS,
    CollectionKey.jobs: SEED_JOBS,
    CollectionKey.notifications: [],
}
