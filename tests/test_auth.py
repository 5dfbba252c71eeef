"""Tests for the authentication gate and session persistence."""

from fleetdesk.schemas.user import Role
from fleetdesk.services.auth_service import AuthGate, authenticate_user
from fleetdesk.services.repository import UserDirectory
from fleetdesk.services.storage import CollectionKey


def _gate(store) -> AuthGate:
    return AuthGate(store, UserDirectory(store))


class TestLogin:
    def test_login_success(self, seeded_store):
        gate = _gate(seeded_store)
        user = gate.login("admin@entnt.in", "admin123")

        assert user is not None
        assert user.role == Role.admin
        assert "password" not in user.model_dump()
        assert gate.current_user == user
        assert gate.is_authenticated is True

    def test_session_is_persisted_without_password(self, seeded_store):
        _gate(seeded_store).login("engineer@entnt.in", "engine123")
        assert seeded_store.load_value(CollectionKey.current_user) == {
            "id": "3",
            "email": "engineer@entnt.in",
            "role": "Engineer",
            "name": "Bob Engineer",
        }

    def test_wrong_password(self, seeded_store):
        gate = _gate(seeded_store)
        assert gate.login("admin@entnt.in", "wrong") is None
        assert gate.current_user is None
        assert seeded_store.contains(CollectionKey.current_user) is False

    def test_failure_keeps_existing_session(self, seeded_store):
        gate = _gate(seeded_store)
        gate.login("inspector@entnt.in", "inspect123")
        assert gate.login("admin@entnt.in", "wrong") is None
        assert gate.current_user.id == "2"
        assert seeded_store.load_value(CollectionKey.current_user)["id"] == "2"

    def test_match_is_exact(self, seeded_store):
        users = UserDirectory(seeded_store)
        assert authenticate_user(users, "ADMIN@entnt.in", "admin123") is None
        assert authenticate_user(users, " admin@entnt.in", "admin123") is None
        assert authenticate_user(users, "admin@entnt.in", "Admin123") is None
        assert authenticate_user(users, "nobody@entnt.in", "admin123") is None


class TestSession:
    def test_logout_clears_memory_and_store(self, seeded_store):
        gate = _gate(seeded_store)
        gate.login("admin@entnt.in", "admin123")
        gate.logout()

        assert gate.current_user is None
        assert seeded_store.load_value(CollectionKey.current_user) is None

    def test_restore_after_restart(self, seeded_store):
        _gate(seeded_store).login("inspector@entnt.in", "inspect123")

        restarted = _gate(seeded_store)
        assert restarted.current_user is None
        user = restarted.restore()
        assert user.email == "inspector@entnt.in"
        assert restarted.current_user == user

    def test_restore_without_session(self, seeded_store):
        gate = _gate(seeded_store)
        assert gate.restore() is None
        assert gate.is_authenticated is False

    def test_restore_ignores_bad_record(self, seeded_store):
        seeded_store.save_value(CollectionKey.current_user, {"id": "1"})
        assert _gate(seeded_store).restore() is None
