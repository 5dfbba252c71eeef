"""Authentication gate: credential check and the current session user.

The session is either anonymous (``current_user is None``) or authenticated.
The user is persisted without its password under the current-user key, so a
restarted process picks the session up again through ``restore``.
"""

import logging

from pydantic import ValidationError

from fleetdesk.schemas.user import User, UserWithPassword
from fleetdesk.services.repository import UserDirectory
from fleetdesk.services.storage import CollectionKey, KeyValueStore

logger = logging.getLogger(__name__)


def authenticate_user(users: UserDirectory, email: str, password: str) -> UserWithPassword | None:
    """Exact, case-sensitive match on both email and password.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    for user in users.credentials():
        if user.email == email and user.password == password:
            return user
    return None


class AuthGate:
    def __init__(self, store: KeyValueStore, users: UserDirectory):
        self.store = store
        self.users = users
        self._user: User | None = None

    @property
    def current_user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def restore(self) -> User | None:
        """Load the persisted session user, if any."""
        raw = self.store.load_value(CollectionKey.current_user)
        if raw is None:
            self._user = None
            return None
        try:
            self._user = User.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring unreadable session record")
            self._user = None
        return self._user

    def login(self, email: str, password: str) -> User | None:
        """Return the password-free user on success, None on failure.

        A failed attempt leaves the session and the store untouched.
        """
        found = authenticate_user(self.users, email, password)
        if found is None:
            logger.warning("Failed login for %s", email)
            return None
        user = found.without_password()
        self.store.save_value(CollectionKey.current_user, user.to_record())
        self._user = user
        logger.info("User %s logged in as %s", user.id, user.role.value)
        return user

    def logout(self) -> None:
        self.store.remove(CollectionKey.current_user)
        if self._user is not None:
            logger.info("User %s logged out", self._user.id)
        self._user = None
