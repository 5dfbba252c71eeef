import enum

from fleetdesk.schemas.base import RecordModel


class Role(str, enum.Enum):
    admin = "Admin"
    inspector = "Inspector"
    engineer = "Engineer"


class User(RecordModel):
    """A user as exposed after login; never carries the password."""

    id: str
    email: str
    role: Role
    name: str


class UserWithPassword(User):
    password: str

    def without_password(self) -> User:
        return User(id=self.id, email=self.email, role=self.role, name=self.name)
