from fleetdesk.models.base import Base  # noqa: F401
from fleetdesk.models.storage_entry import StorageEntry  # noqa: F401
