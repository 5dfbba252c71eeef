import os
import tempfile
from datetime import datetime

import pytest

from fleetdesk.config import Settings
from fleetdesk.database import create_tables, make_engine, make_session_factory
from fleetdesk.desk import FleetDesk, open_desk
from fleetdesk.services.storage import KeyValueStore, seed_defaults

# 2024-06-10 sits between the seeded due dates: the radar (2024-06-01) is
# overdue, everything else is not.
NOW = datetime(2024, 6, 10, 9, 30)


@pytest.fixture
def db_path():
    db_fd, path = tempfile.mkstemp(suffix=".db")
    os.close(db_fd)
    yield path
    if os.path.exists(path):
        os.unlink(path)


@pytest.fixture
def db_engine(db_path):
    engine = make_engine(f"sqlite:///{db_path}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(db_engine) -> KeyValueStore:
    return KeyValueStore(make_session_factory(db_engine))


@pytest.fixture
def seeded_store(store) -> KeyValueStore:
    seed_defaults(store)
    return store


@pytest.fixture
def settings(db_path) -> Settings:
    return Settings(database_url=f"sqlite:///{db_path}")


@pytest.fixture
def desk(settings, db_engine) -> FleetDesk:
    return open_desk(settings, engine=db_engine)


@pytest.fixture
def now() -> datetime:
    return NOW
