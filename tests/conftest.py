import os
import time

import pytest

from service_tracker_api.app.core.events import EventDispatcher
from service_tracker_api.app.core.store import KeyValueStore


@pytest.fixture
def store(tmp_path):
    """A fresh, initialised store backed by a temporary SQLite file."""
    kv = KeyValueStore(str(tmp_path / "store.db"))
    kv.initialize()
    return kv


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
def make_record():
    """Factory for canonical service records with sensible defaults."""
    from service_tracker_api.app.schemas.service import ServiceRecord

    def _make(record_id, **fields):
        values = {
            "id": record_id,
            "customer_phone": "05340000000",
            "created_at": "2024-03-10T10:00:00",
            "updated_at": "2024-03-10T10:00:00",
        }
        values.update(fields)
        return ServiceRecord(**values)

    return _make


@pytest.fixture
def istanbul_time():
    """Run the test with the local clock at UTC+3 (Europe/Istanbul)."""
    previous = os.environ.get("TZ")
    os.environ["TZ"] = "Europe/Istanbul"
    time.tzset()
    yield
    if previous is None:
        del os.environ["TZ"]
    else:
        os.environ["TZ"] = previous
    time.tzset()
