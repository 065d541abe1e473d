from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from formbuilder.database import CollectionKind, MemoryKeyValueStore, PersistenceGateway
from formbuilder.main import create_app
from formbuilder.services.fields import FieldService
from formbuilder.services.submissions import SubmissionService


class FlakyStore(MemoryKeyValueStore):
    """Memory store whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    async def set(self, key, value):
        if self.fail_writes:
            raise ConnectionError("store unreachable")
        await super().set(key, value)


class Clock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def tick(self, seconds=1):
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def gateway(store):
    return PersistenceGateway(store)


@pytest.fixture
def forms(gateway):
    return FieldService(gateway, CollectionKind.FORMS)


@pytest.fixture
def templates(gateway):
    return FieldService(gateway, CollectionKind.CUSTOM_FIELDS)


@pytest.fixture
def submissions(gateway):
    return SubmissionService(gateway)


@pytest.fixture
def clock(monkeypatch):
    clock = Clock()
    monkeypatch.setattr("formbuilder.services.collections.utcnow", clock)
    return clock


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as client:
        yield client
