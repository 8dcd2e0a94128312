"""
Pytest configuration and fixtures.
"""
import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Make the time_ledger package importable without installing it
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from time_ledger.data_access.memory_store import InMemoryDocumentStore  # noqa: E402
from time_ledger.services.ledger_engine import LedgerEngine  # noqa: E402

DOCUMENT_ID = '1AbCdEfGhIjKlMnOpQrStUvWxYz0123456789'
OTHER_DOCUMENT_ID = '1ZyXwVuTsRqPoNmLkJiHgFeDcBa9876543210'


class FakeClock:
    """Settable UTC clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeMonotonic:
    """Settable monotonic clock in seconds."""

    def __init__(self, value: float = 1000.0):
        self.value = value

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture(scope="session", autouse=True)
def env_vars():
    """Set up environment variables for tests."""
    os.environ["DOCUMENT_STORE_BACKEND"] = "memory"
    os.environ["CONFIG_CACHE_TTL_SECONDS"] = "300"
    os.environ["REGION"] = "us-east-1"
    os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture
def document_id():
    return DOCUMENT_ID


@pytest.fixture
def store():
    """In-memory store holding one empty document."""
    memory_store = InMemoryDocumentStore()
    memory_store.create_document(DOCUMENT_ID)
    return memory_store


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def monotonic():
    return FakeMonotonic()


@pytest.fixture
def engine(store, clock, monotonic):
    """Ledger engine over the in-memory store with controllable clocks."""
    return LedgerEngine(store, clock=clock, monotonic=monotonic)
