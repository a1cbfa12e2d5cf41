"""Global test fixtures and utilities for habitquest tests"""
import pytest
from datetime import datetime, timedelta, timezone

from habitquest.storage import MemoryStorage
from habitquest.stores import ActivityStore, JournalStore, RewardsStore, TodoStore
from habitquest.services import ProgressService


class FakeClock:
    """Deterministic clock; every call advances by one second"""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value

    def set_day(self, year: int, month: int, day: int) -> None:
        self.current = datetime(year, month, day, 9, 0, 0, tzinfo=timezone.utc)

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


# ============================================================================
# Infrastructure Fixtures
# ============================================================================

@pytest.fixture
def clock():
    """Clock starting 2024-01-03 09:00 UTC"""
    return FakeClock(datetime(2024, 1, 3, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def backend():
    """Fresh in-memory storage backend"""
    return MemoryStorage()


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123"


@pytest.fixture
def other_user_id():
    """A second user for ownership scoping tests"""
    return "user-456"


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def activity_store(backend, clock):
    return ActivityStore(backend, clock=clock)


@pytest.fixture
def todo_store(backend, clock):
    return TodoStore(backend, clock=clock)


@pytest.fixture
def journal_store(backend, clock):
    return JournalStore(backend, clock=clock)


@pytest.fixture
def rewards_store(backend, clock):
    return RewardsStore(backend, clock=clock)


@pytest.fixture
def progress_service(activity_store, rewards_store):
    return ProgressService(activity_store, rewards_store)


@pytest.fixture
def read_activity(activity_store, test_user_id):
    """Core activity 'Read' worth 50 XP"""
    return activity_store.add_activity({
        "name": "Read",
        "xp": 50,
        "type": "core",
        "category": "learning",
        "user_id": test_user_id,
    })
