"""
Pytest configuration and fixtures.
"""

import asyncio
import os
from datetime import date, time
from typing import AsyncGenerator, List
from unittest.mock import AsyncMock
from uuid import uuid4

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("NOTIFICATION_CHANNEL", "log")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from reschedule_service.application.interfaces.notifier import (
    Notification,
    NotifierInterface,
)
from reschedule_service.application.interfaces.repositories import (
    AlternativeSuggestionRepositoryInterface,
    JobRepositoryInterface,
    RouteOptimizationRepositoryInterface,
)
from reschedule_service.application.services.keyed_lock import KeyedLock
from reschedule_service.application.services.notification_dispatcher import (
    NotificationDispatcher,
)
from reschedule_service.application.services.schedule_planner import AutoShiftPlanner
from reschedule_service.domain.entities.job import Job
from reschedule_service.domain.exceptions.notification_error import NotificationError
from reschedule_service.domain.value_objects.actor import Actor, ActorRole
from reschedule_service.infrastructure.database.models import Base

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class RecordingNotifier(NotifierInterface):
    """Notifier that keeps every delivered message in memory."""

    channel = "recording"

    def __init__(self, fail: bool = False, delay: float = 0.0):
        self.fail = fail
        self.delay = delay
        self.sent: List[Notification] = []

    async def notify(self, user_id, title, message, notification_type) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise NotificationError(self.channel, "recipient unreachable")
        self.sent.append(Notification(user_id, title, message, notification_type))


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with a fresh schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def notifier_factory():
    return RecordingNotifier


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier) -> NotificationDispatcher:
    return NotificationDispatcher(notifier, timeout_seconds=1.0)


@pytest.fixture
def keyed_lock() -> KeyedLock:
    return KeyedLock()


@pytest.fixture
def planner() -> AutoShiftPlanner:
    return AutoShiftPlanner()


@pytest.fixture
def contractor_id():
    return uuid4()


@pytest.fixture
def client_id():
    return uuid4()


@pytest.fixture
def customer_user_id():
    return uuid4()


@pytest.fixture
def contractor(contractor_id) -> Actor:
    return Actor(id=contractor_id, role=ActorRole.CONTRACTOR)


@pytest.fixture
def customer(client_id) -> Actor:
    return Actor(id=client_id, role=ActorRole.CUSTOMER)


@pytest.fixture
def system_actor() -> Actor:
    return Actor(id=uuid4(), role=ActorRole.SYSTEM)


@pytest.fixture
def make_job(contractor_id, client_id, customer_user_id):
    """Build jobs for the shared contractor and client."""

    def factory(**overrides) -> Job:
        data = {
            "contractor_id": contractor_id,
            "client_id": client_id,
            "customer_user_id": customer_user_id,
            "scheduled_date": date(2025, 3, 10),
            "scheduled_time": time(9, 0),
            "duration_minutes": 60,
            "title": "Boiler service",
        }
        data.update(overrides)
        return Job(**data)

    return factory


@pytest.fixture
def mock_job_repository():
    """Mock job repository."""
    mock_repo = AsyncMock(spec=JobRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.get_for_update = AsyncMock()
    mock_repo.get_many_for_update = AsyncMock(return_value=[])
    mock_repo.find_by_contractor_and_date = AsyncMock(return_value=[])
    mock_repo.update = AsyncMock(side_effect=lambda job: job)

    return mock_repo


@pytest.fixture
def mock_suggestion_repository():
    """Mock alternative suggestion repository."""
    mock_repo = AsyncMock(spec=AlternativeSuggestionRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.create_many = AsyncMock(side_effect=lambda suggestions: suggestions)
    mock_repo.list_by_job = AsyncMock(return_value=[])
    mock_repo.transition_if_pending = AsyncMock(return_value=True)
    mock_repo.decline_pending_for_job = AsyncMock(return_value=[])
    mock_repo.count_accepted_for_job = AsyncMock(return_value=1)

    return mock_repo


@pytest.fixture
def mock_optimization_repository():
    """Mock route optimization repository."""
    mock_repo = AsyncMock(spec=RouteOptimizationRepositoryInterface)

    mock_repo.get_by_id = AsyncMock()
    mock_repo.transition_status = AsyncMock(return_value=True)
    mock_repo.find_job_ids_in_active_optimizations = AsyncMock(return_value=[])
    mock_repo.auto_approve_suggestions = AsyncMock(return_value=0)

    return mock_repo


@pytest.fixture
def mock_transaction_service():
    """Transaction service that runs the operation inline."""

    async def run(operation, name="transaction"):
        return await operation()

    mock_service = AsyncMock()
    mock_service.execute_in_transaction = AsyncMock(side_effect=run)
    return mock_service
