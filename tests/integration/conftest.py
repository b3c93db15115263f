"""
Fixtures for tests that run against the SQLite schema.
"""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from reschedule_service.api.app import create_app
from reschedule_service.api.dependencies import get_notification_dispatcher
from reschedule_service.config.database import get_db_session
from reschedule_service.infrastructure.database.repositories.alternative_suggestion_repository import (
    AlternativeSuggestionRepository,
)
from reschedule_service.infrastructure.database.repositories.job_repository import (
    JobRepository,
)
from reschedule_service.infrastructure.database.repositories.route_optimization_repository import (
    RouteOptimizationRepository,
)
from reschedule_service.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)


@pytest.fixture
def repos(db_session):
    """Repositories and transaction service sharing one session."""
    return SimpleNamespace(
        jobs=JobRepository(db_session),
        suggestions=AlternativeSuggestionRepository(db_session),
        optimizations=RouteOptimizationRepository(db_session),
        transactions=TransactionService(db_session),
    )


@pytest.fixture
def persist_job(session_factory):
    """Store a job in its own committed session."""

    async def persist(job):
        async with session_factory() as session:
            created = await JobRepository(session).create(job)
            await session.commit()
            return created

    return persist


@pytest_asyncio.fixture
async def api_client(session_factory, dispatcher):
    """HTTP client bound to the app with the test database and notifier."""
    app = create_app()

    async def override_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
