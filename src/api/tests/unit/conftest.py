"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, Mock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from shared_kernel.events import IEventDispatcher


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def mock_session():
    """Mock AsyncSession whose begin() works as an async context manager."""
    session = Mock(spec=AsyncSession)

    ctx_manager = AsyncMock()
    ctx_manager.__aenter__ = AsyncMock(return_value=None)
    ctx_manager.__aexit__ = AsyncMock(return_value=None)

    session.begin = Mock(return_value=ctx_manager)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.close = AsyncMock()
    session.connection = AsyncMock()
    session.rollback = AsyncMock()
    session.commit = AsyncMock()
    session.in_transaction = Mock(return_value=False)
    session.add = Mock()
    return session


@pytest.fixture
def mock_dispatcher():
    """Mock event dispatcher that records dispatched batches."""
    dispatcher = Mock(spec=IEventDispatcher)
    dispatcher.dispatch = AsyncMock()
    return dispatcher
