import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from brigadas.core.config import Settings
from brigadas.core.database import DatabaseManager, get_db_manager
from brigadas.core.exceptions import DatabaseUnavailableError


@pytest.fixture
def settings():
    return Settings(
        db_server="db.local",
        db_user="bomberos",
        db_password="secreto",
        db_database="brigadas",
    )


@pytest.fixture
def manager(settings):
    return DatabaseManager(settings)


def make_engine(conn=None, connect_error=None):
    engine = MagicMock()
    engine.dispose = AsyncMock()
    if connect_error is not None:
        engine.connect.side_effect = connect_error
    else:
        connection = MagicMock()
        connection.__aenter__.return_value = conn or AsyncMock()
        engine.connect.return_value = connection
    return engine


async def test_initialize_connects_and_probes(manager):
    """A successful probe leaves the manager connected"""
    # Setup
    conn = AsyncMock()
    engine = make_engine(conn=conn)

    # Execute
    with patch(
        "brigadas.core.database.create_async_engine", return_value=engine
    ) as mock_create:
        result = await manager.initialize()

    # Verify
    assert result is engine
    assert manager.is_connected is True
    conn.execute.assert_awaited_once()
    kwargs = mock_create.call_args.kwargs
    assert kwargs["pool_size"] == 10
    assert kwargs["max_overflow"] == 0
    assert kwargs["pool_recycle"] == 30


async def test_initialize_failure_raises_unavailable(manager):
    """An unreachable database disposes the pool and stays disconnected"""
    # Setup
    engine = make_engine(connect_error=OSError("connection refused"))

    # Execute
    with patch("brigadas.core.database.create_async_engine", return_value=engine):
        with pytest.raises(DatabaseUnavailableError):
            await manager.initialize()

    # Verify
    engine.dispose.assert_awaited_once()
    assert manager.is_connected is False
    assert manager.engine is None


def test_get_engine_without_pool_raises(manager):
    with pytest.raises(DatabaseUnavailableError):
        manager.get_engine()


async def test_ping_failure_marks_disconnected(manager):
    # Setup
    manager.engine = make_engine(connect_error=OSError("connection reset"))
    manager._connected = True

    # Execute
    alive = await manager.ping()

    # Verify
    assert alive is False
    assert manager.is_connected is False


async def test_ping_success_restores_connection(manager):
    manager.engine = make_engine()
    manager._connected = False

    assert await manager.ping() is True
    assert manager.is_connected is True


async def test_ping_after_close_is_false(manager):
    manager.engine = make_engine()
    await manager.close()

    assert await manager.ping() is False


async def test_close_disposes_only_once(manager):
    """Repeated shutdown signals close the pool a single time"""
    # Setup
    engine = make_engine()
    manager.engine = engine
    manager._connected = True

    # Execute
    await manager.close()
    await manager.close()

    # Verify
    engine.dispose.assert_awaited_once()
    assert manager.is_connected is False


def test_gate_rejects_missing_manager():
    request = MagicMock()
    request.app.state.db_manager = None

    with pytest.raises(DatabaseUnavailableError) as exc_info:
        get_db_manager(request)

    assert exc_info.value.status_code == 503


def test_gate_rejects_disconnected_manager(manager):
    request = MagicMock()
    request.app.state.db_manager = manager

    with pytest.raises(DatabaseUnavailableError):
        get_db_manager(request)


def test_gate_returns_connected_manager(manager):
    manager.engine = make_engine()
    manager._connected = True
    request = MagicMock()
    request.app.state.db_manager = manager

    assert get_db_manager(request) is manager


async def test_gate_follows_last_health_probe(manager):
    """A failed probe closes the gate until a later probe succeeds"""
    # Setup
    engine = make_engine()
    manager.engine = engine
    manager._connected = True
    request = MagicMock()
    request.app.state.db_manager = manager

    # Execute
    engine.connect.side_effect = OSError("connection reset")
    await manager.ping()

    # Verify
    with pytest.raises(DatabaseUnavailableError):
        get_db_manager(request)

    engine.connect.side_effect = None
    await manager.ping()
    assert get_db_manager(request) is manager
