"""Fixtures for SQLite store tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> Path:
    """Create a temporary database with the full schema applied."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(result.success for result in results)
    return temp_db_path


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def store(initialized_db, mock_settings) -> AsyncGenerator[SQLiteInventoryStore, None]:
    """Inventory store bound to a fresh pool on the temp database."""
    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        yield SQLiteInventoryStore()
        await conn_module.close_pool()
