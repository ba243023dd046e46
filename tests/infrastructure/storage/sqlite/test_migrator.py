"""Tests for the schema migrator."""

import aiosqlite
import pytest

from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationInfo,
    discover_migrations,
    get_migration_status,
    initialize_database,
)


class TestDiscovery:
    def test_migrations_are_versioned_and_ordered(self):
        migrations = discover_migrations()
        assert migrations
        assert migrations[0].version == "001"
        assert migrations[0].name == "inventory"
        versions = [m.version for m in migrations]
        assert versions == sorted(versions)

    def test_invalid_filename(self, tmp_path):
        path = tmp_path / "inventory.sql"
        path.write_text("SELECT 1;")
        with pytest.raises(ValueError, match="Invalid migration filename"):
            MigrationInfo.from_file(path)


class TestInitializeDatabase:
    async def test_creates_schema(self, temp_db_path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results and all(r.success for r in results)
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is True
        assert status["pending_migrations"] == []
        assert status["missing_tables"] == []

    async def test_is_idempotent(self, temp_db_path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path, create_backup_before=False) == []

    async def test_backup_removed_after_success(self, temp_db_path):
        await initialize_database(temp_db_path, create_backup_before=False)
        await initialize_database(temp_db_path)
        assert list(temp_db_path.parent.glob("*.backup_*")) == []

    async def test_sku_is_unique(self, initialized_db):
        async with aiosqlite.connect(initialized_db) as conn:
            cursor = await conn.execute(
                "SELECT sql FROM sqlite_master WHERE name = 'idx_inventory_items_sku'"
            )
            row = await cursor.fetchone()
        assert "UNIQUE" in row[0]

    async def test_status_of_missing_database(self, temp_db_path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert status["missing_tables"] == REQUIRED_TABLES
        assert "001" in status["pending_migrations"]
