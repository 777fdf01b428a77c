"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
from loguru import logger

from modelwatch.core.config import Config
from modelwatch.core.types import SourceDescriptor
from modelwatch.sources.credentials import CredentialResolver, StaticCredentials
from modelwatch.store.database import Database
from modelwatch.store.kv import SQLiteKeyValueStore
from modelwatch.store.snapshots import SnapshotStore


@pytest.fixture
def test_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path for tests."""
    return tmp_path / "test.db"


@pytest.fixture
def config(test_db_path: Path) -> Config:
    """Provide a Config instance for testing."""
    cfg = Config()
    cfg.db_path = test_db_path
    return cfg


@pytest.fixture
def db(test_db_path: Path) -> Database:
    """Provide a connected database instance."""
    database = Database(test_db_path)
    database.connect()
    yield database
    database.close()


@pytest.fixture
def kv(db: Database) -> SQLiteKeyValueStore:
    """Provide a SQLite-backed key-value store."""
    return SQLiteKeyValueStore(db)


@pytest.fixture
def snapshot_store(kv: SQLiteKeyValueStore) -> SnapshotStore:
    """Provide a SnapshotStore on SQLite."""
    return SnapshotStore(kv)


@pytest.fixture
def openai_source() -> SourceDescriptor:
    """Provide an OpenAI-style source needing one secret."""
    return SourceDescriptor(
        id="openai",
        name="OpenAI",
        endpoint="https://api.openai.com/v1/models",
        headers={"Authorization": "Bearer {{OPENAI_API_KEY}}"},
    )


@pytest.fixture
def credentials() -> StaticCredentials:
    """Provide static credentials for the OpenAI-style source."""
    return StaticCredentials({"OPENAI_API_KEY": "sk-test"})


@pytest.fixture
def resolver(credentials: StaticCredentials) -> CredentialResolver:
    """Provide a resolver over the static credentials."""
    return CredentialResolver(credentials)


@pytest.fixture
def restore_logging():
    """Restore loguru's default stderr sink after a test reconfigures it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
