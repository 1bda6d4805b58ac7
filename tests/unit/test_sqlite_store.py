# tests/unit/test_sqlite_store.py
"""
Unit tests for SQLiteArtifactStore persistence.

Tests CRUD operations, per-owner ordering, metadata serialization and
lock-retry classification.
"""

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio

from letter_wizard.models.artifacts import ArtifactRecord, ArtifactStatus
from letter_wizard.models.sqlite_store import SQLiteArtifactStore, is_locked_error

from form_samples import valid_form

CREATED = datetime(2025, 3, 15, 9, 30, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def store(tmp_path: Path) -> SQLiteArtifactStore:
    """Create and initialize a test SQLite store."""
    store = SQLiteArtifactStore(str(tmp_path / "test_artifacts.db"))
    await store.initialize()
    return store


def _record(artifact_id="a1b2c3d4e5f6", owner_id="user-1", created_at=CREATED, **kwargs):
    defaults = dict(
        document_type="demand_letter",
        title="Demand Letter - 2025-03-15",
        content="FINAL DEMAND FOR PAYMENT\n\nAED 12,500 is overdue.",
        status=ArtifactStatus.DRAFT,
        credits_used=2,
        metadata=valid_form("demand_letter"),
    )
    defaults.update(kwargs)
    return ArtifactRecord(
        artifact_id=artifact_id, owner_id=owner_id, created_at=created_at, **defaults
    )


@pytest.mark.asyncio
async def test_add_and_get_roundtrip(store: SQLiteArtifactStore):
    """Adding an artifact and reading it back preserves every field."""
    record = _record()
    await store.add(record)

    retrieved = await store.get(record.artifact_id)

    assert retrieved is not None
    assert retrieved.artifact_id == record.artifact_id
    assert retrieved.owner_id == "user-1"
    assert retrieved.document_type == "demand_letter"
    assert retrieved.title == record.title
    assert retrieved.content == record.content
    assert retrieved.status == ArtifactStatus.DRAFT
    assert retrieved.credits_used == 2
    assert retrieved.created_at == CREATED
    assert retrieved.updated_at is not None  # Auto-set on add


@pytest.mark.asyncio
async def test_metadata_serialization(store: SQLiteArtifactStore):
    """Form snapshot survives the JSON round trip, numbers included."""
    await store.add(_record())

    retrieved = await store.get("a1b2c3d4e5f6")

    assert retrieved.metadata == valid_form("demand_letter")
    assert retrieved.metadata["amount"] == 12500


@pytest.mark.asyncio
async def test_add_duplicate_raises_error(store: SQLiteArtifactStore):
    await store.add(_record())

    with pytest.raises(ValueError, match="already exists"):
        await store.add(_record())


@pytest.mark.asyncio
async def test_get_returns_none_for_missing_artifact(store: SQLiteArtifactStore):
    assert await store.get("doesnotexist") is None


@pytest.mark.asyncio
async def test_list_for_owner_newest_first(store: SQLiteArtifactStore):
    """Only the owner's artifacts are listed, most recent first."""
    await store.add(_record("artifact-0001", created_at=CREATED))
    await store.add(_record("artifact-0002", created_at=CREATED + timedelta(hours=1)))
    await store.add(_record("artifact-0003", owner_id="user-2"))

    records = await store.list_for_owner("user-1")

    assert [r.artifact_id for r in records] == ["artifact-0002", "artifact-0001"]
    assert await store.list_for_owner("nobody") == []


@pytest.mark.asyncio
async def test_update_status(store: SQLiteArtifactStore):
    await store.add(_record())

    await store.update_status("a1b2c3d4e5f6", ArtifactStatus.FINAL)

    retrieved = await store.get("a1b2c3d4e5f6")
    assert retrieved.status == ArtifactStatus.FINAL


@pytest.mark.asyncio
async def test_update_status_missing_artifact(store: SQLiteArtifactStore):
    with pytest.raises(ValueError, match="not found"):
        await store.update_status("doesnotexist", ArtifactStatus.ARCHIVED)


@pytest.mark.asyncio
async def test_initialize_is_idempotent(tmp_path: Path):
    """Re-initializing an existing database keeps its rows."""
    db_path = str(tmp_path / "artifacts.db")
    first = SQLiteArtifactStore(db_path)
    await first.initialize()
    await first.add(_record())

    second = SQLiteArtifactStore(db_path)
    await second.initialize()

    assert await second.get("a1b2c3d4e5f6") is not None


@pytest.mark.asyncio
async def test_close_checkpoints_without_error(store: SQLiteArtifactStore):
    await store.add(_record())
    await store.close()
    assert await store.get("a1b2c3d4e5f6") is not None


class TestLockClassification:
    def test_locked_is_retried(self):
        assert is_locked_error(sqlite3.OperationalError("database is locked"))

    def test_busy_is_retried(self):
        assert is_locked_error(sqlite3.OperationalError("database is busy"))

    def test_other_operational_errors_are_not(self):
        assert not is_locked_error(sqlite3.OperationalError("no such table: artifacts"))

    def test_integrity_errors_are_not(self):
        assert not is_locked_error(sqlite3.IntegrityError("UNIQUE constraint failed"))
        assert not is_locked_error(ValueError("database is locked"))
