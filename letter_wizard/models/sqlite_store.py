# letter_wizard/models/sqlite_store.py
"""
SQLite-backed artifact persistence.

Provides async CRUD operations with WAL mode and IMMEDIATE transactions.
Writes retry briefly when the database is locked by another writer.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone

import aiosqlite
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from letter_wizard.models.artifacts import ArtifactRecord, ArtifactStatus
from letter_wizard.models.schema import init_db
from letter_wizard.models.store import ArtifactStore

logger = logging.getLogger(__name__)


def is_locked_error(exception: BaseException) -> bool:
    """
    Returns True if the exception is a transient SQLite lock.

    Only "database is locked" / "database is busy" operational errors are
    retried; constraint violations and schema errors propagate immediately.
    """
    if not isinstance(exception, sqlite3.OperationalError):
        return False
    message = str(exception).lower()
    return "locked" in message or "busy" in message


sqlite_write_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
    retry=retry_if_exception(is_locked_error),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


class SQLiteArtifactStore(ArtifactStore):
    """
    Async SQLite-backed artifact storage.

    Features:
        - WAL mode for concurrent reads/writes
        - IMMEDIATE transactions for write safety
        - Retry on transient lock errors
        - No persistent connections (avoids resource leaks)
    """

    def __init__(self, db_path: str) -> None:
        """
        Initialize SQLite artifact store.

        Args:
            db_path: Path to SQLite database file
        """
        self._db_path = db_path
        logger.info(f"Created SQLiteArtifactStore with path: {db_path}")

    async def initialize(self) -> None:
        """Initialize database schema."""
        await init_db(self._db_path)

    @sqlite_write_retry
    async def add(self, record: ArtifactRecord) -> None:
        """
        Add an artifact record to the store.

        Raises:
            ValueError: If artifact_id already exists
        """
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")

            try:
                cursor = await db.execute(
                    "SELECT id FROM artifacts WHERE id = ?", (record.artifact_id,)
                )
                if await cursor.fetchone():
                    raise ValueError(f"Artifact {record.artifact_id} already exists")

                updated_at_iso = (
                    record.updated_at.isoformat()
                    if record.updated_at
                    else datetime.now(timezone.utc).isoformat()
                )

                await db.execute(
                    """
                    INSERT INTO artifacts (
                        id, owner_id, document_type, title, content, status,
                        credits_used, metadata, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.artifact_id,
                        record.owner_id,
                        record.document_type,
                        record.title,
                        record.content,
                        record.status.value,
                        record.credits_used,
                        json.dumps(record.metadata),
                        record.created_at.isoformat(),
                        updated_at_iso,
                    ),
                )

                await db.commit()
                logger.info(f"Added artifact {record.artifact_id} to SQLite store")

            except Exception:
                await db.rollback()
                raise

    async def get(self, artifact_id: str) -> ArtifactRecord | None:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM artifacts WHERE id = ?", (artifact_id,)
            )
            row = await cursor.fetchone()

            if not row:
                return None

            return self._row_to_record(row)

    async def list_for_owner(self, owner_id: str) -> list[ArtifactRecord]:
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM artifacts WHERE owner_id = ? ORDER BY created_at DESC",
                (owner_id,),
            )
            rows = await cursor.fetchall()

            return [self._row_to_record(row) for row in rows]

    @sqlite_write_retry
    async def update_status(self, artifact_id: str, status: ArtifactStatus) -> None:
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("BEGIN IMMEDIATE")

            try:
                cursor = await db.execute(
                    "UPDATE artifacts SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, datetime.now(timezone.utc).isoformat(), artifact_id),
                )
                if cursor.rowcount == 0:
                    raise ValueError(f"Artifact {artifact_id} not found")

                await db.commit()
                logger.info(f"Updated artifact {artifact_id}: status={status.value}")

            except Exception:
                await db.rollback()
                raise

    async def close(self) -> None:
        """
        Checkpoint WAL.

        Truncates WAL file to avoid unbounded growth.
        """
        try:
            async with aiosqlite.connect(self._db_path) as db:
                await db.execute("PRAGMA wal_checkpoint(TRUNCATE)")
                logger.info("WAL checkpoint completed")
        except Exception as e:
            logger.warning(f"WAL checkpoint failed: {e}")

    def _row_to_record(self, row: aiosqlite.Row) -> ArtifactRecord:
        return ArtifactRecord(
            artifact_id=row["id"],
            owner_id=row["owner_id"],
            document_type=row["document_type"],
            title=row["title"],
            content=row["content"],
            status=ArtifactStatus(row["status"]),
            credits_used=row["credits_used"],
            metadata=json.loads(row["metadata"]) if row["metadata"] else {},
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"])
            if row["updated_at"]
            else None,
        )
