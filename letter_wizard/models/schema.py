# letter_wizard/models/schema.py
"""
Database schema definition for SQLite artifact persistence.

Provides DDL for tables, indexes, and schema initialization.
"""

import logging

import aiosqlite

logger = logging.getLogger(__name__)

# Schema version for future migrations
SCHEMA_VERSION = 1

ARTIFACTS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS artifacts (
    id TEXT PRIMARY KEY,
    owner_id TEXT NOT NULL,
    document_type TEXT NOT NULL,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    status TEXT NOT NULL CHECK(status IN ('draft', 'final', 'archived')),
    credits_used INTEGER NOT NULL DEFAULT 0 CHECK(credits_used >= 0),
    metadata TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

# Index for per-owner listings (owner_id + created_at)
ARTIFACTS_INDEX_SQL = (
    "CREATE INDEX IF NOT EXISTS idx_artifacts_owner_created "
    "ON artifacts(owner_id, created_at)"
)


async def _get_schema_version(db: aiosqlite.Connection) -> int:
    """Get current schema version (0 if no version table exists)."""
    try:
        cursor = await db.execute("SELECT version FROM schema_version LIMIT 1")
        row = await cursor.fetchone()
        return row[0] if row else 0
    except aiosqlite.OperationalError:
        return 0


async def _set_schema_version(db: aiosqlite.Connection, version: int) -> None:
    await db.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER)")
    await db.execute("DELETE FROM schema_version")
    await db.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))


async def init_db(db_path: str) -> None:
    """
    Initialize database schema with WAL mode.

    Idempotent: safe to call on every startup.

    Args:
        db_path: Path to SQLite database file
    """
    async with aiosqlite.connect(db_path) as db:
        await db.execute("PRAGMA journal_mode=WAL")

        version = await _get_schema_version(db)
        await db.execute(ARTIFACTS_TABLE_SQL)
        await db.execute(ARTIFACTS_INDEX_SQL)

        if version < SCHEMA_VERSION:
            await _set_schema_version(db, SCHEMA_VERSION)
            logger.info(f"Initialized artifact schema v{SCHEMA_VERSION} at {db_path}")

        await db.commit()
