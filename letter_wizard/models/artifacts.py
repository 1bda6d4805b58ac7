# letter_wizard/models/artifacts.py
"""
Generated-document artifact records and in-memory storage.

Internal records (NOT Pydantic) for persisted letters.
"""

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from letter_wizard.models.store import ArtifactStore

logger = logging.getLogger(__name__)


class ArtifactStatus(Enum):
    """Artifact lifecycle states."""

    DRAFT = "draft"
    FINAL = "final"
    ARCHIVED = "archived"


@dataclass
class ArtifactRecord:
    """
    Persisted generated document.

    `metadata` holds the raw form state that passed validation, kept for
    later editing.
    """

    artifact_id: str
    owner_id: str
    document_type: str
    title: str
    content: str
    status: ArtifactStatus
    credits_used: int
    created_at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)
    updated_at: datetime | None = None


class InMemoryArtifactStore(ArtifactStore):
    """
    Simple in-memory artifact storage.

    Implements ArtifactStore with async wrappers around dict operations.
    Records are copied on the way in so callers cannot mutate stored metadata.
    """

    def __init__(self) -> None:
        self._artifacts: dict[str, ArtifactRecord] = {}
        logger.info("Initialized InMemoryArtifactStore")

    async def add(self, record: ArtifactRecord) -> None:
        """
        Add an artifact record.

        Raises:
            ValueError: If artifact_id already exists
        """
        if record.artifact_id in self._artifacts:
            raise ValueError(f"Artifact {record.artifact_id} already exists")

        self._artifacts[record.artifact_id] = copy.deepcopy(record)
        logger.info(f"Added artifact {record.artifact_id} to store")

    async def get(self, artifact_id: str) -> ArtifactRecord | None:
        record = self._artifacts.get(artifact_id)
        return copy.deepcopy(record) if record else None

    async def list_for_owner(self, owner_id: str) -> list[ArtifactRecord]:
        """List an owner's artifacts, newest first."""
        owned = [r for r in self._artifacts.values() if r.owner_id == owner_id]
        return [
            copy.deepcopy(r)
            for r in sorted(owned, key=lambda r: r.created_at, reverse=True)
        ]

    async def update_status(self, artifact_id: str, status: ArtifactStatus) -> None:
        """
        Change an artifact's status.

        Raises:
            ValueError: If artifact_id doesn't exist
        """
        record = self._artifacts.get(artifact_id)
        if not record:
            raise ValueError(f"Artifact {artifact_id} not found")

        record.status = status
        logger.info(f"Updated artifact {artifact_id}: status={status.value}")


def generate_artifact_id() -> str:
    """
    Generate a unique artifact ID.

    Returns:
        12-character hex string (UUID4 truncated)
    """
    return uuid4().hex[:12]
