# letter_wizard/models/store.py
"""
Artifact store protocol definition.

Defines the abstract interface that both InMemoryArtifactStore and
SQLiteArtifactStore implement.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from letter_wizard.models.artifacts import ArtifactRecord, ArtifactStatus


class ArtifactStore(ABC):
    """
    Abstract base class for generated-document storage.

    Both in-memory and persistent (SQLite) stores implement this protocol.
    """

    @abstractmethod
    async def add(self, record: "ArtifactRecord") -> None:
        """
        Persist a new artifact.

        Raises:
            ValueError: If artifact_id already exists
        """

    @abstractmethod
    async def get(self, artifact_id: str) -> "ArtifactRecord | None":
        """Get an artifact by ID, None if not found."""

    @abstractmethod
    async def list_for_owner(self, owner_id: str) -> "list[ArtifactRecord]":
        """List an owner's artifacts, newest first."""

    @abstractmethod
    async def update_status(self, artifact_id: str, status: "ArtifactStatus") -> None:
        """
        Change an artifact's status.

        Raises:
            ValueError: If artifact_id doesn't exist
        """

    async def close(self) -> None:
        """Release resources. No-op by default."""
