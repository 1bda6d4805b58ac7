# letter_wizard/generation/collaborators.py
"""Authentication and credit-ledger collaborators used by the orchestrator."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class AuthContext(ABC):
    """Supplies a presence/absence signal for the current user."""

    @abstractmethod
    def current_user_id(self) -> str | None:
        """ID of the authenticated user, or None."""
        pass


class StaticAuthContext(AuthContext):
    """Fixed user identity (CLI use and tests)."""

    def __init__(self, user_id: str | None):
        self._user_id = user_id or None

    def current_user_id(self) -> str | None:
        return self._user_id


@dataclass
class CreditUsage:
    owner_id: str
    credits: int
    document_type: str
    artifact_id: str | None
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class CreditLedger(ABC):
    """
    Receives credit consumption reports.

    Read-only from the engine's perspective: balances are never checked here.
    """

    @abstractmethod
    async def record_usage(
        self,
        owner_id: str,
        credits: int,
        document_type: str,
        artifact_id: str | None = None,
    ) -> None:
        pass


class InMemoryCreditLedger(CreditLedger):
    def __init__(self) -> None:
        self.entries: list[CreditUsage] = []

    async def record_usage(
        self,
        owner_id: str,
        credits: int,
        document_type: str,
        artifact_id: str | None = None,
    ) -> None:
        self.entries.append(CreditUsage(owner_id, credits, document_type, artifact_id))
        logger.info(f"Recorded {credits} credits for {owner_id} ({document_type})")

    def total_for(self, owner_id: str) -> int:
        return sum(e.credits for e in self.entries if e.owner_id == owner_id)
