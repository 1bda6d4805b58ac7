# letter_wizard/generation/__init__.py
"""Generation service client, collaborators and the orchestrator."""

from .client import (
    GenerationAuthError,
    GenerationClient,
    GenerationCreditsError,
    GenerationRateLimitError,
    GenerationResult,
    GenerationServiceError,
    HttpGenerationClient,
)
from .collaborators import (
    AuthContext,
    CreditLedger,
    CreditUsage,
    InMemoryCreditLedger,
    StaticAuthContext,
)
from .orchestrator import (
    GenerationOrchestrator,
    GenerationOutcome,
    GenerationStatus,
    build_payload,
    default_title,
)

__all__ = [
    "GenerationAuthError",
    "GenerationClient",
    "GenerationCreditsError",
    "GenerationRateLimitError",
    "GenerationResult",
    "GenerationServiceError",
    "HttpGenerationClient",
    "AuthContext",
    "CreditLedger",
    "CreditUsage",
    "InMemoryCreditLedger",
    "StaticAuthContext",
    "GenerationOrchestrator",
    "GenerationOutcome",
    "GenerationStatus",
    "build_payload",
    "default_title",
]
