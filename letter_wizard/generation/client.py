# letter_wizard/generation/client.py
"""
Generation service client.

The service is an opaque collaborator: given a document type and details it
returns content and the credits it charged. No automatic retries are made;
users retry by invoking generation again.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class GenerationServiceError(Exception):
    """Generation service failed or returned an unusable response."""


class GenerationAuthError(GenerationServiceError):
    """Service rejected the caller's credentials (HTTP 401)."""


class GenerationRateLimitError(GenerationServiceError):
    """Service is throttling requests (HTTP 429)."""


class GenerationCreditsError(GenerationServiceError):
    """Service-side credits are exhausted (HTTP 402)."""


class GenerationResult(BaseModel):
    """Generated document content and the credits charged for it."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(min_length=1)
    credits_used: int = Field(ge=0)


class GenerationClient(ABC):
    """Abstract generation collaborator."""

    @abstractmethod
    async def generate(self, payload: dict[str, Any]) -> GenerationResult:
        """
        Generate a document.

        Args:
            payload: {"documentType", "details", optional "conversationContext"}

        Raises:
            GenerationServiceError: On any collaborator failure
        """
        pass


_STATUS_ERRORS: dict[int, tuple[type[GenerationServiceError], str]] = {
    401: (GenerationAuthError, "Please log in to generate documents"),
    402: (GenerationCreditsError, "Payment required. Please add credits to continue."),
    429: (GenerationRateLimitError, "Rate limit exceeded. Please try again later."),
}


class HttpGenerationClient(GenerationClient):
    """Posts generation requests to an HTTP endpoint with a bearer token."""

    def __init__(
        self,
        endpoint: str,
        api_key: str | None = None,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize HTTP generation client.

        Args:
            endpoint: Full URL of the generation function
            api_key: Bearer token sent as Authorization header
            timeout: Request timeout in seconds (transport concern, not the engine's)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    async def generate(self, payload: dict[str, Any]) -> GenerationResult:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout), transport=self._transport
        ) as http:
            try:
                response = await http.post(self._endpoint, json=payload, headers=headers)
            except httpx.HTTPError as e:
                logger.warning(f"Generation request to {self._endpoint} failed: {e}")
                raise GenerationServiceError(f"Could not reach generation service: {e}") from e

        if response.status_code in _STATUS_ERRORS:
            error_type, message = _STATUS_ERRORS[response.status_code]
            logger.warning(f"Generation service returned {response.status_code}")
            raise error_type(message)

        if response.is_error:
            logger.error(
                f"Generation service error {response.status_code}: {response.text[:200]}"
            )
            raise GenerationServiceError(
                f"Generation service error (HTTP {response.status_code})"
            )

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> GenerationResult:
        try:
            data = response.json()
        except ValueError as e:
            raise GenerationServiceError("Generation service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise GenerationServiceError("Generation service returned an unexpected response")

        if data.get("error"):
            raise GenerationServiceError(str(data["error"]))

        content = data.get("content")
        if not isinstance(content, str) or not content.strip():
            raise GenerationServiceError("Generation service returned no content")

        credits_used = data.get("creditsUsed", 0)
        if not isinstance(credits_used, int) or isinstance(credits_used, bool) or credits_used < 0:
            raise GenerationServiceError(f"Invalid credit count from service: {credits_used!r}")

        return GenerationResult(content=content, credits_used=credits_used)
