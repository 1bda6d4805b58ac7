# letter_wizard/generation/orchestrator.py
"""
Generation orchestrator.

Hands a validated form snapshot to the generation service, persists the
returned content as a draft artifact and reports credit consumption.
Collaborator failures are caught here and translated into one user-facing
message on the GenerationOutcome; nothing raw reaches the caller.
"""

import copy
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from letter_wizard.generation.client import (
    GenerationAuthError,
    GenerationClient,
    GenerationResult,
    GenerationServiceError,
)
from letter_wizard.generation.collaborators import AuthContext, CreditLedger
from letter_wizard.models.artifacts import ArtifactRecord, ArtifactStatus, generate_artifact_id
from letter_wizard.models.fields import DocumentType
from letter_wizard.models.results import ValidationError
from letter_wizard.models.rules import DocumentSchema
from letter_wizard.models.store import ArtifactStore
from letter_wizard.schemas.registry import get_schema
from letter_wizard.validation.engine import ValidationRuleEngine
from letter_wizard.validation.sanitize import sanitize_details, sanitize_string, sanitize_title

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_PATH = "/auth"


class GenerationStatus(str, Enum):
    GENERATED = "generated"
    GENERATED_NOT_SAVED = "generated_not_saved"
    FAILED = "failed"
    UNAUTHENTICATED = "unauthenticated"
    INVALID = "invalid"
    REJECTED = "rejected"


class GenerationOutcome(BaseModel):
    """Result channel for one generation attempt."""

    model_config = ConfigDict(frozen=True)

    status: GenerationStatus
    message: str = Field(description="Single user-facing message")
    result: GenerationResult | None = Field(default=None)
    artifact_id: str | None = Field(default=None)
    redirect_to: str | None = Field(default=None, description="Login path when unauthenticated")
    errors: tuple[ValidationError, ...] = Field(default=())

    @property
    def succeeded(self) -> bool:
        """True whenever content was generated, saved or not."""
        return self.status in (GenerationStatus.GENERATED, GenerationStatus.GENERATED_NOT_SAVED)


def default_title(document_type: DocumentType, created_at: datetime) -> str:
    return f"{document_type.label} - {created_at.date().isoformat()}"


def build_payload(
    schema: DocumentSchema,
    values: Mapping[str, Any],
    conversation_context: str | None = None,
) -> dict[str, Any]:
    """
    Build the generation request payload.

    String values are sanitized; fields disabled by a conditional group are
    sent as that group's N/A label so the generated text can state it.
    """
    details = sanitize_details(values)
    for group in schema.conditional_groups:
        if not group.is_active(values):
            for name in group.fields:
                details[name] = group.na_label

    payload: dict[str, Any] = {
        "documentType": schema.document_type.value,
        "details": details,
    }
    if conversation_context:
        payload["conversationContext"] = sanitize_string(conversation_context)
    return payload


class GenerationOrchestrator:
    """
    Coordinates validation guard, generation, persistence and credit reporting.

    The orchestrator never computes credit costs; it records what the
    generation service reports.
    """

    def __init__(
        self,
        client: GenerationClient,
        store: ArtifactStore,
        auth: AuthContext,
        ledger: CreditLedger | None = None,
        engine: ValidationRuleEngine | None = None,
        login_path: str = DEFAULT_LOGIN_PATH,
        clock: Callable[[], datetime] | None = None,
    ):
        self._client = client
        self._store = store
        self._auth = auth
        self._ledger = ledger
        self._engine = engine or ValidationRuleEngine()
        self._login_path = login_path
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def generate(
        self,
        document_type: "DocumentType | str",
        form_state: Mapping[str, Any],
        *,
        title: str | None = None,
        conversation_context: str | None = None,
    ) -> GenerationOutcome:
        """
        Generate and persist a document.

        Args:
            document_type: Type of document to generate
            form_state: Field values; deep-copied before use so later edits
                by the caller cannot reach the persisted metadata
            title: Optional user-chosen title (default "<label> - <date>")
            conversation_context: Optional context carried over from chat

        Returns:
            GenerationOutcome describing what happened
        """
        schema = get_schema(document_type)
        if schema is None:
            return GenerationOutcome(
                status=GenerationStatus.INVALID,
                message="Please select a document type",
                errors=(ValidationError(message=f"Unknown document type: {document_type}"),),
            )
        doc_type = schema.document_type

        owner_id = self._auth.current_user_id()
        if owner_id is None:
            logger.info("Generation attempted without an authenticated user")
            return GenerationOutcome(
                status=GenerationStatus.UNAUTHENTICATED,
                message="Please log in to generate documents",
                redirect_to=self._login_path,
            )

        snapshot = copy.deepcopy(dict(form_state))

        # Final guard: the snapshot itself must pass validation
        validation = self._engine.validate(doc_type, snapshot)
        if not validation.is_valid:
            count = len(validation.errors)
            logger.info(f"Generation blocked for {doc_type.value}: {count} validation errors")
            return GenerationOutcome(
                status=GenerationStatus.INVALID,
                message=f"Please fix {count} error{'s' if count != 1 else ''} before generating",
                errors=validation.errors,
            )

        try:
            chosen_title = sanitize_title(title) if title else None
        except ValueError as e:
            return GenerationOutcome(status=GenerationStatus.REJECTED, message=str(e))

        payload = build_payload(schema, snapshot, conversation_context)

        try:
            result = await self._client.generate(payload)
        except GenerationAuthError as e:
            return GenerationOutcome(
                status=GenerationStatus.UNAUTHENTICATED,
                message=str(e),
                redirect_to=self._login_path,
            )
        except GenerationServiceError as e:
            logger.warning(f"Generation failed for {doc_type.value}: {e}")
            return GenerationOutcome(status=GenerationStatus.FAILED, message=str(e))
        except Exception as e:
            logger.error(f"Unexpected generation failure for {doc_type.value}: {e}", exc_info=True)
            return GenerationOutcome(
                status=GenerationStatus.FAILED,
                message="Failed to generate document. Please try again.",
            )

        created_at = self._clock()
        record = ArtifactRecord(
            artifact_id=generate_artifact_id(),
            owner_id=owner_id,
            document_type=doc_type.value,
            title=chosen_title or default_title(doc_type, created_at),
            content=result.content,
            status=ArtifactStatus.DRAFT,
            credits_used=result.credits_used,
            created_at=created_at,
            metadata=snapshot,
        )

        saved = True
        try:
            await self._store.add(record)
        except Exception as e:
            saved = False
            logger.error(f"Generated {doc_type.value} but failed to save it: {e}", exc_info=True)

        await self._report_credits(owner_id, result, doc_type, record.artifact_id if saved else None)

        if not saved:
            return GenerationOutcome(
                status=GenerationStatus.GENERATED_NOT_SAVED,
                message="Your document was generated but could not be saved. "
                "Copy the content before leaving this page.",
                result=result,
            )

        logger.info(
            f"Generated {doc_type.value} artifact {record.artifact_id} "
            f"({result.credits_used} credits)"
        )
        return GenerationOutcome(
            status=GenerationStatus.GENERATED,
            message="Document generated successfully",
            result=result,
            artifact_id=record.artifact_id,
        )

    async def _report_credits(
        self,
        owner_id: str,
        result: GenerationResult,
        doc_type: DocumentType,
        artifact_id: str | None,
    ) -> None:
        if self._ledger is None:
            return
        try:
            await self._ledger.record_usage(
                owner_id, result.credits_used, doc_type.value, artifact_id=artifact_id
            )
        except Exception as e:
            logger.warning(f"Failed to record credit usage for {owner_id}: {e}")
