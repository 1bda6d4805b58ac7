# letter_wizard/wizard/machine.py
"""
Multi-step wizard state machine.

Steps:
    0       type selection
    1..4    field steps (fields split evenly in registry order)
    5       review

Intermediate field steps are not gated; the full field list is validated when
leaving the last field step and again before generation. Backward navigation
never validates.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from letter_wizard.generation.orchestrator import (
    GenerationOrchestrator,
    GenerationOutcome,
    GenerationStatus,
)
from letter_wizard.models.fields import DocumentType, FieldDefinition
from letter_wizard.models.results import ValidationError, ValidationResult, ValidationWarning
from letter_wizard.schemas.registry import get_fields, get_schema
from letter_wizard.validation.engine import ValidationRuleEngine
from letter_wizard.validation.sanitize import sanitize_title
from letter_wizard.wizard.state import (
    FieldsTouched,
    FieldTouched,
    FieldUpdated,
    FormEvent,
    FormReset,
    FormState,
    reduce,
)

logger = logging.getLogger(__name__)

FIELD_STEPS = 4
REVIEW_STEP = FIELD_STEPS + 1

CONVERSATION_CONTEXT_KEY = "conversationContext"


class WizardPhase(str, Enum):
    TYPE_SELECTION = "type_selection"
    FIELD_STEP = "field_step"
    REVIEW = "review"
    GENERATING = "generating"
    DONE = "done"


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of a navigation attempt. Rejections carry a prompt, never raise."""

    moved: bool
    step: int
    errors: tuple[ValidationError, ...] = ()
    message: str | None = None


@dataclass(frozen=True)
class StepField:
    definition: FieldDefinition
    enabled: bool
    na_label: str | None = None


@dataclass
class WizardSession:
    """Mutable session record owned by exactly one WizardStateMachine."""

    form: FormState
    document_type: DocumentType | None = None
    step: int = 0
    title: str | None = None
    conversation_context: str | None = None
    generating: bool = False
    done: bool = False
    closed: bool = False
    epoch: int = 0
    last_result: ValidationResult = field(default_factory=ValidationResult)
    last_outcome: GenerationOutcome | None = None


def fields_per_step(field_count: int) -> int:
    return math.ceil(field_count / FIELD_STEPS)


class WizardStateMachine:
    """
    Drives one wizard session: type selection, field steps, review, generation.

    Field edits go through the FormState reducer. Validation on edits is scoped
    to touched fields; the gates validate everything.
    """

    def __init__(
        self,
        orchestrator: GenerationOrchestrator | None = None,
        engine: ValidationRuleEngine | None = None,
        *,
        document_type: "DocumentType | str | None" = None,
        prefill: Mapping[str, Any] | None = None,
        title: str | None = None,
        notify: Callable[[Sequence[ValidationWarning]], None] | None = None,
    ):
        """
        Initialize a wizard session.

        Args:
            orchestrator: Generation orchestrator (required only for generate())
            engine: Validation engine (default: a new ValidationRuleEngine)
            document_type: Optional preselected type
            prefill: Initial values, e.g. carried over from a chat suggestion;
                a "conversationContext" entry is lifted out as generation context
            title: Optional user-chosen artifact title (at most 100 characters)
            notify: Receives warnings once per gate validation pass

        Raises:
            ValueError: If the title is empty or too long
        """
        self._orchestrator = orchestrator
        self._engine = engine or ValidationRuleEngine()
        self._notify = notify

        values = dict(prefill or {})
        context = values.pop(CONVERSATION_CONTEXT_KEY, None)
        self._prefill = values
        self.session = WizardSession(
            form=FormState(values),
            document_type=DocumentType.parse(document_type),
            title=sanitize_title(title) if title else None,
            conversation_context=str(context) if context else None,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def phase(self) -> WizardPhase:
        session = self.session
        if session.done:
            return WizardPhase.DONE
        if session.generating:
            return WizardPhase.GENERATING
        if session.step == 0:
            return WizardPhase.TYPE_SELECTION
        if session.step == REVIEW_STEP:
            return WizardPhase.REVIEW
        return WizardPhase.FIELD_STEP

    @property
    def step(self) -> int:
        return self.session.step

    @property
    def form(self) -> FormState:
        return self.session.form

    @property
    def document_type(self) -> DocumentType | None:
        return self.session.document_type

    def step_fields(self, step: int | None = None) -> list[StepField]:
        """
        Fields shown on a field step, with enabled flag and N/A label.

        Returns an empty list outside steps 1..4 or without a document type.
        """
        step = self.session.step if step is None else step
        schema = get_schema(self.session.document_type)
        if schema is None or not 1 <= step <= FIELD_STEPS:
            return []

        per_step = fields_per_step(len(schema.fields))
        chunk = schema.fields[(step - 1) * per_step : step * per_step]
        values = self.session.form
        entries = []
        for definition in chunk:
            group = schema.group_for(definition.name)
            enabled = group is None or group.is_active(values)
            entries.append(
                StepField(
                    definition=definition,
                    enabled=enabled,
                    na_label=None if enabled else group.na_label,
                )
            )
        return entries

    def visible_errors(self) -> list[ValidationError]:
        """Errors from the latest pass on touched fields, plus field-less errors."""
        dirty = self.session.form.dirty
        return [
            error
            for error in self.session.last_result.errors
            if error.field is None or error.field in dirty
        ]

    # ------------------------------------------------------------------
    # Form edits
    # ------------------------------------------------------------------

    def update_field(self, name: str, value: Any) -> bool:
        """
        Set a field value and re-validate touched fields.

        Returns:
            False if the edit was refused (generation in flight, session over)
        """
        if not self._accepts_edits():
            logger.info(f"Ignored edit to {name}: session is not editable")
            return False
        self._dispatch(FieldUpdated(name, value))
        self._revalidate_dirty()
        return True

    def touch(self, name: str) -> bool:
        if not self._accepts_edits():
            return False
        self._dispatch(FieldTouched(name))
        self._revalidate_dirty()
        return True

    def select_type(self, document_type: "DocumentType | str | None") -> NavigationResult:
        """Choose the document type. Only allowed on the type-selection step."""
        session = self.session
        if session.step != 0 or not self._accepts_edits():
            return NavigationResult(
                moved=False,
                step=session.step,
                message="Go back to the first step to change the document type",
            )
        parsed = DocumentType.parse(document_type)
        if parsed is None:
            return NavigationResult(
                moved=False, step=0, message="Please select a valid document type"
            )
        if parsed != session.document_type:
            session.document_type = parsed
            session.last_result = ValidationResult()
            logger.debug(f"Selected document type {parsed.value}")
        return NavigationResult(moved=False, step=0)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> NavigationResult:
        session = self.session
        if not self._accepts_edits():
            return NavigationResult(
                moved=False, step=session.step, message=self._busy_message()
            )

        if session.step == 0:
            if session.document_type is None:
                return NavigationResult(
                    moved=False, step=0, message="Please select a document type to continue"
                )
            return self._move_to(1)

        if session.step < FIELD_STEPS:
            return self._move_to(session.step + 1)

        if session.step == FIELD_STEPS:
            result = self._validate_all()
            if not result.is_valid:
                count = len(result.errors)
                logger.info(f"Review blocked: {count} validation errors")
                return NavigationResult(
                    moved=False,
                    step=FIELD_STEPS,
                    errors=result.errors,
                    message=f"Please fix {count} error{'s' if count != 1 else ''} to continue",
                )
            return self._move_to(REVIEW_STEP)

        return NavigationResult(
            moved=False, step=session.step, message="Review the details, then generate"
        )

    def back(self) -> NavigationResult:
        session = self.session
        if not self._accepts_edits() or session.step == 0:
            return NavigationResult(moved=False, step=session.step)
        return self._move_to(session.step - 1)

    def reset(self) -> None:
        """Return to type selection with the initial values; abandons any in-flight result."""
        session = self.session
        session.epoch += 1
        session.form = reduce(session.form, FormReset(self._prefill))
        session.document_type = None
        session.step = 0
        session.generating = False
        session.done = False
        session.last_result = ValidationResult()
        session.last_outcome = None
        logger.debug("Wizard session reset")

    def close(self) -> None:
        """End the session. Late generation results are discarded."""
        self.session.epoch += 1
        self.session.closed = True
        self.session.generating = False

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(self) -> GenerationOutcome:
        """
        Re-validate and generate from a snapshot of the current values.

        Only one generation may be in flight per session. If the session is
        reset or closed meanwhile, the outcome is returned but not applied.
        """
        session = self.session
        if session.generating:
            return GenerationOutcome(
                status=GenerationStatus.REJECTED,
                message="A document is already being generated",
            )
        if session.closed or session.done:
            return GenerationOutcome(
                status=GenerationStatus.REJECTED, message="This wizard session has ended"
            )
        if session.step != REVIEW_STEP:
            return GenerationOutcome(
                status=GenerationStatus.REJECTED,
                message="Review the document details before generating",
            )
        if self._orchestrator is None:
            raise ValueError("WizardStateMachine.generate requires an orchestrator")

        result = self._validate_all()
        if not result.is_valid:
            count = len(result.errors)
            return GenerationOutcome(
                status=GenerationStatus.INVALID,
                message=f"Please fix {count} error{'s' if count != 1 else ''} before generating",
                errors=result.errors,
            )

        snapshot = session.form.snapshot()
        epoch = session.epoch
        session.generating = True
        try:
            outcome = await self._orchestrator.generate(
                session.document_type,
                snapshot,
                title=session.title,
                conversation_context=session.conversation_context,
            )
        finally:
            if session.epoch == epoch:
                session.generating = False

        if session.epoch != epoch:
            logger.info("Discarding generation outcome for a reset or closed session")
            return outcome

        session.last_outcome = outcome
        if outcome.succeeded:
            session.done = True
        return outcome

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepts_edits(self) -> bool:
        session = self.session
        return not (session.generating or session.closed or session.done)

    def _busy_message(self) -> str:
        if self.session.generating:
            return "Please wait for the current generation to finish"
        return "This wizard session has ended"

    def _dispatch(self, event: FormEvent) -> None:
        self.session.form = reduce(self.session.form, event)

    def _move_to(self, step: int) -> NavigationResult:
        self.session.step = step
        return NavigationResult(moved=True, step=step)

    def _revalidate_dirty(self) -> None:
        session = self.session
        if session.document_type is None:
            return
        session.last_result = self._engine.validate(
            session.document_type, session.form, session.form.dirty
        )

    def _validate_all(self) -> ValidationResult:
        """Gate validation: marks every field touched and checks everything."""
        session = self.session
        names = tuple(f.name for f in get_fields(session.document_type))
        self._dispatch(FieldsTouched(names))
        result = self._engine.validate(session.document_type, session.form)
        session.last_result = result
        if result.warnings and self._notify is not None:
            self._notify(list(result.warnings))
        return result
