# tests/unit/test_wizard.py
"""
Unit tests for WizardStateMachine.

Covers step navigation and gating, dirty-scoped inline errors, N/A display
for disabled fields, and the single-flight / discard-on-reset guarantees of
generation.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from letter_wizard.generation.orchestrator import GenerationOutcome, GenerationStatus
from letter_wizard.models.fields import DocumentType
from letter_wizard.schemas.registry import get_fields
from letter_wizard.validation.engine import ValidationRuleEngine
from letter_wizard.wizard.machine import (
    FIELD_STEPS,
    REVIEW_STEP,
    WizardPhase,
    WizardStateMachine,
    fields_per_step,
)

from form_samples import TODAY, valid_form

GENERATED = GenerationOutcome(
    status=GenerationStatus.GENERATED,
    message="Document generated successfully",
    artifact_id="abc123def456",
)


def _engine() -> ValidationRuleEngine:
    return ValidationRuleEngine(clock=lambda: TODAY)


def _machine(document_type="employment_termination", prefill=None, **kwargs):
    if prefill is None:
        prefill = valid_form(document_type)
    return WizardStateMachine(engine=_engine(), prefill=prefill, **kwargs)


def _advance_to(machine: WizardStateMachine, step: int, document_type="employment_termination"):
    machine.select_type(document_type)
    while machine.step < step:
        result = machine.next()
        assert result.moved, result


class BlockingOrchestrator:
    """Orchestrator whose generate() waits until released."""

    def __init__(self, outcome: GenerationOutcome = GENERATED):
        self.outcome = outcome
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def generate(self, document_type, form_state, *, title=None, conversation_context=None):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return self.outcome


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestNavigation:
    def test_starts_at_type_selection(self):
        machine = _machine()
        assert machine.step == 0
        assert machine.phase == WizardPhase.TYPE_SELECTION

    def test_next_requires_a_type(self):
        result = _machine().next()
        assert not result.moved
        assert result.message == "Please select a document type to continue"

    def test_invalid_type_rejected(self):
        machine = _machine()
        result = machine.select_type("last_will")
        assert result.message == "Please select a valid document type"
        assert machine.document_type is None

    def test_preselected_type(self):
        machine = WizardStateMachine(engine=_engine(), document_type="nda")
        assert machine.document_type == DocumentType.NDA
        assert machine.next().moved

    def test_intermediate_steps_are_not_gated(self):
        machine = _machine(prefill={})
        machine.select_type("nda")
        for expected in range(1, FIELD_STEPS + 1):
            result = machine.next()
            assert result.moved
            assert result.step == expected

    def test_last_field_step_gates_on_errors(self):
        form = valid_form("employment_termination")
        del form["hrEmail"]
        machine = _machine(prefill=form)
        _advance_to(machine, FIELD_STEPS)

        result = machine.next()

        assert not result.moved
        assert result.step == FIELD_STEPS
        assert machine.step == FIELD_STEPS
        assert [e.field for e in result.errors] == ["hrEmail"]
        assert result.message == "Please fix 1 error to continue"

    def test_gate_pluralizes_message(self):
        machine = _machine(prefill={})
        _advance_to(machine, FIELD_STEPS, "nda")
        result = machine.next()
        assert result.message.endswith("errors to continue")

    def test_fixing_errors_unblocks_review(self):
        form = valid_form("employment_termination")
        del form["hrEmail"]
        machine = _machine(prefill=form)
        _advance_to(machine, FIELD_STEPS)
        assert not machine.next().moved

        machine.update_field("hrEmail", "hr@gulfhorizon.ae")
        result = machine.next()

        assert result.moved
        assert machine.step == REVIEW_STEP
        assert machine.phase == WizardPhase.REVIEW

    def test_gate_marks_all_fields_touched(self):
        machine = _machine(prefill={})
        _advance_to(machine, FIELD_STEPS, "nda")
        machine.next()
        assert {f.name for f in get_fields("nda")} <= machine.form.dirty
        assert machine.visible_errors()

    def test_back_never_validates(self):
        machine = _machine(prefill={})
        _advance_to(machine, 3, "nda")
        result = machine.back()
        assert result.moved
        assert machine.step == 2
        assert machine.session.last_result.errors == ()

    def test_back_from_review(self):
        machine = _machine()
        _advance_to(machine, REVIEW_STEP)
        assert machine.back().step == FIELD_STEPS

    def test_back_at_start_does_not_move(self):
        assert not _machine().back().moved

    def test_type_locked_after_first_step(self):
        machine = _machine()
        _advance_to(machine, 1)
        result = machine.select_type("nda")
        assert not result.moved
        assert machine.document_type == DocumentType.EMPLOYMENT_TERMINATION

    def test_next_on_review_does_not_move(self):
        machine = _machine()
        _advance_to(machine, REVIEW_STEP)
        assert not machine.next().moved

    def test_warnings_notified_on_gate(self):
        notify = MagicMock()
        form = valid_form("employment_contract")
        form["workingHoursPerDay"] = 10
        machine = _machine("employment_contract", prefill=form, notify=notify)
        _advance_to(machine, FIELD_STEPS, "employment_contract")

        assert machine.next().moved
        notify.assert_called_once()
        warnings = notify.call_args[0][0]
        assert [w.field for w in warnings] == ["workingHoursPerDay"]

    def test_warnings_not_notified_on_edits(self):
        notify = MagicMock()
        machine = _machine("employment_contract", notify=notify)
        _advance_to(machine, 2, "employment_contract")
        machine.update_field("workingHoursPerDay", 10)
        notify.assert_not_called()


# ---------------------------------------------------------------------------
# Fields and inline errors
# ---------------------------------------------------------------------------


class TestFields:
    def test_fields_split_across_four_steps(self):
        machine = _machine()
        _advance_to(machine, 1)
        names = []
        for step in range(1, FIELD_STEPS + 1):
            names.extend(entry.definition.name for entry in machine.step_fields(step))
        assert names == [f.name for f in get_fields("employment_termination")]

    def test_step_size(self):
        assert fields_per_step(37) == 10
        assert fields_per_step(40) == 10
        assert fields_per_step(1) == 1

    def test_no_fields_outside_field_steps(self):
        machine = _machine()
        assert machine.step_fields() == []
        machine.select_type("nda")
        assert machine.step_fields(REVIEW_STEP) == []

    def test_disabled_field_shows_na_label(self):
        form = valid_form("employment_termination")
        form["propertyToReturn"] = "No"
        machine = _machine(prefill=form)
        machine.select_type("employment_termination")

        names = [f.name for f in get_fields("employment_termination")]
        step = names.index("laptopDetails") // fields_per_step(len(names)) + 1
        entry = next(e for e in machine.step_fields(step) if e.definition.name == "laptopDetails")

        assert not entry.enabled
        assert entry.na_label == "N/A - No company property to return"

    def test_enabling_trigger_enables_field(self):
        machine = _machine()
        _advance_to(machine, 1)

        def laptop_entry():
            entries = [e for s in range(1, FIELD_STEPS + 1) for e in machine.step_fields(s)]
            return next(e for e in entries if e.definition.name == "laptopDetails")

        machine.update_field("propertyToReturn", "No")
        assert not laptop_entry().enabled

        machine.update_field("propertyToReturn", "Yes")
        assert laptop_entry().enabled
        assert laptop_entry().na_label is None

    def test_inline_errors_only_for_touched_fields(self):
        machine = _machine(prefill={})
        _advance_to(machine, 1, "nda")

        assert machine.update_field("partyAEmail", "bad-email")

        assert [e.field for e in machine.visible_errors()] == ["partyAEmail"]

    def test_date_rule_waits_for_second_field(self):
        machine = _machine(prefill={})
        _advance_to(machine, 1, "nda")

        machine.update_field("effectiveDate", "2025-06-01")
        machine.update_field("expiryDate", "2025-05-01")

        assert "expiryDate" in [e.field for e in machine.visible_errors()]

    def test_conversation_context_lifted_from_prefill(self):
        prefill = valid_form("nda")
        prefill["conversationContext"] = "User needs an NDA for a joint venture"
        machine = _machine("nda", prefill=prefill)

        assert "conversationContext" not in machine.form
        assert machine.session.conversation_context == "User needs an NDA for a joint venture"

    def test_title_is_validated(self):
        with pytest.raises(ValueError):
            _machine(title="x" * 101)

    def test_reset_restores_prefill(self):
        machine = _machine()
        _advance_to(machine, 2)
        machine.update_field("companyName", "Changed Name LLC")

        machine.reset()

        assert machine.step == 0
        assert machine.document_type is None
        assert machine.form["companyName"] == "Gulf Horizon Trading LLC"
        assert machine.form.dirty == frozenset()


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class TestGeneration:
    @pytest.mark.asyncio
    async def test_generate_from_review(self):
        orchestrator = MagicMock()
        orchestrator.generate = AsyncMock(return_value=GENERATED)
        prefill = valid_form("employment_termination")
        prefill["conversationContext"] = "Redundancy after restructuring"
        machine = _machine(prefill=prefill, orchestrator=orchestrator, title="Termination - Ahmed")
        _advance_to(machine, REVIEW_STEP)

        outcome = await machine.generate()

        assert outcome.status == GenerationStatus.GENERATED
        assert machine.phase == WizardPhase.DONE
        orchestrator.generate.assert_awaited_once()
        args, kwargs = orchestrator.generate.call_args
        assert args[0] == DocumentType.EMPLOYMENT_TERMINATION
        assert args[1] == valid_form("employment_termination")
        assert kwargs == {
            "title": "Termination - Ahmed",
            "conversation_context": "Redundancy after restructuring",
        }

    @pytest.mark.asyncio
    async def test_generate_outside_review_rejected(self):
        orchestrator = MagicMock()
        orchestrator.generate = AsyncMock(return_value=GENERATED)
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, FIELD_STEPS)

        outcome = await machine.generate()

        assert outcome.status == GenerationStatus.REJECTED
        orchestrator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generate_revalidates(self):
        orchestrator = MagicMock()
        orchestrator.generate = AsyncMock(return_value=GENERATED)
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, REVIEW_STEP)
        machine.update_field("hrEmail", "broken")

        outcome = await machine.generate()

        assert outcome.status == GenerationStatus.INVALID
        assert [e.field for e in outcome.errors] == ["hrEmail"]
        orchestrator.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_generate_requires_orchestrator(self):
        machine = _machine()
        _advance_to(machine, REVIEW_STEP)
        with pytest.raises(ValueError):
            await machine.generate()

    @pytest.mark.asyncio
    async def test_second_generate_rejected_while_in_flight(self):
        orchestrator = BlockingOrchestrator()
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, REVIEW_STEP)

        first = asyncio.create_task(machine.generate())
        await orchestrator.started.wait()

        assert machine.phase == WizardPhase.GENERATING
        second = await machine.generate()
        assert second.status == GenerationStatus.REJECTED
        assert not machine.update_field("companyName", "Other LLC")
        assert not machine.back().moved

        orchestrator.release.set()
        assert (await first).status == GenerationStatus.GENERATED
        assert orchestrator.calls == 1

    @pytest.mark.asyncio
    async def test_reset_discards_in_flight_outcome(self):
        orchestrator = BlockingOrchestrator()
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, REVIEW_STEP)

        task = asyncio.create_task(machine.generate())
        await orchestrator.started.wait()
        machine.reset()
        orchestrator.release.set()
        outcome = await task

        assert outcome.status == GenerationStatus.GENERATED
        assert machine.session.last_outcome is None
        assert not machine.session.done
        assert machine.step == 0

    @pytest.mark.asyncio
    async def test_close_discards_in_flight_outcome(self):
        orchestrator = BlockingOrchestrator()
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, REVIEW_STEP)

        task = asyncio.create_task(machine.generate())
        await orchestrator.started.wait()
        machine.close()
        orchestrator.release.set()
        await task

        assert machine.session.last_outcome is None
        assert machine.session.closed
        assert (await machine.generate()).status == GenerationStatus.REJECTED

    @pytest.mark.asyncio
    async def test_failed_generation_can_be_retried(self):
        failed = GenerationOutcome(status=GenerationStatus.FAILED, message="Service unavailable")
        orchestrator = MagicMock()
        orchestrator.generate = AsyncMock(side_effect=[failed, GENERATED])
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, REVIEW_STEP)

        assert (await machine.generate()).status == GenerationStatus.FAILED
        assert machine.phase == WizardPhase.REVIEW

        assert (await machine.generate()).status == GenerationStatus.GENERATED
        assert machine.phase == WizardPhase.DONE

    @pytest.mark.asyncio
    async def test_not_saved_still_ends_session(self):
        not_saved = GenerationOutcome(
            status=GenerationStatus.GENERATED_NOT_SAVED, message="Generated but not saved"
        )
        orchestrator = MagicMock()
        orchestrator.generate = AsyncMock(return_value=not_saved)
        machine = _machine(orchestrator=orchestrator)
        _advance_to(machine, REVIEW_STEP)

        await machine.generate()

        assert machine.phase == WizardPhase.DONE
        assert not machine.update_field("companyName", "Other LLC")
