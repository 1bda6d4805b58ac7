# tests/unit/test_orchestrator.py
"""
Unit tests for GenerationOrchestrator and payload building.

The generation client is an AsyncMock; storage uses InMemoryArtifactStore
unless a test needs the store itself to fail.
"""

import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from letter_wizard.generation.client import (
    GenerationAuthError,
    GenerationRateLimitError,
    GenerationResult,
)
from letter_wizard.generation.collaborators import InMemoryCreditLedger, StaticAuthContext
from letter_wizard.generation.orchestrator import (
    GenerationOrchestrator,
    GenerationStatus,
    build_payload,
    default_title,
)
from letter_wizard.models.artifacts import ArtifactStatus, InMemoryArtifactStore
from letter_wizard.models.fields import DocumentType
from letter_wizard.schemas.registry import get_schema
from letter_wizard.validation.engine import ValidationRuleEngine

from form_samples import TODAY, valid_form

NOW = datetime(2025, 3, 15, 9, 30, tzinfo=timezone.utc)
RESULT = GenerationResult(content="TERMINATION LETTER\n\nDear Mr. Al Mansouri,", credits_used=2)


def _client(result=RESULT, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.generate = AsyncMock(return_value=result, side_effect=side_effect)
    return client


def _orchestrator(client=None, store=None, user="user-1", ledger=None) -> GenerationOrchestrator:
    return GenerationOrchestrator(
        client=client or _client(),
        store=store or InMemoryArtifactStore(),
        auth=StaticAuthContext(user),
        ledger=ledger,
        engine=ValidationRuleEngine(clock=lambda: TODAY),
        clock=lambda: NOW,
    )


# ---------------------------------------------------------------------------
# Success path
# ---------------------------------------------------------------------------


class TestSuccess:
    @pytest.mark.asyncio
    async def test_generates_and_persists_draft(self):
        store = InMemoryArtifactStore()
        form = valid_form("employment_termination")

        outcome = await _orchestrator(store=store).generate("employment_termination", form)

        assert outcome.status == GenerationStatus.GENERATED
        assert outcome.succeeded
        assert outcome.message == "Document generated successfully"
        assert outcome.result == RESULT

        record = await store.get(outcome.artifact_id)
        assert record.owner_id == "user-1"
        assert record.document_type == "employment_termination"
        assert record.status == ArtifactStatus.DRAFT
        assert record.content == RESULT.content
        assert record.credits_used == 2
        assert record.metadata == form
        assert record.title == "Employment Termination - 2025-03-15"

    @pytest.mark.asyncio
    async def test_store_called_exactly_once_with_form_snapshot(self):
        store = MagicMock()
        store.add = AsyncMock()
        form = valid_form("nda")

        await _orchestrator(store=store).generate(DocumentType.NDA, form)

        store.add.assert_awaited_once()
        record = store.add.call_args[0][0]
        assert record.metadata == form
        assert record.metadata is not form

    @pytest.mark.asyncio
    async def test_later_edits_do_not_reach_metadata(self):
        store = InMemoryArtifactStore()
        form = valid_form("nda")

        outcome = await _orchestrator(store=store).generate("nda", form)
        form["partyAName"] = "Someone Else"

        record = await store.get(outcome.artifact_id)
        assert record.metadata["partyAName"] == "Gulf Horizon Trading LLC"

    @pytest.mark.asyncio
    async def test_custom_title_is_sanitized(self):
        store = InMemoryArtifactStore()
        outcome = await _orchestrator(store=store).generate(
            "nda", valid_form("nda"), title="<b>JV NDA</b>"
        )
        record = await store.get(outcome.artifact_id)
        assert record.title == "JV NDA"

    @pytest.mark.asyncio
    async def test_overlong_title_rejected_before_generation(self):
        client = _client()
        outcome = await _orchestrator(client=client).generate(
            "nda", valid_form("nda"), title="x" * 101
        )
        assert outcome.status == GenerationStatus.REJECTED
        client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_payload_sent_to_client(self):
        client = _client()
        await _orchestrator(client=client).generate(
            "employment_termination",
            valid_form("employment_termination"),
            conversation_context="Discussed redundancy of the sales team",
        )

        payload = client.generate.call_args[0][0]
        assert payload["documentType"] == "employment_termination"
        assert payload["conversationContext"] == "Discussed redundancy of the sales team"
        assert payload["details"]["companyName"] == "Gulf Horizon Trading LLC"
        assert payload["details"]["nonCompeteDuration"] == "N/A - No non-compete restriction"

    @pytest.mark.asyncio
    async def test_credits_reported_to_ledger(self):
        ledger = InMemoryCreditLedger()
        outcome = await _orchestrator(ledger=ledger).generate("nda", valid_form("nda"))

        assert ledger.total_for("user-1") == 2
        assert ledger.entries[0].artifact_id == outcome.artifact_id
        assert ledger.entries[0].document_type == "nda"


# ---------------------------------------------------------------------------
# Guards and failures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.asyncio
    async def test_unauthenticated_redirects_to_login(self):
        client = _client()
        outcome = await _orchestrator(client=client, user=None).generate("nda", valid_form("nda"))

        assert outcome.status == GenerationStatus.UNAUTHENTICATED
        assert outcome.redirect_to == "/auth"
        assert outcome.message == "Please log in to generate documents"
        client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_form_never_reaches_client(self):
        client = _client()
        form = valid_form("nda")
        form["partyAEmail"] = "nope"

        outcome = await _orchestrator(client=client).generate("nda", form)

        assert outcome.status == GenerationStatus.INVALID
        assert [e.field for e in outcome.errors] == ["partyAEmail"]
        client.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_type_is_invalid(self):
        outcome = await _orchestrator().generate("last_will", {})
        assert outcome.status == GenerationStatus.INVALID
        assert not outcome.succeeded

    @pytest.mark.asyncio
    async def test_service_auth_error(self):
        client = _client(side_effect=GenerationAuthError("Please log in to generate documents"))
        outcome = await _orchestrator(client=client).generate("nda", valid_form("nda"))
        assert outcome.status == GenerationStatus.UNAUTHENTICATED
        assert outcome.redirect_to == "/auth"

    @pytest.mark.asyncio
    async def test_service_error_message_surfaces(self):
        store = InMemoryArtifactStore()
        client = _client(
            side_effect=GenerationRateLimitError("Rate limit exceeded. Please try again later.")
        )

        outcome = await _orchestrator(client=client, store=store).generate(
            "nda", valid_form("nda")
        )

        assert outcome.status == GenerationStatus.FAILED
        assert outcome.message == "Rate limit exceeded. Please try again later."
        assert await store.list_for_owner("user-1") == []

    @pytest.mark.asyncio
    async def test_unexpected_error_gets_generic_message(self):
        client = _client(side_effect=RuntimeError("socket exploded"))
        outcome = await _orchestrator(client=client).generate("nda", valid_form("nda"))
        assert outcome.status == GenerationStatus.FAILED
        assert outcome.message == "Failed to generate document. Please try again."

    @pytest.mark.asyncio
    async def test_save_failure_still_returns_content(self):
        store = MagicMock()
        store.add = AsyncMock(side_effect=OSError("disk full"))
        ledger = InMemoryCreditLedger()

        outcome = await _orchestrator(store=store, ledger=ledger).generate(
            "nda", valid_form("nda")
        )

        assert outcome.status == GenerationStatus.GENERATED_NOT_SAVED
        assert outcome.succeeded
        assert outcome.result.content == RESULT.content
        assert outcome.artifact_id is None
        assert ledger.entries[0].artifact_id is None

    @pytest.mark.asyncio
    async def test_ledger_failure_only_logged(self, caplog):
        ledger = MagicMock()
        ledger.record_usage = AsyncMock(side_effect=ConnectionError("ledger offline"))

        with caplog.at_level(logging.WARNING):
            outcome = await _orchestrator(ledger=ledger).generate("nda", valid_form("nda"))

        assert outcome.status == GenerationStatus.GENERATED
        assert "Failed to record credit usage" in caplog.text


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


class TestBuildPayload:
    def test_inactive_groups_use_na_label(self):
        schema = get_schema("demand_letter")
        payload = build_payload(schema, valid_form("demand_letter"))

        details = payload["details"]
        assert details["cashPaymentAddress"] == "N/A - Cash payment not accepted"
        assert details["paymentPortalURL"] == "N/A - Online payment not available"
        assert details["bankName"] == "Emirates NBD"

    def test_strings_are_sanitized(self):
        schema = get_schema("nda")
        form = valid_form("nda")
        form["purpose"] = '<script>alert("x")</script>Joint venture "evaluation"'

        details = build_payload(schema, form)["details"]

        assert details["purpose"] == "alert(x)Joint venture evaluation"
        assert details["confidentialityPeriodYears"] == 3

    def test_no_context_key_without_context(self):
        payload = build_payload(get_schema("nda"), valid_form("nda"))
        assert set(payload) == {"documentType", "details"}

    def test_input_not_mutated(self):
        form = valid_form("demand_letter")
        build_payload(get_schema("demand_letter"), form)
        assert "cashPaymentAddress" not in form


def test_default_title():
    assert default_title(DocumentType.NDA, NOW) == "Non-Disclosure Agreement - 2025-03-15"
