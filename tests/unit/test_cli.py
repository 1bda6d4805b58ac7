# tests/unit/test_cli.py
"""
CLI unit tests.

Tests each command via typer's CliRunner. Config loading and the store are
patched so commands run against an in-memory store with no filesystem
side effects outside tmp_path.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import yaml
from typer.testing import CliRunner

from letter_wizard.cli import app
from letter_wizard.config import LetterWizardConfig
from letter_wizard.generation.client import GenerationResult, GenerationServiceError
from letter_wizard.models.artifacts import ArtifactRecord, ArtifactStatus, InMemoryArtifactStore

from form_samples import valid_form

runner = CliRunner()

ARTIFACT_ID = "abc123def456"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def form_file(tmp_path):
    def _write(document_type, **changes):
        values = valid_form(document_type)
        values.update(changes)
        path = tmp_path / f"{document_type}.yaml"
        path.write_text(yaml.safe_dump(values, sort_keys=False))
        return path

    return _write


def _record(artifact_id=ARTIFACT_ID, title="Non-Disclosure Agreement - 2025-03-15"):
    return ArtifactRecord(
        artifact_id=artifact_id,
        owner_id="user-1",
        document_type="nda",
        title=title,
        content="MUTUAL NON-DISCLOSURE AGREEMENT",
        status=ArtifactStatus.DRAFT,
        credits_used=1,
        created_at=datetime(2025, 3, 15, tzinfo=timezone.utc),
    )


def _settings():
    return patch("letter_wizard.cli._load_settings", return_value=LetterWizardConfig())


def _store(store):
    return patch("letter_wizard.cli._get_store", new=AsyncMock(return_value=store))


# ---------------------------------------------------------------------------
# Schema commands
# ---------------------------------------------------------------------------


def test_types_lists_every_document_type():
    result = runner.invoke(app, ["types"])
    assert result.exit_code == 0
    assert "demand_letter" in result.output
    assert "Power of Attorney" in result.output


def test_fields_shows_conditions():
    result = runner.invoke(app, ["fields", "nda"])
    assert result.exit_code == 0
    assert "partyAEmail" in result.output
    assert "only when includesNonSolicitation = Yes" in result.output


def test_fields_single_step():
    result = runner.invoke(app, ["fields", "nda", "--step", "1"])
    assert result.exit_code == 0
    assert "agreementType" in result.output
    assert "disputeResolution" not in result.output


def test_fields_unknown_type():
    result = runner.invoke(app, ["fields", "last_will"])
    assert result.exit_code == 1
    assert "unknown document type" in result.output


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


def test_validate_valid_form(form_file):
    path = form_file("employment_termination")
    result = runner.invoke(
        app, ["validate", "employment_termination", str(path), "--today", "2025-03-15"]
    )
    assert result.exit_code == 0, result.output
    assert "Valid." in result.output


def test_validate_reports_errors(form_file):
    path = form_file("employment_contract", hrEmail="not-an-email")
    result = runner.invoke(
        app, ["validate", "employment_contract", str(path), "--today", "2025-03-15"]
    )
    assert result.exit_code == 1
    assert "ERROR    hrEmail: Please enter a valid email address" in result.output
    assert "1 blocking error(s)." in result.output


def test_validate_prints_warnings_but_passes(form_file):
    path = form_file("employment_contract", workingHoursPerDay=10)
    result = runner.invoke(
        app, ["validate", "employment_contract", str(path), "--today", "2025-03-15"]
    )
    assert result.exit_code == 0
    assert "WARNING  workingHoursPerDay:" in result.output


def test_validate_rejects_non_mapping(tmp_path):
    path = tmp_path / "form.yaml"
    path.write_text("- just\n- a list\n")
    result = runner.invoke(app, ["validate", "nda", str(path)])
    assert result.exit_code == 1
    assert "mapping" in result.output


def test_validate_bad_today(form_file):
    result = runner.invoke(app, ["validate", "nda", str(form_file("nda")), "--today", "soon"])
    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


@patch("letter_wizard.generation.HttpGenerationClient")
def test_generate_prints_and_saves(mock_client_cls, form_file):
    client = MagicMock()
    client.generate = AsyncMock(
        return_value=GenerationResult(content="MUTUAL NON-DISCLOSURE AGREEMENT", credits_used=1)
    )
    mock_client_cls.return_value = client
    store = InMemoryArtifactStore()

    with _settings(), _store(store):
        result = runner.invoke(
            app, ["generate", "nda", str(form_file("nda")), "--owner", "user-1"]
        )

    assert result.exit_code == 0, result.output
    assert "MUTUAL NON-DISCLOSURE AGREEMENT" in result.output
    assert "Saved artifact" in result.output
    payload = client.generate.call_args[0][0]
    assert payload["documentType"] == "nda"


@patch("letter_wizard.generation.HttpGenerationClient")
def test_generate_invalid_form(mock_client_cls, form_file):
    with _settings(), _store(InMemoryArtifactStore()):
        result = runner.invoke(
            app,
            ["generate", "nda", str(form_file("nda", partyAEmail="x")), "--owner", "user-1"],
        )

    assert result.exit_code == 1
    assert "ERROR    partyAEmail" in result.output
    mock_client_cls.return_value.generate.assert_not_called()


@patch("letter_wizard.generation.HttpGenerationClient")
def test_generate_service_failure(mock_client_cls, form_file):
    client = MagicMock()
    client.generate = AsyncMock(
        side_effect=GenerationServiceError("Generation service error (HTTP 500)")
    )
    mock_client_cls.return_value = client

    with _settings(), _store(InMemoryArtifactStore()):
        result = runner.invoke(
            app, ["generate", "nda", str(form_file("nda")), "--owner", "user-1"]
        )

    assert result.exit_code == 1
    assert "HTTP 500" in result.output


# ---------------------------------------------------------------------------
# list / show
# ---------------------------------------------------------------------------


def test_list_empty():
    with _settings(), _store(InMemoryArtifactStore()):
        result = runner.invoke(app, ["list", "--owner", "user-1"])
    assert result.exit_code == 0
    assert "No documents found." in result.output


def test_list_shows_artifacts():
    store = MagicMock()
    store.list_for_owner = AsyncMock(return_value=[_record()])
    store.close = AsyncMock()

    with _settings(), _store(store):
        result = runner.invoke(app, ["list", "--owner", "user-1"])

    assert result.exit_code == 0
    assert ARTIFACT_ID in result.output
    assert "Non-Disclosure Agreement - 2025-03-15" in result.output
    store.close.assert_awaited_once()


def test_show_prints_content():
    store = MagicMock()
    store.get = AsyncMock(return_value=_record())
    store.close = AsyncMock()

    with _settings(), _store(store):
        result = runner.invoke(app, ["show", ARTIFACT_ID])

    assert result.exit_code == 0
    assert "MUTUAL NON-DISCLOSURE AGREEMENT" in result.output
    assert "Status:  draft" in result.output


def test_show_missing():
    store = MagicMock()
    store.get = AsyncMock(return_value=None)
    store.close = AsyncMock()

    with _settings(), _store(store):
        result = runner.invoke(app, ["show", ARTIFACT_ID])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_show_rejects_bad_id():
    result = runner.invoke(app, ["show", "../etc"])
    assert result.exit_code == 1
    assert "Invalid artifact ID" in result.output
