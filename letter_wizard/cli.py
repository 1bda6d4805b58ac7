# letter_wizard/cli.py
"""
CLI interface for letter-wizard.

Thin presentation layer over the registry, the validation engine and the
generation orchestrator.
"""

import asyncio
from pathlib import Path
from typing import Any

import typer
import yaml

app = typer.Typer(
    name="letter-wizard",
    help="Validate and generate UAE legal letters from structured form data.",
    no_args_is_help=True,
)


def _run(coro):
    """Run async function from sync CLI context."""
    return asyncio.run(coro)


def _load_settings():
    """Load config and configure logging from it."""
    from letter_wizard.config import load_config
    from letter_wizard.logging_config import configure_logging

    config = load_config()
    configure_logging(config.output.verbosity)
    return config


async def _get_store(config):
    """Open the SQLite artifact store named in config."""
    from letter_wizard.models.sqlite_store import SQLiteArtifactStore

    db_path = Path(config.storage.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    store = SQLiteArtifactStore(str(db_path))
    await store.initialize()
    return store


def _require_type(document_type: str):
    from letter_wizard.models.fields import DocumentType

    parsed = DocumentType.parse(document_type)
    if parsed is None:
        valid = ", ".join(t.value for t in DocumentType)
        typer.echo(f"Error: unknown document type '{document_type}'. Choose one of: {valid}", err=True)
        raise typer.Exit(1)
    return parsed


def _load_form(path: Path) -> dict[str, Any]:
    """Read a YAML or JSON mapping of field values."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        typer.echo(f"Error: could not read {path}: {e}", err=True)
        raise typer.Exit(1)

    if data is None:
        return {}
    if not isinstance(data, dict):
        typer.echo(f"Error: {path} must contain a mapping of field names to values", err=True)
        raise typer.Exit(1)
    return {str(key): value for key, value in data.items()}


def _parse_today(value: str | None):
    if value is None:
        return None
    from letter_wizard.models.values import parse_date

    parsed = parse_date(value)
    if parsed is None:
        raise typer.BadParameter(f"'{value}' is not a date (use YYYY-MM-DD)")
    return parsed


def _print_issues(result) -> None:
    for error in result.errors:
        prefix = f"{error.field}: " if error.field else ""
        typer.echo(typer.style(f"ERROR    {prefix}{error.message}", fg=typer.colors.RED))
    for warning in result.warnings:
        prefix = f"{warning.field}: " if warning.field else ""
        typer.echo(typer.style(f"WARNING  {prefix}{warning.message}", fg=typer.colors.YELLOW))


@app.command("types")
def list_types():
    """List supported document types."""
    from rich.console import Console
    from rich.table import Table

    from letter_wizard.models.fields import DocumentType
    from letter_wizard.schemas.registry import get_field_count

    table = Table(show_edge=False, header_style="bold")
    table.add_column("TYPE", no_wrap=True)
    table.add_column("FIELDS", justify="right")
    table.add_column("LABEL")
    for document_type in DocumentType:
        table.add_row(
            document_type.value, str(get_field_count(document_type)), document_type.label
        )

    Console().print(table)


@app.command()
def fields(
    document_type: str = typer.Argument(..., help="Document type, e.g. demand_letter"),
    step: int | None = typer.Option(None, "--step", "-s", min=1, max=4, help="Only fields on this wizard step"),
):
    """Show the fields of a document type."""
    from letter_wizard.schemas.registry import get_fields, get_schema
    from letter_wizard.wizard.machine import fields_per_step

    parsed = _require_type(document_type)
    schema = get_schema(parsed)
    definitions = get_fields(parsed)

    if step is not None:
        per_step = fields_per_step(len(definitions))
        definitions = definitions[(step - 1) * per_step : step * per_step]

    typer.echo(f"{'FIELD':<30} {'KIND':<9} {'REQ':<4} LABEL")
    typer.echo("-" * 80)
    for definition in definitions:
        group = schema.group_for(definition.name)
        if group is not None:
            required = "*" if definition.name in group.required_fields else "no"
        else:
            required = "yes" if definition.required else "no"
        typer.echo(
            f"{definition.name:<30} {definition.kind.value:<9} {required:<4} {definition.label}"
        )
        if group is not None:
            typer.echo(
                typer.style(
                    f"{'':30} ↳ only when {group.trigger_field} = {group.trigger_value}",
                    fg=typer.colors.BRIGHT_BLACK,
                )
            )


@app.command()
def validate(
    document_type: str = typer.Argument(..., help="Document type"),
    form_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML or JSON form values"),
    today: str | None = typer.Option(None, "--today", help="Reference date for date checks (YYYY-MM-DD)"),
):
    """Validate form values. Exits 1 if there are blocking errors."""
    from letter_wizard.validation.engine import ValidationRuleEngine

    parsed = _require_type(document_type)
    values = _load_form(form_file)
    reference = _parse_today(today)

    result = ValidationRuleEngine().validate(parsed, values, today=reference)
    _print_issues(result)

    if not result.is_valid:
        typer.echo(f"{len(result.errors)} blocking error(s).", err=True)
        raise typer.Exit(1)
    typer.echo(typer.style("Valid.", fg=typer.colors.GREEN))


@app.command()
def generate(
    document_type: str = typer.Argument(..., help="Document type"),
    form_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML or JSON form values"),
    owner: str = typer.Option(..., "--owner", help="Owner (user) ID for the artifact"),
    title: str | None = typer.Option(None, "--title", help="Artifact title (max 100 characters)"),
):
    """Validate, generate and save a document."""
    from letter_wizard.generation import (
        GenerationOrchestrator,
        GenerationStatus,
        HttpGenerationClient,
        StaticAuthContext,
    )

    parsed = _require_type(document_type)
    values = _load_form(form_file)
    context = values.pop("conversationContext", None)
    config = _load_settings()

    async def _generate():
        store = await _get_store(config)
        try:
            orchestrator = GenerationOrchestrator(
                client=HttpGenerationClient(
                    endpoint=config.generation.endpoint,
                    api_key=config.generation.api_key,
                    timeout=config.generation.timeout,
                ),
                store=store,
                auth=StaticAuthContext(owner),
                login_path=config.generation.login_path,
            )
            return await orchestrator.generate(
                parsed, values, title=title, conversation_context=context
            )
        finally:
            await store.close()

    outcome = _run(_generate())

    if outcome.status == GenerationStatus.INVALID:
        for error in outcome.errors:
            prefix = f"{error.field}: " if error.field else ""
            typer.echo(typer.style(f"ERROR    {prefix}{error.message}", fg=typer.colors.RED))

    if outcome.result is not None:
        typer.echo(outcome.result.content)

    if outcome.status != GenerationStatus.GENERATED:
        typer.echo(f"Error: {outcome.message}", err=True)
        raise typer.Exit(1)

    typer.echo(
        f"Saved artifact {outcome.artifact_id} ({outcome.result.credits_used} credits used)",
        err=True,
    )


@app.command("list")
def list_artifacts(
    owner: str = typer.Option(..., "--owner", help="Owner (user) ID"),
):
    """List an owner's generated documents."""
    config = _load_settings()

    async def _list():
        store = await _get_store(config)
        try:
            return await store.list_for_owner(owner)
        finally:
            await store.close()

    records = _run(_list())

    if not records:
        typer.echo("No documents found.")
        return

    typer.echo(f"{'ID':<14} {'STATUS':<9} {'CREATED':<11} TITLE")
    typer.echo("-" * 80)
    for record in records:
        typer.echo(
            f"{record.artifact_id:<14} {record.status.value:<9} "
            f"{record.created_at.date().isoformat():<11} {record.title}"
        )


@app.command()
def show(artifact_id: str = typer.Argument(..., help="Artifact ID")):
    """Print a generated document."""
    from letter_wizard.validation.sanitize import sanitize_artifact_id

    try:
        artifact_id = sanitize_artifact_id(artifact_id)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    config = _load_settings()

    async def _show():
        store = await _get_store(config)
        try:
            return await store.get(artifact_id)
        finally:
            await store.close()

    record = _run(_show())
    if record is None:
        typer.echo(f"Artifact '{artifact_id}' not found.", err=True)
        raise typer.Exit(1)

    typer.echo(f"Title:   {record.title}")
    typer.echo(f"Type:    {record.document_type}")
    typer.echo(f"Status:  {record.status.value}")
    typer.echo(f"Credits: {record.credits_used}")
    typer.echo("")
    typer.echo(record.content)
