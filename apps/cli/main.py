"""Typer CLI entrypoint for maskfield."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from apps.cli.format_human import render_field_types, render_form_report, render_snapshot
from core.config.settings import EngineSettings, load_settings
from core.fields.registry import create_field_type, list_supported_field_types, parse_field_type
from core.forms.loader import load_form
from core.forms.runner import run_form
from core.orchestrator.session import FieldSession
from core.templates.engine import validate_template_configuration
from core.utils.errors import FieldTypeConfigError, FormDefinitionError, UnknownFieldTypeError

app = typer.Typer(help="Masked field formatting and validation CLI", rich_markup_mode=None)

# Sample parameters used when listing parameterized kinds.
_LISTING_PARAMS: dict[str, tuple[int, ...]] = {"dataLength": (8,), "age": (18, 99)}


@app.callback()
def cli_callback() -> None:
    """CLI root callback to keep every command an explicit subcommand."""


def _load_settings_or_exit(path: Path | None) -> EngineSettings:
    try:
        return load_settings(path)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=1) from exc


@app.command("types")
def types_command() -> None:
    """List supported field types."""

    rows = [
        (name, create_field_type(name, *_LISTING_PARAMS.get(name, ())))
        for name in list_supported_field_types()
    ]
    typer.echo(render_field_types(rows))


@app.command("format")
def format_command(
    field_type: Annotated[str, typer.Argument(help="Type expression, e.g. phone or age(18,65).")],
    text: Annotated[str, typer.Argument(help="Raw input text.")],
    final: Annotated[
        bool, typer.Option("--final", help="Also run the focus-loss finalization.")
    ] = False,
    required: Annotated[bool, typer.Option("--required")] = False,
    settings_path: Annotated[
        Path | None, typer.Option("--settings", exists=True, dir_okay=False, file_okay=True)
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Print the snapshot as JSON.")] = False,
) -> None:
    """Format TEXT as it would appear while typing (or after focus loss with --final)."""

    settings = _load_settings_or_exit(settings_path)
    try:
        resolved = parse_field_type(field_type, settings=settings)
    except (UnknownFieldTypeError, FieldTypeConfigError) as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=1) from exc

    session = FieldSession(resolved, required=required, settings=settings)
    session.set_focus(True)
    session.set_text(text)
    if final:
        session.set_focus(False)
    snapshot = session.snapshot()
    session.close()

    if output_json:
        typer.echo(json.dumps(snapshot.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        typer.echo(render_snapshot(snapshot))
    raise typer.Exit(code=1 if session.state.is_invalid else 0)


@app.command("check-template")
def check_template_command(
    template: Annotated[str, typer.Argument()],
    placeholders: Annotated[str, typer.Argument()],
) -> None:
    """Check a template/placeholder pair for structural problems."""

    check = validate_template_configuration(template, placeholders)
    if check.is_valid:
        typer.echo("OK")
        return
    typer.echo(f"ERROR: {check.error}")
    raise typer.Exit(code=1)


@app.command("validate-form")
def validate_form_command(
    form_path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, file_okay=True)],
    values: Annotated[
        Path | None,
        typer.Option(
            "--values",
            exists=True,
            dir_okay=False,
            file_okay=True,
            help="JSON object mapping field names to raw input.",
        ),
    ] = None,
    report: Annotated[str, typer.Option("--report")] = "human",
    settings_path: Annotated[
        Path | None, typer.Option("--settings", exists=True, dir_okay=False, file_okay=True)
    ] = None,
) -> None:
    """Run every field of a form and report whether it can be submitted."""

    normalized_report = report.lower().strip()
    if normalized_report not in {"human", "json"}:
        typer.echo("ERROR: --report must be one of: human, json.")
        raise typer.Exit(code=1)

    settings = _load_settings_or_exit(settings_path)
    try:
        form = load_form(form_path, settings=settings)
        field_values = _read_values(values) if values is not None else None
        form_report = run_form(form, field_values, settings)
    except FormDefinitionError as exc:
        typer.echo(f"ERROR: {exc}")
        raise typer.Exit(code=1) from exc

    if normalized_report == "json":
        typer.echo(json.dumps(form_report.model_dump(mode="json"), ensure_ascii=False, indent=2))
    else:
        typer.echo(render_form_report(form_report))
    raise typer.Exit(code=0 if form_report.submittable else 1)


def _read_values(path: Path) -> dict[str, str]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FormDefinitionError(f"Invalid JSON in values file: {path}", path=path) from exc
    if not isinstance(raw, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in raw.items()
    ):
        raise FormDefinitionError(
            f"Values file must map field names to strings: {path}", path=path
        )
    return raw


def main() -> None:
    app()


if __name__ == "__main__":
    main()
