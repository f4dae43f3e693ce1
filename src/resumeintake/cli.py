"""Typer CLI entrypoint for candidate filtering."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer

import yaml
from pydantic import ValidationError

from .container import create_container
from .core.experience import calculate_total_experience
from .logging import configure_logging
from .pipeline import CandidateLoadError, CandidateLoader, resolve_as_of
from .schemas.config import load_config

app = typer.Typer(help="Resume intake candidate filtering CLI.")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_name="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


def _reference_date(as_of: str | None):
    try:
        return resolve_as_of(as_of)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="as_of") from exc


@app.command("filter")
def filter_command(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    criteria: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="Filter criteria JSON path."
    ),
    as_of: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM or ISO) for ongoing jobs."),
    summary: bool = typer.Option(False, "--summary", help="Write export rows instead of full records."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Filter candidates against recruiter criteria."""
    settings = _load_settings(config)
    _reference_date(as_of)

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()

    try:
        results = pipeline.run(
            candidates_path=candidates,
            criteria_path=criteria,
            output_path=output,
            as_of=as_of,
            summary=summary,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="criteria") from exc
    typer.echo(f"Matched {len(results)} candidates. Results saved to {output}.")


@app.command("experience")
def experience_command(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    as_of: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM or ISO) for ongoing jobs."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Print each candidate's total experience."""
    now = _reference_date(as_of)
    configure_logging(log_level)

    try:
        records = CandidateLoader().load(candidates)
    except CandidateLoadError as exc:
        for error in exc.errors:
            typer.echo(error, err=True)
        records = exc.partial

    for record in records:
        label = record.full_name or record.id
        typer.echo(f"{label}\t{calculate_total_experience(record, now=now)}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
