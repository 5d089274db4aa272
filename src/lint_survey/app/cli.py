from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv

from .config import AppConfig, RuntimeConfig
from .cli_formatter import (
    format_discovery_outcome,
    format_lint_outcome,
    format_report,
    format_status,
)
from . import main
from ..core.domain.exceptions import LinterVersionError, StateFileError

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _build_config(command: str, log_level: str) -> AppConfig:
    """Load config from the environment and attach per-run settings."""
    config = AppConfig()
    run_name = f"{command}-{datetime.now().strftime('%Y%m%d-%H%M%S')}"
    return config.model_copy(update={
        "runtime": RuntimeConfig(run_name=run_name),
        "logging": config.logging.model_copy(update={"console_output": True, "level": log_level.upper()}),
    })


def _fatal(e: Exception) -> None:
    typer.echo(f"Error: {e}", err=True)
    raise typer.Exit(code=1)


@app.command()
def discover(
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Max repositories to take from the search"),
    github_token: str | None = typer.Option(
        None, "--github-token", envvar="GITHUB_TOKEN", help="GitHub token (falls back to LINT_SURVEY_GITHUB__TOKEN)"
    ),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
):
    """Search GitHub for marker-file repositories and extend the catalog."""
    config = _build_config("discover", log_level)
    typer.echo(f"Searching: {config.discovery.query}")

    try:
        outcome = main.discover(limit=limit, github_token=github_token, config=config)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    except StateFileError as e:
        _fatal(e)

    typer.echo(format_discovery_outcome(outcome))


@app.command()
def lint(
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Max unprocessed repositories to attempt"),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
):
    """Clone and lint every catalogued repository not yet checkpointed.

    Progress is saved after every super-batch; rerunning resumes where the
    previous run stopped. Repositories that failed are retried next time.
    """
    config = _build_config("lint", log_level)

    try:
        config = main.resolve_linter_version(config)
        typer.echo(f"Using {config.linter.package} version: {config.linter.version}")
        outcome = main.lint(limit=limit, config=config)
    except (LinterVersionError, StateFileError) as e:
        _fatal(e)

    typer.echo(format_lint_outcome(outcome))


@app.command()
def report(
    results: Path | None = typer.Option(
        None, "--results", "-r", help="Results file to aggregate (default: file for the installed linter version)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output report as JSON"),
):
    """Aggregate lint results into the frequency report."""
    config = AppConfig()

    try:
        result = main.report(results_path=results, config=config)
    except (LinterVersionError, StateFileError) as e:
        _fatal(e)

    if json_output:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_report(result))


@app.command()
def status(
    json_output: bool = typer.Option(False, "--json", help="Output status as JSON"),
):
    """Show catalog size and lint progress."""
    config = AppConfig()

    try:
        result = main.status(config=config)
    except (LinterVersionError, StateFileError) as e:
        _fatal(e)

    if json_output:
        typer.echo(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_status(result))


if __name__ == "__main__":
    app()
