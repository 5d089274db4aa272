from __future__ import annotations

from pathlib import Path

from .config import AppConfig
from .container import Container
from ..core.domain.models import AggregateReport, BatchOutcome, DiscoveryOutcome, SurveyStatus
from ..core.usecases.report import ReportUseCase
from ..infra.linter import resolve_tool_version
from ..infra.result_store import ResultStore


def resolve_linter_version(config: AppConfig) -> AppConfig:
    """Return a config whose ``linter.version`` is set.

    The installed tool version is looked up once, here, and carried in the
    immutable config from then on.

    Raises:
        LinterVersionError: If the version is unset and npm cannot report it
    """
    if config.linter.version:
        return config
    version = resolve_tool_version(config.linter.package, cwd=config.linter.project_dir)
    return config.model_copy(update={"linter": config.linter.model_copy(update={"version": version})})


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def discover(
    *,
    limit: int | None = None,
    github_token: str | None = None,
    config: AppConfig | None = None,
) -> DiscoveryOutcome:
    """Search for marker-file repositories and append new ones to the catalog.

    Args:
        limit: Maximum repositories to take from the search (default from config)
        github_token: GitHub token override (optional, otherwise from config/env)
        config: Optional config for testing. If None, loads from env vars.

    Raises:
        ValueError: If no GitHub token is available or limit is not positive
    """
    if limit is not None and limit < 1:
        raise ValueError("limit must be positive")
    config = config or AppConfig()
    token = github_token or config.github.token
    if not token:
        raise ValueError("GitHub token required via LINT_SURVEY_GITHUB__TOKEN or GITHUB_TOKEN")
    if token != config.github.token:
        config = config.model_copy(update={"github": config.github.model_copy(update={"token": token})})

    container = _create_container(config)
    try:
        uc = container.discover_uc()
        return uc.execute(limit=limit if limit is not None else config.discovery.limit)
    finally:
        container.shutdown_resources()


def lint(*, limit: int | None = None, config: AppConfig | None = None) -> BatchOutcome:
    """Clone and lint every catalogued repository that is not checkpointed yet.

    Args:
        limit: Optional cap on unprocessed repositories attempted in this run
        config: Optional config for testing. If None, loads from env vars.
    """
    config = resolve_linter_version(config or AppConfig())
    container = _create_container(config)
    try:
        uc = container.lint_uc()
        return uc.execute(limit=limit)
    finally:
        container.shutdown_resources()


def report(*, results_path: Path | None = None, config: AppConfig | None = None) -> AggregateReport:
    """Rebuild the aggregate report.

    Args:
        results_path: Results file to aggregate. If None, the results file of
            the installed tool version is used.
        config: Optional config for testing. If None, loads from env vars.
    """
    config = config or AppConfig()
    if results_path is None:
        config = resolve_linter_version(config)

    container = _create_container(config)
    try:
        if results_path is None:
            uc = container.report_uc()
        else:
            uc = ReportUseCase(
                result_store=ResultStore(path=Path(results_path)),
                report_store=container.report_store(),
                aggregator=container.aggregator(),
                logger=container.logger(),
            )
        return uc.execute()
    finally:
        container.shutdown_resources()


def status(*, config: AppConfig | None = None) -> SurveyStatus:
    """Summarise catalog size and lint progress for the installed tool version."""
    config = resolve_linter_version(config or AppConfig())
    container = _create_container(config)
    try:
        uc = container.status_uc()
        return uc.execute(linter_version=config.linter.version)
    finally:
        container.shutdown_resources()

