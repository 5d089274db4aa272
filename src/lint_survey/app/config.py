from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs
from pydantic import BaseModel, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_NAME = "lint_survey"


def _default_home() -> Path:
    """Get default home directory using platformdirs."""
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir)


class DirectoryConfig(BaseModel):
    """Directory configuration with computed paths."""

    home: Path = Field(
        default_factory=_default_home,
        description="Base directory for all lint_survey data",
    )

    @computed_field
    @property
    def data_dir(self) -> Path:
        """Catalog, checkpoint, results and report files."""
        path = self.home / "data"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def workspace_dir(self) -> Path:
        """Ephemeral clones; each repository directory is removed after linting."""
        path = self.home / "workspaces"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @computed_field
    @property
    def logs_dir(self) -> Path:
        """JSONL run logs."""
        path = self.home / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


class GitHubConfig(BaseModel):
    """GitHub configuration."""

    token: str | None = Field(
        default=None,
        description="GitHub personal access token (code search requires one)",
    )

    api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL",
    )

    timeout_seconds: float = Field(
        default=30.0,
        description="Per-request timeout",
    )


class DiscoveryConfig(BaseModel):
    """Code-search discovery settings."""

    query: str = Field(
        default="filename:ui5.yaml path:/",
        description="Code-search query selecting repositories with the marker file at their root",
    )

    page_size: int = Field(default=100, ge=1, le=100)

    limit: int = Field(
        default=100_000,
        ge=1,
        description="Maximum number of distinct repositories to take from the search",
    )

    page_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pause between search pages to stay under the rate limit",
    )

    metadata_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pause between repository metadata fetches",
    )


class LayoutConfig(BaseModel):
    """Structural test for sub-project directories."""

    marker_file: str = "ui5.yaml"
    source_dir: str = "webapp"
    manifest_file: str = "manifest.json"


class LinterConfig(BaseModel):
    """External lint tool settings."""

    command: list[str] = Field(
        default_factory=lambda: ["npx", "@ui5/linter", "--format", "json"],
        description="Command run inside each sub-project; must print a JSON report on stdout",
    )

    package: str = Field(
        default="@ui5/linter",
        description="npm package whose installed version keys the checkpoint and results files",
    )

    project_dir: Path | None = Field(
        default=None,
        description="Directory in which `npm list` resolves the package (default: cwd)",
    )

    version: str | None = Field(
        default=None,
        description="Explicit tool version; skips the npm lookup when set",
    )


class BatchConfig(BaseModel):
    """Lint scheduling settings."""

    batch_size: int = Field(default=20, ge=1)
    num_batches: int = Field(default=5, ge=1, description="Batches run concurrently per super-batch")
    checkpoint_every: int = Field(default=1, ge=1, description="Super-batches between progress saves")
    clone_depth: int | None = Field(default=None, ge=1, description="Shallow clone depth (None = full)")


class ReportConfig(BaseModel):
    """Aggregate report settings."""

    deprecated_rule_id: str = "no-deprecated-api"
    top_n: int = Field(default=5, ge=1)


class LoggingConfig(BaseModel):
    logger_name: str = "lint_survey"
    level: str = "INFO"
    console_output: bool = False


class RuntimeConfig(BaseModel):
    """Per-invocation values set by the entry point rather than the environment."""

    run_name: str | None = Field(
        default=None,
        description="Stem of the JSONL log file for this run (no file log when unset)",
    )


class AppConfig(BaseSettings):
    """Root application configuration.

    All configuration is loaded from environment variables with LINT_SURVEY_ prefix.
    Use double underscore for nested config: LINT_SURVEY_GITHUB__TOKEN

    Example env vars:
        # Required for discovery
        export LINT_SURVEY_GITHUB__TOKEN=ghp_xxxxxxxxxxxxx

        # Optional (with defaults)
        export LINT_SURVEY_DIRECTORIES__HOME=/custom/path
        export LINT_SURVEY_LINTER__VERSION=1.2.0
        export LINT_SURVEY_BATCH__NUM_BATCHES=5
        export LINT_SURVEY_REPORT__DEPRECATED_RULE_ID=no-deprecated-api
    """

    model_config = SettingsConfigDict(
        env_prefix="LINT_SURVEY_",
        env_nested_delimiter="__",
        frozen=True,
        extra="forbid",
    )

    directories: DirectoryConfig = Field(default_factory=DirectoryConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    linter: LinterConfig = Field(default_factory=LinterConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
