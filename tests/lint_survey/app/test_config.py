"""Tests for Pydantic BaseSettings configuration."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from lint_survey.app.config import (
    AppConfig,
    BatchConfig,
    DirectoryConfig,
    DiscoveryConfig,
    LinterConfig,
    ReportConfig,
)


def test_directory_config_computed_paths(tmp_path):
    """Computed directories live under home and are created on access."""
    config = DirectoryConfig(home=tmp_path)

    assert config.data_dir == tmp_path / "data"
    assert config.workspace_dir == tmp_path / "workspaces"
    assert config.logs_dir == tmp_path / "logs"
    assert config.data_dir.is_dir()
    assert config.workspace_dir.is_dir()
    assert config.logs_dir.is_dir()


def test_section_defaults():
    assert DiscoveryConfig().query == "filename:ui5.yaml path:/"
    assert DiscoveryConfig().page_size == 100
    assert DiscoveryConfig().page_delay_seconds == 1.0
    assert DiscoveryConfig().metadata_delay_seconds == 1.0
    assert LinterConfig().command == ["npx", "@ui5/linter", "--format", "json"]
    assert LinterConfig().package == "@ui5/linter"
    assert LinterConfig().version is None
    assert BatchConfig().batch_size == 20
    assert BatchConfig().num_batches == 5
    assert BatchConfig().checkpoint_every == 1
    assert ReportConfig().deprecated_rule_id == "no-deprecated-api"
    assert ReportConfig().top_n == 5


def test_page_size_is_capped_at_api_maximum():
    with pytest.raises(ValidationError):
        DiscoveryConfig(page_size=101)


def test_app_config_from_env(survey_home, monkeypatch):
    """AppConfig reads nested sections from LINT_SURVEY_ variables."""
    monkeypatch.setenv("LINT_SURVEY_GITHUB__TOKEN", "test-token")
    monkeypatch.setenv("LINT_SURVEY_LINTER__VERSION", "1.2.0")
    monkeypatch.setenv("LINT_SURVEY_BATCH__NUM_BATCHES", "3")
    monkeypatch.setenv("LINT_SURVEY_REPORT__TOP_N", "10")

    config = AppConfig()

    assert config.directories.home == Path(survey_home)
    assert config.github.token == "test-token"
    assert config.linter.version == "1.2.0"
    assert config.batch.num_batches == 3
    assert config.report.top_n == 10


def test_unprefixed_env_is_ignored(survey_home, monkeypatch):
    monkeypatch.setenv("VERSION", "9.9.9")
    monkeypatch.setenv("TOKEN", "leaked")

    config = AppConfig()

    assert config.linter.version is None
    assert config.github.token is None


def test_app_config_explicit_sections(tmp_path):
    config = AppConfig(
        directories=DirectoryConfig(home=tmp_path),
        linter=LinterConfig(version="2.0.0"),
    )

    assert config.directories.data_dir == tmp_path / "data"
    assert config.linter.version == "2.0.0"


def test_app_config_is_frozen(survey_home):
    config = AppConfig()

    with pytest.raises(ValidationError):
        config.linter = LinterConfig(version="x")


def test_app_config_rejects_unknown_fields(survey_home):
    with pytest.raises(ValidationError):
        AppConfig(unknown_section={})
