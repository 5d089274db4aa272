from pathlib import Path
import pytest
from helpers import mark_by_dir


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "lint_survey" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "lint_survey" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "lint_survey" / "app", pytest.mark.e2e)
    mark_by_dir(items, TESTS / "lint_survey" / "shared", pytest.mark.unit)


@pytest.fixture
def survey_home(tmp_path, monkeypatch):
    """Point the app at a private home directory and clear ambient credentials."""
    home = tmp_path / "home"
    monkeypatch.setenv("LINT_SURVEY_DIRECTORIES__HOME", str(home))
    monkeypatch.delenv("LINT_SURVEY_GITHUB__TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("LINT_SURVEY_LINTER__VERSION", raising=False)
    return home
