"""Tests for CLI output formatting."""
from lint_survey.app.cli_formatter import (
    format_discovery_outcome,
    format_lint_outcome,
    format_report,
    format_status,
)
from lint_survey.core.domain.models import AggregateReport, BatchOutcome, DiscoveryOutcome, SurveyStatus


def _report(deprecated):
    return AggregateReport(
        total_repositories=3,
        repositories_with_apps=2,
        total_apps=4,
        total_linter_errors=17,
        repositories_with_errors=2,
        top_rule_violations={"no-deprecated-api": 12, "no-globals": 5},
        all_rule_violations={"no-deprecated-api": 12, "no-globals": 5},
        deprecated_api_messages=deprecated,
    )


def test_format_report_lists_totals_and_rules():
    text = format_report(_report({"Use of deprecated API 'sap.ui.getCore'": 12}))

    assert "Total repositories:        3" in text
    assert "Total linter errors:       17" in text
    assert "12  no-deprecated-api" in text
    assert " 5  no-globals" in text
    assert "sap.ui.getCore" in text


def test_format_report_truncates_deprecated_messages():
    deprecated = {f"message {i}": 20 - i for i in range(15)}

    text = format_report(_report(deprecated), max_messages=10)

    assert "message 9" in text
    assert "message 10" not in text
    assert "... 5 more" in text


def test_format_report_empty_tables():
    text = format_report(AggregateReport(0, 0, 0, 0, 0, {}, {}, {}))

    assert text.count("(none)") == 2


def test_format_discovery_and_lint_outcomes():
    discovery = format_discovery_outcome(DiscoveryOutcome(found=5, new=3, enriched=2, failed=1, catalog_size=40))
    lint = format_lint_outcome(BatchOutcome(pending=10, processed=8, failed=2, super_batches=1))

    assert "Catalog size:          40" in discovery
    assert "Failed (will retry):   2" in lint


def test_format_status_without_version():
    text = format_status(SurveyStatus(catalog_size=2, checkpointed=1, pending=1, results=1))

    assert "Linter version:   -" in text
    assert "Pending:          1" in text
