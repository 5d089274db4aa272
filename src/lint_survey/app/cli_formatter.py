"""CLI output formatting utilities."""
from __future__ import annotations

from ..core.domain.models import AggregateReport, BatchOutcome, DiscoveryOutcome, SurveyStatus


def _format_table(counts: dict[str, int], indent: str = "  ") -> list[str]:
    if not counts:
        return [f"{indent}(none)"]
    width = max(len(str(v)) for v in counts.values())
    return [f"{indent}{str(count).rjust(width)}  {key}" for key, count in counts.items()]


def format_discovery_outcome(outcome: DiscoveryOutcome) -> str:
    lines = [
        "=" * 60,
        "Discovery Complete",
        "=" * 60,
        f"Repositories found:    {outcome.found}",
        f"New to the catalog:    {outcome.new}",
        f"Enriched and added:    {outcome.enriched}",
        f"Metadata unavailable:  {outcome.failed}",
        f"Catalog size:          {outcome.catalog_size}",
    ]
    return "\n".join(lines)


def format_lint_outcome(outcome: BatchOutcome) -> str:
    lines = [
        "=" * 60,
        "Lint Run Complete",
        "=" * 60,
        f"Pending repositories:  {outcome.pending}",
        f"Processed:             {outcome.processed}",
        f"Failed (will retry):   {outcome.failed}",
        f"Super-batches:         {outcome.super_batches}",
    ]
    return "\n".join(lines)


def format_report(report: AggregateReport, *, max_messages: int = 10) -> str:
    """Format an aggregate report for terminal output.

    The deprecated-API table is cut to ``max_messages`` rows; the report file
    always holds the full table.
    """
    lines: list[str] = [
        "=" * 60,
        "Linter Analysis Report",
        "=" * 60,
        f"Total repositories:        {report.total_repositories}",
        f"Repositories with apps:    {report.repositories_with_apps}",
        f"Total apps:                {report.total_apps}",
        f"Total linter errors:       {report.total_linter_errors}",
        f"Repositories with errors:  {report.repositories_with_errors}",
        "",
        "Top rule violations:",
    ]
    lines.extend(_format_table(report.top_rule_violations))

    lines.append("")
    lines.append("Deprecated API messages:")
    shown = dict(list(report.deprecated_api_messages.items())[:max_messages])
    lines.extend(_format_table(shown))
    hidden = len(report.deprecated_api_messages) - len(shown)
    if hidden > 0:
        lines.append(f"  ... {hidden} more")

    return "\n".join(lines)


def format_status(status: SurveyStatus) -> str:
    lines = [
        f"Linter version:   {status.linter_version or '-'}",
        f"Catalog size:     {status.catalog_size}",
        f"Checkpointed:     {status.checkpointed}",
        f"Pending:          {status.pending}",
        f"Result entries:   {status.results}",
    ]
    return "\n".join(lines)
