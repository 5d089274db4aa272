from __future__ import annotations

from typing import Iterable

from ..domain.models import AggregateReport, RepositoryResult

UNKNOWN_RULE = "unknown"


def rank_counts(counts: dict[str, int]) -> dict[str, int]:
    """Sort a frequency table by descending count.

    The sort is stable, so equal counts keep first-encounter order.
    """
    return dict(sorted(counts.items(), key=lambda item: item[1], reverse=True))


class Aggregator:
    """Reduces accumulated repository results into an AggregateReport.

    Pure: the same results always yield an equal report. Only result objects
    that carry at least one message add their error count and mark their
    repository as having violations.
    """

    def __init__(self, *, deprecated_rule_id: str, top_n: int = 5) -> None:
        self._deprecated_rule_id = deprecated_rule_id
        self._top_n = top_n

    def aggregate(self, results: Iterable[RepositoryResult]) -> AggregateReport:
        total_repositories = 0
        repositories_with_apps = 0
        total_apps = 0
        total_errors = 0
        repos_with_errors: set[str] = set()
        rule_counts: dict[str, int] = {}
        deprecated_counts: dict[str, int] = {}

        for index, repo_result in enumerate(results):
            total_repositories += 1
            if not repo_result.subprojects:
                continue
            repositories_with_apps += 1
            repo_key = repo_result.repository.key if repo_result.repository else f"#{index}"

            for subproject in repo_result.subprojects:
                total_apps += 1
                for file_result in subproject.lint_results:
                    if not file_result.messages:
                        continue
                    total_errors += file_result.error_count
                    repos_with_errors.add(repo_key)

                    for message in file_result.messages:
                        rule = message.rule_id or UNKNOWN_RULE
                        rule_counts[rule] = rule_counts.get(rule, 0) + 1
                        if message.rule_id == self._deprecated_rule_id:
                            deprecated_counts[message.message] = deprecated_counts.get(message.message, 0) + 1

        all_violations = rank_counts(rule_counts)
        return AggregateReport(
            total_repositories=total_repositories,
            repositories_with_apps=repositories_with_apps,
            total_apps=total_apps,
            total_linter_errors=total_errors,
            repositories_with_errors=len(repos_with_errors),
            top_rule_violations=dict(list(all_violations.items())[: self._top_n]),
            all_rule_violations=all_violations,
            deprecated_api_messages=rank_counts(deprecated_counts),
        )
