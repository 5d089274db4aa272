from __future__ import annotations

from ..domain.models import AggregateReport
from ..ports import LoggerPort, ReportStorePort, ResultStorePort
from ..services import Aggregator


class ReportUseCase:
    """Use case for rebuilding the aggregate report from a results file."""

    def __init__(
        self,
        *,
        result_store: ResultStorePort,
        report_store: ReportStorePort,
        aggregator: Aggregator,
        logger: LoggerPort,
    ) -> None:
        self._results = result_store
        self._reports = report_store
        self._aggregator = aggregator
        self._logger = logger

    def execute(self) -> AggregateReport:
        results = self._results.load()
        report = self._aggregator.aggregate(results)
        self._reports.save(report)
        self._logger.info(
            "report_written",
            repositories=report.total_repositories,
            apps=report.total_apps,
            errors=report.total_linter_errors,
        )
        return report
