from __future__ import annotations

from ..domain.models import BatchOutcome
from ..ports import CatalogStorePort, LoggerPort
from ..services import BatchScheduler


class LintUseCase:
    """Use case for linting every catalogued repository not yet checkpointed.

    Thin orchestration layer that feeds the catalog to BatchScheduler.
    """

    def __init__(
        self,
        *,
        catalog_store: CatalogStorePort,
        scheduler: BatchScheduler,
        logger: LoggerPort,
    ) -> None:
        self._catalog = catalog_store
        self._scheduler = scheduler
        self._logger = logger

    def execute(self, *, limit: int | None = None) -> BatchOutcome:
        """Execute the lint pipeline.

        Args:
            limit: Optional cap on how many unprocessed repositories to attempt

        Returns:
            Counts for this run
        """
        repositories = [m.ref for m in self._catalog.load()]
        self._logger.info("lint_run_started", catalog_size=len(repositories), limit=limit)

        outcome = self._scheduler.run(repositories, limit=limit)
        self._logger.info(
            "lint_run_finished",
            pending=outcome.pending,
            processed=outcome.processed,
            failed=outcome.failed,
        )
        return outcome
