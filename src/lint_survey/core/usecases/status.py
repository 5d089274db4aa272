from __future__ import annotations

from ..domain.models import SurveyStatus
from ..ports import CatalogStorePort, CheckpointStorePort, ResultStorePort


class StatusUseCase:
    """Use case for summarising progress across the persisted artifacts."""

    def __init__(
        self,
        *,
        catalog_store: CatalogStorePort,
        checkpoint_store: CheckpointStorePort,
        result_store: ResultStorePort,
    ) -> None:
        self._catalog = catalog_store
        self._checkpoints = checkpoint_store
        self._results = result_store

    def execute(self, *, linter_version: str | None = None) -> SurveyStatus:
        catalog = self._catalog.load()
        checkpoint = self._checkpoints.load()
        pending = sum(1 for m in catalog if m.ref.key not in checkpoint)
        return SurveyStatus(
            catalog_size=len(catalog),
            checkpointed=len(checkpoint),
            pending=pending,
            results=len(self._results.load()),
            linter_version=linter_version,
        )
