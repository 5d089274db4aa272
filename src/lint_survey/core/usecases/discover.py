from __future__ import annotations

from ..domain.models import DiscoveryOutcome, RepositoryMetadata
from ..ports import CatalogStorePort, LoggerPort
from ..services import DiscoveryService, MetadataEnricher


class DiscoverUseCase:
    """Use case for growing the repository catalog.

    Business logic: search, skip repositories the catalog already knows,
    enrich the rest, append whatever enriched successfully.
    """

    def __init__(
        self,
        *,
        discovery: DiscoveryService,
        enricher: MetadataEnricher,
        catalog_store: CatalogStorePort,
        logger: LoggerPort,
    ) -> None:
        self._discovery = discovery
        self._enricher = enricher
        self._catalog = catalog_store
        self._logger = logger

    def execute(self, *, limit: int) -> DiscoveryOutcome:
        """Execute the use case.

        Args:
            limit: Maximum number of repositories to take from the search

        Returns:
            Counts for this run plus the resulting catalog size
        """
        refs = self._discovery.discover(limit)
        known = {m.id for m in self._catalog.load()}

        new = 0
        failed = 0
        enriched: list[RepositoryMetadata] = []
        for ref in refs:
            if ref.id in known:
                self._logger.debug("catalog_skip_existing", repo=ref.full_name, repo_id=ref.id)
                continue
            new += 1
            known.add(ref.id)

            self._logger.info("metadata_fetch", repo=ref.full_name)
            metadata = self._enricher.enrich(ref)
            if metadata is None:
                failed += 1
                continue
            enriched.append(metadata)

        catalog_size = self._catalog.append(enriched)
        self._logger.info(
            "catalog_updated",
            found=len(refs),
            new=new,
            enriched=len(enriched),
            failed=failed,
            catalog_size=catalog_size,
        )
        return DiscoveryOutcome(
            found=len(refs),
            new=new,
            enriched=len(enriched),
            failed=failed,
            catalog_size=catalog_size,
        )
