from __future__ import annotations

import time
from typing import Callable

from ..domain.models import RepositoryMetadata, RepositoryRef
from ..ports import CodeSearchPort, LoggerPort


class MetadataEnricher:
    """Fetches the full metadata record for a discovered repository.

    Consecutive fetches are spaced by ``delay_seconds``; the first one is not.
    """

    def __init__(
        self,
        *,
        search: CodeSearchPort,
        logger: LoggerPort,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._search = search
        self._logger = logger
        self._delay_seconds = delay_seconds
        self._sleep = sleep
        self._fetches = 0

    def enrich(self, ref: RepositoryRef) -> RepositoryMetadata | None:
        """Return metadata, or None when the fetch fails.

        Deleted, private or otherwise unreachable repositories end up here;
        callers skip them for the current run.
        """
        if self._fetches and self._delay_seconds > 0:
            self._sleep(self._delay_seconds)
        self._fetches += 1

        try:
            metadata = self._search.get_repository(ref.full_name)
        except Exception:
            self._logger.exception("metadata_fetch_failed", repo=ref.full_name, repo_id=ref.id)
            return None

        self._logger.debug("metadata_fetched", repo=ref.full_name, stars=metadata.stars)
        return metadata
