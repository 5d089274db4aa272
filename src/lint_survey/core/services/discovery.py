from __future__ import annotations

import time
from typing import Callable

from ..domain.models import RepositoryRef
from ..ports import CodeSearchPort, LoggerPort


class DiscoveryService:
    """Paginates the code-search query into a capped list of repositories.

    Hits are deduplicated by repository id, since one repository can match
    the query more than once. A failing page ends pagination early and the
    repositories gathered so far are returned; there is no retry.
    """

    def __init__(
        self,
        *,
        search: CodeSearchPort,
        logger: LoggerPort,
        query: str,
        page_size: int = 100,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._search = search
        self._logger = logger
        self._query = query
        self._page_size = page_size
        self._delay_seconds = delay_seconds
        self._sleep = sleep

    def discover(self, limit: int) -> list[RepositoryRef]:
        """Collect up to ``limit`` distinct repositories matching the query."""
        seen: set[int] = set()
        found: list[RepositoryRef] = []
        page = 1

        while len(found) < limit:
            try:
                hits = self._search.search_code(self._query, per_page=self._page_size, page=page)
            except Exception:
                self._logger.exception("search_page_failed", page=page, query=self._query)
                break

            if not hits:
                self._logger.debug("search_exhausted", page=page)
                break

            duplicates = 0
            for ref in hits:
                if ref.id in seen:
                    duplicates += 1
                    continue
                seen.add(ref.id)
                found.append(ref)

            self._logger.info(
                "search_page",
                page=page,
                hits=len(hits),
                duplicates=duplicates,
                total=len(found),
            )
            page += 1

            if len(found) < limit:
                self._sleep(self._delay_seconds)

        result = found[:limit]
        self._logger.info("search_done", query=self._query, found=len(result))
        return result
