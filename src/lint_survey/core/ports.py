from __future__ import annotations

from contextlib import AbstractContextManager
from pathlib import Path
from typing import Iterable, Protocol

from .domain.models import (
    AggregateReport,
    LintFileResult,
    RepositoryMetadata,
    RepositoryRef,
    RepositoryResult,
)


class CodeSearchPort(Protocol):
    """Port for the hosted code-search and repository metadata API.

    Both operations are rate limited by the provider; callers space requests.
    """

    def search_code(self, query: str, *, per_page: int, page: int) -> list[RepositoryRef]:
        """Return the parent repositories of one page of code-search hits.

        Raises:
            Exception: Any transport or HTTP error; callers decide how to recover.
        """
        ...

    def get_repository(self, full_name: str) -> RepositoryMetadata:
        """Fetch the full metadata record for ``owner/name``."""
        ...


class CatalogStorePort(Protocol):
    """Port for the append-only repository catalog."""

    def load(self) -> list[RepositoryMetadata]:
        ...

    def append(self, items: Iterable[RepositoryMetadata]) -> int:
        """Append items and return the new catalog size."""
        ...


class CheckpointStorePort(Protocol):
    """Port for the set of fully attempted repository identifiers."""

    def load(self) -> set[str]:
        ...

    def save(self, ids: Iterable[str]) -> None:
        ...


class ResultStorePort(Protocol):
    """Port for accumulated per-repository lint results."""

    def load(self) -> list[RepositoryResult]:
        ...

    def save(self, results: Iterable[RepositoryResult]) -> None:
        ...


class ReportStorePort(Protocol):
    def save(self, report: AggregateReport) -> None:
        ...


class WorkspacePort(Protocol):
    """Port for ephemeral repository working trees."""

    def checkout(self, repo: RepositoryRef) -> AbstractContextManager[Path]:
        """Clone ``repo`` and yield its root; the tree is removed on exit.

        Raises:
            Exception: If cloning fails; nothing is left behind.
        """
        ...

    def find_subprojects(self, root: Path) -> list[Path]:
        ...


class LinterPort(Protocol):
    """Port for the external static-analysis tool."""

    def run(self, path: Path) -> list[LintFileResult] | None:
        """Lint one sub-project; None when the tool produced no usable report."""
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Event names are passed as the message; structured context is passed as
    keyword arguments and lands in the JSON log record.
    """

    def debug(self, message: str, **kwargs) -> None:
        ...

    def info(self, message: str, **kwargs) -> None:
        ...

    def warning(self, message: str, **kwargs) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        ...

    def exception(self, message: str, **kwargs) -> None:
        ...
