from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..core.domain.exceptions import StateFileError
from ..core.domain.models import AggregateReport, RepositoryResult
from .json_file import read_json, write_json


class ResultStore:
    """JSON array of per-repository lint results.

    Saving writes exactly what it is given; merging old and new results is
    the caller's job (entries are concatenated, never deduplicated).
    """

    def __init__(self, *, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[RepositoryResult]:
        data = read_json(self._path, list)
        if not isinstance(data, list):
            raise StateFileError(self._path, "expected a JSON array")
        results = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                continue
            try:
                results.append(RepositoryResult.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                raise StateFileError(self._path, f"malformed result entry at index {index}: {e!r}") from e
        return results

    def save(self, results: Iterable[RepositoryResult]) -> None:
        write_json(self._path, [r.to_dict() for r in results])


class ReportStore:
    def __init__(self, *, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def save(self, report: AggregateReport) -> None:
        write_json(self._path, report.to_dict())
