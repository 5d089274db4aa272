from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..core.domain.exceptions import StateFileError
from ..core.domain.models import RepositoryMetadata
from .json_file import read_json, write_json


class CatalogStore:
    """Append-only JSON array of repository metadata records."""

    def __init__(self, *, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[RepositoryMetadata]:
        data = read_json(self._path, list)
        if not isinstance(data, list):
            raise StateFileError(self._path, "expected a JSON array")
        items = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                continue
            try:
                items.append(RepositoryMetadata.from_api(item))
            except (KeyError, TypeError, ValueError) as e:
                raise StateFileError(self._path, f"malformed repository record at index {index}: {e!r}") from e
        return items

    def append(self, items: Iterable[RepositoryMetadata]) -> int:
        existing = read_json(self._path, list)
        if not isinstance(existing, list):
            raise StateFileError(self._path, "expected a JSON array")
        new = [m.to_dict() for m in items]
        combined = existing + new
        write_json(self._path, combined)
        return len(combined)
