from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..core.domain.exceptions import StateFileError
from .json_file import read_json, write_json


class CheckpointStore:
    """JSON array of repository ids (as strings) that were fully attempted."""

    def __init__(self, *, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> set[str]:
        data = read_json(self._path, list)
        if not isinstance(data, list):
            raise StateFileError(self._path, "expected a JSON array")
        return {str(item) for item in data}

    def save(self, ids: Iterable[str]) -> None:
        write_json(self._path, sorted(ids), indent=None)
