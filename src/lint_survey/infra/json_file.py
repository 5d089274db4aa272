from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

from ..core.domain.exceptions import StateFileError


def read_json(path: Path, default: Callable[[], Any]) -> Any:
    """Read a JSON artifact, returning ``default()`` when it does not exist.

    Raises:
        StateFileError: If the file exists but cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return default()
    except OSError as e:
        raise StateFileError(path, str(e)) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise StateFileError(path, f"invalid JSON: {e}") from e


def write_json(path: Path, data: Any, *, indent: int | None = 2) -> None:
    """Write JSON through a sibling temp file so readers never see half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f".{path.name}.{os.getpid()}.tmp")
    try:
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=indent), encoding="utf-8")
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
