"""Domain exceptions for lint_survey."""

from __future__ import annotations

from pathlib import Path


class StateFileError(Exception):
    """Raised when a persisted artifact exists but cannot be read or parsed.

    A missing file is never an error (it means "nothing yet"); anything else
    is treated as corrupt state and aborts startup.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read state file {path}: {reason}")


class LinterVersionError(Exception):
    """Raised when the installed lint tool version cannot be determined."""

    def __init__(self, package: str, message: str | None = None) -> None:
        self.package = package
        if message is None:
            message = f"Could not determine installed version of {package}"
        super().__init__(message)
