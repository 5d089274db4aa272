from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Sequence

from ..core.domain.exceptions import LinterVersionError
from ..core.domain.models import LintFileResult
from ..core.ports import LoggerPort


class Linter:
    """Runs the external lint tool in a sub-project and parses its JSON report.

    The tool exits nonzero whenever it reports findings, so the exit status
    alone says nothing about success. What matters is stdout: parseable JSON
    is a report whatever the exit code; empty or unparseable output is a
    tool failure and yields None.
    """

    def __init__(self, *, command: Sequence[str], logger: LoggerPort) -> None:
        if not command:
            raise ValueError("lint command must not be empty")
        self._command = list(command)
        self._logger = logger

    def run(self, path: Path) -> list[LintFileResult] | None:
        try:
            proc = subprocess.run(
                self._command,
                cwd=str(path),
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            self._logger.error("lint_invocation_failed", subproject=str(path), error=str(e))
            return None

        stdout = proc.stdout.strip()
        if not stdout:
            self._logger.error(
                "lint_no_output",
                subproject=str(path),
                returncode=proc.returncode,
                stderr=proc.stderr[-2000:],
            )
            return None

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as e:
            self._logger.error(
                "lint_output_unparseable",
                subproject=str(path),
                returncode=proc.returncode,
                error=str(e),
            )
            return None

        if not isinstance(data, list):
            self._logger.error("lint_output_unexpected", subproject=str(path), kind=type(data).__name__)
            return None

        if proc.returncode != 0:
            self._logger.debug("lint_findings_reported", subproject=str(path), returncode=proc.returncode)
        return [LintFileResult.from_dict(item) for item in data if isinstance(item, dict)]


def resolve_tool_version(package: str, *, cwd: Path | None = None) -> str:
    """Ask npm which version of ``package`` is installed.

    Raises:
        LinterVersionError: If npm is missing or does not list the package.
    """
    cmd = ["npm", "list", package, "--depth=0", "--json"]
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise LinterVersionError(package, f"Could not run npm: {e}") from e

    # npm list exits nonzero on tree warnings but still prints the JSON
    try:
        data = json.loads(proc.stdout or "{}")
        version = data["dependencies"][package]["version"]
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise LinterVersionError(package) from e

    if not isinstance(version, str) or not version:
        raise LinterVersionError(package)
    return version
