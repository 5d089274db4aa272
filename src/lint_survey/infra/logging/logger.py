from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_json_file_handler, build_human_console_handler


class SurveyLogger(Resource):
    """Structured logger shared by every pipeline component.

    Writes one JSONL file per named run and optionally mirrors to the
    console. Safe to call from worker threads (stdlib handlers lock).
    """

    def init(
        self,
        *,
        run_name: str | None = None,
        logs_dir: Path,
        logger_name: str = "lint_survey",
        console_output: bool = False,
        level: str = "INFO",
    ) -> "SurveyLogger":
        """Initialize logger handlers.

        Args:
            run_name: Log file stem; without it no file handler is attached
            logs_dir: Directory to store log files
            logger_name: Logger name
            console_output: Whether to enable console output
            level: Logging level (DEBUG, INFO, WARNING, ERROR)

        Returns:
            Self for dependency_injector Resource pattern
        """
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            numeric_level = logging.INFO

        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers = []

        if run_name:
            file_handler = build_json_file_handler(Path(logs_dir) / f"{run_name}.jsonl", level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_human_console_handler(level=numeric_level)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "SurveyLogger") -> None:
        """Flush and close handlers so log files are complete on exit."""
        for handler in self._handlers:
            handler.flush()
            handler.close()
        self._logger.handlers.clear()

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs or None)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs or None)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs or None)

    def error(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.error(message, extra=kwargs or None, exc_info=exc_info)

    def exception(self, message: str, **kwargs) -> None:
        """Log at ERROR with the active exception's traceback."""
        self._logger.exception(message, extra=kwargs or None)
