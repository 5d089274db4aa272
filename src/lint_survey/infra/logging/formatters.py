from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter


class JSONFormatter(JsonFormatter):
    """JSONL formatter for run logs.

    Keyword context passed to SurveyLogger arrives as ``extra`` attributes,
    which python-json-logger already merges into the record; this adds the
    fixed envelope fields every line carries.
    """

    def __init__(self) -> None:
        super().__init__(timestamp=True)

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["message"] = record.getMessage()
        log_record["thread"] = record.threadName


class HumanReadableFormatter(logging.Formatter):
    """Console formatter: event name followed by its key=value context.

    The thread name tells interleaved lines from concurrent batches apart.
    """

    _RESERVED = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime", "taskName"}

    def __init__(self) -> None:
        super().__init__(
            fmt='%(asctime)s - %(levelname)s - [%(threadName)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = {k: v for k, v in vars(record).items() if k not in self._RESERVED}
        if not context:
            return text
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = text.partition("\n")
        return f"{head} {pairs}{sep}{tail}"
