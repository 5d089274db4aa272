from .app.main import discover, lint, report, status

__all__ = [
    "discover",
    "lint",
    "report",
    "status",
]

# stdlib logging defaults: attach NullHandler to prevent 'No handler' warnings
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())
