"""
Synchronous "tell the user now" capability used for server and network errors.
"""

import logging
import sys
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    def alert(self, message: str) -> None: ...


class ConsoleNotifier:
    """Writes the alert to a stream (stderr by default) and returns once it is flushed."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream or sys.stderr

    def alert(self, message: str) -> None:
        self._stream.write(f"\n!! {message}\n")
        self._stream.flush()


class LoggingNotifier:
    def alert(self, message: str) -> None:
        logger.warning("User alert: %s", message)
