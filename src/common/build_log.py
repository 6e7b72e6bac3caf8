"""Combined logging sink: module logger plus an optional build console stream."""
from __future__ import annotations

import logging
from typing import Optional, TextIO


class BuildLog:
    """Writes messages to a ``logging.Logger`` and, when given, a text stream.

    The stream is typically the console of the build step driving the client.
    Every message always reaches the logger; the stream receives the same
    message as a single line regardless of level.
    """

    def __init__(self, logger: logging.Logger):
        """Initialize the sink.

        Args:
            logger: Logger to wrap. Must not be None.
        """
        if logger is None:
            raise ValueError("logger must not be None")
        self.logger = logger

    def log(self, stream: Optional[TextIO], message: str, level: int) -> None:
        """Log ``message`` at ``level`` and echo it to ``stream`` if provided."""
        if message is None:
            raise ValueError("message must not be None")
        self.logger.log(level, message)
        if stream is not None:
            print(message, file=stream)

    def debug(self, stream: Optional[TextIO], message: str) -> None:
        self.log(stream, message, logging.DEBUG)

    def info(self, stream: Optional[TextIO], message: str) -> None:
        self.log(stream, message, logging.INFO)

    def warning(self, stream: Optional[TextIO], message: str) -> None:
        self.log(stream, message, logging.WARNING)

    def error(self, stream: Optional[TextIO], message: str) -> None:
        self.log(stream, message, logging.ERROR)
