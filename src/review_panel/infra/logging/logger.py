from __future__ import annotations

import logging
from pathlib import Path

from dependency_injector.resources import Resource

from .handlers import build_console_handler, build_json_file_handler


LOG_FILE_NAME = "review-panel.jsonl"


class ServiceLogger(Resource):
    """Structured logger for the review service.

    Keyword arguments to the level methods become structured fields of the
    record (top-level keys in JSON output).
    """

    def init(
        self,
        *,
        logs_dir: Path,
        logger_name: str = "review_panel",
        console_output: bool = True,
        json_console: bool = False,
        file_output: bool = False,
        level: str = "INFO",
    ) -> "ServiceLogger":
        """Configure handlers and return self (dependency_injector Resource pattern).

        Args:
            logs_dir: Directory for the JSONL log file
            logger_name: Logger name
            console_output: Whether to log to stderr
            json_console: Emit JSON instead of human-readable lines on stderr
            file_output: Whether to append JSON lines to ``logs_dir/review-panel.jsonl``
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        numeric_level = getattr(logging, level.upper())
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(numeric_level)
        self._logger.propagate = False

        self._logger.handlers.clear()
        self._handlers = []

        if file_output:
            file_handler = build_json_file_handler(logs_dir / LOG_FILE_NAME, level=numeric_level)
            self._logger.addHandler(file_handler)
            self._handlers.append(file_handler)

        if console_output:
            console_handler = build_console_handler(numeric_level, json_output=json_console)
            self._logger.addHandler(console_handler)
            self._handlers.append(console_handler)

        return self

    def shutdown(self, resource: "ServiceLogger") -> None:
        """Flush and close all handlers."""
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
