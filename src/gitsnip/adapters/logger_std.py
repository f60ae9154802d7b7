"""Standard logging adapter."""

import json
import logging
import sys
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class StdLoggerAdapter:
    """Standard logging implementation of LoggerPort.

    Keyword fields are appended to the message as a JSON object.
    """

    def __init__(self, name: str = "gitsnip", level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            self.logger.addHandler(handler)
            self.logger.propagate = False

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def log_operation(
        self,
        op: str,
        key: str,
        sizes: dict[str, int] | None = None,
        durations: dict[str, float] | None = None,
        cache_hit: bool = False,
        **kwargs: Any,
    ) -> None:
        """Log a structured summary of a completed operation."""
        fields: dict[str, Any] = {"op": op, "key": key, "cache_hit": cache_hit}
        if sizes:
            fields["sizes"] = sizes
        if durations:
            fields["durations"] = durations
        fields.update(kwargs)
        self._log(logging.INFO, f"Operation {op} complete", fields)

    def _log(self, level: int, message: str, fields: dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            message = f"{message} {json.dumps(fields, default=str, sort_keys=True)}"
        self.logger.log(level, message)
