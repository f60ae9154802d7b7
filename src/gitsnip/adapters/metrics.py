"""Metrics adapters."""

from ..ports import LoggerPort


class NoopMetricsAdapter:
    """Metrics adapter that discards everything."""

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        pass

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        pass


class LoggingMetricsAdapter:
    """Metrics adapter that reports through the logger at debug level."""

    def __init__(self, logger: LoggerPort):
        self.logger = logger

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        self.logger.debug("metric", type="counter", name=name, value=value, tags=tags or {})

    def timing(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        self.logger.debug(
            "metric", type="timing", name=name, value=round(value, 4), tags=tags or {}
        )


def create_metrics(
    metrics_type: str, logger: LoggerPort
) -> NoopMetricsAdapter | LoggingMetricsAdapter:
    """Build the metrics adapter named by configuration."""
    if metrics_type == "logging":
        return LoggingMetricsAdapter(logger)
    if metrics_type == "noop":
        return NoopMetricsAdapter()
    raise ValueError(f"Unknown metrics backend: {metrics_type}")
