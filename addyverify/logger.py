"""
Structured logging for addyverify.

One StructuredLogger wraps a stdlib logger that writes to stderr and to a
dated file under logs/. Keyword context is appended to each line as JSON,
and verification outcomes are counted so a CLI run can end with a summary.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"


def resolve_level(level: str) -> int:
    """Map a level name such as "info" to its logging constant.

    Raises:
        ValueError: If the name is not one of LEVELS
    """
    name = (level or "").strip().upper()
    if name not in LEVELS:
        raise ValueError(f"Unknown log level {level!r}. Use one of: {', '.join(LEVELS)}")
    return getattr(logging, name)


class StructuredLogger:
    """Verification logger with JSON context and outcome counters."""

    def __init__(
        self,
        name: str = "addyverify",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Console level name; the file always gets DEBUG
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Write logs to stderr
        """
        self.logger = logging.getLogger(name)
        self.logger.handlers.clear()
        self.console_handler: Optional[logging.Handler] = None
        self.file_handler: Optional[logging.Handler] = None

        self.metrics = {
            "api_calls": 0,
            "verifications_attempted": 0,
            "standardized": 0,
            "geocoded": 0,
            "not_verified": 0,
            "connection_errors": 0,
            "errors_by_type": {},
        }

        if enable_console:
            self.console_handler = self._attach(logging.StreamHandler(sys.stderr), CONSOLE_FORMAT)
        if enable_file:
            log_dir = log_dir if log_dir is not None else Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"addyverify_{datetime.now():%Y%m%d}.log"
            self.file_handler = self._attach(logging.FileHandler(log_file, encoding="utf-8"), FILE_FORMAT, logging.DEBUG)

        self.set_level(level)

    def _attach(self, handler: logging.Handler, fmt: str, level: Optional[int] = None) -> logging.Handler:
        if level is not None:
            handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
        self.logger.addHandler(handler)
        return handler

    def set_level(self, level: str) -> None:
        """Change the logger and console level. Raises ValueError on unknown names."""
        value = resolve_level(level)
        # the file handler always records DEBUG
        self.logger.setLevel(logging.DEBUG if self.file_handler is not None else value)
        if self.console_handler is not None:
            self.console_handler.setLevel(value)

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context):
        self._log(logging.ERROR, message, context)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_api_call(self):
        """Increment API call counter."""
        self.metrics["api_calls"] += 1

    def record_verification(self, outcome: str, geocoded: bool = False):
        """Record the outcome of one verification attempt.

        Args:
            outcome: "standardized", "none" or "connection_error"
            geocoded: Whether coordinates were applied to the location
        """
        self.metrics["verifications_attempted"] += 1
        if outcome == "standardized":
            self.metrics["standardized"] += 1
            if geocoded:
                self.metrics["geocoded"] += 1
        elif outcome == "connection_error":
            self.metrics["connection_errors"] += 1
        else:
            self.metrics["not_verified"] += 1

    def record_error(self, error_type: str):
        """Count an error by type name."""
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics, with the standardization rate filled in."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        attempts = metrics_copy["verifications_attempted"]
        metrics_copy["standardized_rate"] = (
            round(metrics_copy["standardized"] / attempts, 3) if attempts else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Verification Session Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']}")
        self.info(
            f"Standardized: {metrics['standardized']}/{metrics['verifications_attempted']} "
            f"({metrics['standardized_rate'] * 100:.1f}%)"
        )
        self.info(f"Geocoded: {metrics['geocoded']}")
        self.info(f"Not verified: {metrics['not_verified']}")
        self.info(f"Connection errors: {metrics['connection_errors']}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "addyverify",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
