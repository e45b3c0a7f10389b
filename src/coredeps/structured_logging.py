"""
Structured logging configuration for coredeps.

Provides consistent, machine-readable logging for catalog construction,
configuration loading and exports.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .catalog import DependencyCatalog

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_RESERVED_ATTRIBUTES = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "getMessage",
    "exc_info",
    "exc_text",
    "stack_info",
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRIBUTES:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class CatalogLogger:
    """Structured logger for catalog events."""

    def __init__(self, name: str = "coredeps"):
        self.logger = logging.getLogger(f"coredeps.{name}")
        self._setup_logger()

    def _setup_logger(self) -> None:
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.WARNING)
            self.logger.propagate = False

    def use_json(self, enable_json: bool, log_format: str = DEFAULT_LOG_FORMAT) -> None:
        formatter = StructuredFormatter() if enable_json else logging.Formatter(log_format)
        for handler in self.logger.handlers:
            handler.setFormatter(formatter)

    def _log(self, level: str, event_type: str, **kwargs) -> None:
        log_data = {"event_type": event_type, **kwargs}
        getattr(self.logger, level)(event_type, extra=log_data)

    def info(self, event_type: str, **kwargs) -> None:
        self._log("info", event_type, **kwargs)


# Global logger instances
_catalog_logger = CatalogLogger("catalog")
_config_logger = CatalogLogger("config")
_export_logger = CatalogLogger("export")

_ALL_LOGGERS = (_catalog_logger, _config_logger, _export_logger)


def log_catalog_built(catalog: "DependencyCatalog") -> None:
    """Log the shape of a freshly built catalog."""
    _catalog_logger.info(
        "catalog_built",
        platform_version=catalog.platform_version,
        target_platform_version=catalog.target_platform_version,
        legacy_compatible=catalog.legacy_compatible,
        framework_project=catalog.framework_project,
        groovy_version=catalog.groovy_version,
        scope_sizes={scope.value: len(deps) for scope, deps in catalog.scopes().items()},
    )


def log_config_loaded(source: Optional[str], override_count: int = 0) -> None:
    """Log where configuration came from."""
    _config_logger.info(
        "config_loaded",
        source=source or "defaults",
        environment_overrides=override_count,
    )


def log_export(export_format: str, destination: Optional[str], count: int) -> None:
    """Log a completed export."""
    _export_logger.info(
        "catalog_exported",
        export_format=export_format,
        destination=destination or "stdout",
        dependency_count=count,
    )


def configure_logging(
    log_level: str = "WARNING",
    enable_json: bool = True,
    log_format: str = DEFAULT_LOG_FORMAT,
) -> None:
    """Configure logging for the application."""
    level = getattr(logging, str(log_level).upper(), logging.WARNING)

    for logger in _ALL_LOGGERS:
        logger.logger.setLevel(level)
        logger.use_json(enable_json, log_format)
