"""Structured logging for namegen."""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pythonjsonlogger.json import JsonFormatter

ROOT_LOGGER_NAME = "namegen"

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _make_formatter(json_output: bool) -> logging.Formatter:
    if json_output:
        return JsonFormatter(
            _JSON_FORMAT,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    return logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


class StructuredLogger:
    """
    Logger with context fields attached to each record.

    Context passed as a dict (or keyword arguments) ends up as attributes on
    the LogRecord, so the JSON formatter emits them as top-level keys.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        """
        Initialize structured logger.

        Args:
            name: Logger name; children of 'namegen' share its handlers
        """
        self.name = name
        self.logger = logging.getLogger(name)

    def _log_with_context(
        self,
        level: int,
        message: str,
        context: Optional[dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        if context:
            kwargs.update(context)
        if kwargs:
            self.logger.log(level, message, extra=kwargs)
        else:
            self.logger.log(level, message)

    def debug(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log debug message."""
        self._log_with_context(logging.DEBUG, message, context, **kwargs)

    def info(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log info message."""
        self._log_with_context(logging.INFO, message, context, **kwargs)

    def warning(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log warning message."""
        self._log_with_context(logging.WARNING, message, context, **kwargs)

    def error(self, message: str, context: Optional[dict[str, Any]] = None, **kwargs: Any) -> None:
        """Log error message."""
        self._log_with_context(logging.ERROR, message, context, **kwargs)

    def log_provider_call(
        self,
        provider: str,
        model: str,
        prompt: str,
        latency_ms: float,
        error: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Log one AI provider call.

        Args:
            provider: Provider name (e.g. "openrouter")
            model: Model identifier
            prompt: Prompt text (only a preview is logged)
            latency_ms: Call latency in milliseconds
            error: Error message, if the call failed
            **kwargs: Additional metadata
        """
        prompt_preview = prompt[:200] + "..." if len(prompt) > 200 else prompt
        context = {
            "event_type": "provider_call",
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": prompt_preview,
            "latency_ms": round(latency_ms, 1),
        }
        context.update(kwargs)

        if error is not None:
            context["error"] = error
            self.warning(f"Provider call failed: {provider}/{model}", context=context)
        else:
            self.info(f"Provider call: {provider}/{model}", context=context)

    def log_pipeline_stage(
        self,
        stage: str,
        status: str,
        duration_ms: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """
        Log pipeline stage execution.

        Args:
            stage: Stage name (e.g. "parameter_merge", "model_selection")
            status: "started", "completed" or "failed"
            duration_ms: Stage duration in milliseconds
            **kwargs: Additional metadata
        """
        context = {
            "event_type": "pipeline_stage",
            "stage": stage,
            "status": status,
        }
        if duration_ms is not None:
            context["duration_ms"] = round(duration_ms, 2)
        context.update(kwargs)

        if status == "failed":
            self.warning(f"Pipeline stage {stage} failed", context=context)
        elif status == "completed":
            self.debug(f"Pipeline stage {stage} completed", context=context)
        else:
            self.debug(f"Pipeline stage {stage} started", context=context)


_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str = ROOT_LOGGER_NAME) -> StructuredLogger:
    """
    Get or create a structured logger.

    Args:
        name: Logger name, normally "namegen.<component>"

    Returns:
        StructuredLogger instance
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name)
    return _loggers[name]


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> StructuredLogger:
    """
    Configure handlers on the 'namegen' root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON-formatted logs
        log_file: Optional file path to also write logs to

    Returns:
        The root StructuredLogger
    """
    log_level = getattr(logging, LogLevel[level.upper()].value)
    formatter = _make_formatter(json_output)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(log_level)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return get_logger(ROOT_LOGGER_NAME)
