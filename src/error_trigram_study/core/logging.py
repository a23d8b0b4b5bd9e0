"""
Purpose: Centralized logging configuration with structured output support.
Constraints: Logging only; no analysis logic.
"""

# Imports
import logging
import sys
import json
import os
import threading
import time
import re
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from contextlib import contextmanager
from typing import Optional, Dict, Any
import traceback

from error_trigram_study.core.metrics import get_metrics

_REDACTED = "[redacted]"

# Stack Exchange app keys travel as a query parameter
_KEY_PATTERNS = [
    re.compile(r"([?&]key=)[^&\s]+", re.IGNORECASE),
    re.compile(r"(\bapi_key['\"]?\s*[:=]\s*['\"]?)[A-Za-z0-9()_\-]{8,}", re.IGNORECASE),
]


def _is_enabled(var: str, default: str = "1") -> bool:
    return os.getenv(var, default).lower() not in ("0", "false", "no")


def _redact_text(text: str) -> str:
    if not text:
        return text
    redacted = text
    for pattern in _KEY_PATTERNS:
        redacted = pattern.sub(lambda m: m.group(1) + _REDACTED, redacted)
    return redacted


def _redact_obj(value):
    if isinstance(value, str):
        return _redact_text(value)
    if isinstance(value, dict):
        return {k: _redact_obj(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(_redact_obj(v) for v in value)
    return value


def _default_logs_dir() -> Path:
    override = os.getenv("LOG_DIR", "").strip()
    if override:
        return Path(override)
    return Path.cwd() / "logs"


# Public API
class UnifiedLogger:
    """Logger for study runs; configures root handlers once per process."""

    _lock = threading.Lock()
    _global_initialized = False

    def __init__(self, name: str = "error_trigram_study", log_level: Optional[str] = None):
        self.name = name

        if log_level is None:
            log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
        level = getattr(logging, log_level.upper(), logging.INFO)

        with self._lock:
            self.logger = logging.getLogger(name)
            self.logger.setLevel(level)
            if not UnifiedLogger._global_initialized:
                log_file = self._ensure_root_logger(level)
                UnifiedLogger._global_initialized = True
                if log_file:
                    self.logger.debug(f"Logger initialized. Log file: {log_file}")
            self.logger.propagate = True

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance"""
        return self.logger

    def log_activity(self, action: str, details: Dict[str, Any], level: str = "INFO"):
        """Log a pipeline stage with structured details"""
        log_level = getattr(logging, level.upper(), logging.INFO)
        self.logger.log(log_level, f"ACTIVITY: {action}", extra={'action': action, 'details': details})

    def log_error_with_context(self, error: Exception, context: Dict[str, Any], level: str = "ERROR"):
        """Log errors with additional context"""
        error_details = {
            "timestamp": datetime.now().isoformat(),
            "error_type": type(error).__name__,
            "error_message": str(error),
            "context": context,
        }
        if self.logger.isEnabledFor(logging.DEBUG):
            error_details["traceback"] = traceback.format_exc()

        self.logger.log(
            getattr(logging, level.upper(), logging.ERROR),
            f"ERROR: {type(error).__name__}: {error}",
            extra={'details': error_details},
        )
        get_metrics().record_error("exception")

    def log_performance(self, operation: str, duration: float):
        self.logger.info(f"PERFORMANCE: {operation} took {duration:.2f}s")

    @contextmanager
    def time_operation(self, operation_name: str):
        """Context manager for timing operations"""
        start_time = time.time()
        try:
            yield
        finally:
            self.log_performance(operation_name, time.time() - start_time)

    def _ensure_root_logger(self, level: int) -> Optional[Path]:
        if not _is_enabled("ENABLE_ROOT_LOGGER"):
            return None
        root_logger = logging.getLogger()
        if root_logger.handlers:
            return None

        logs_dir = _default_logs_dir()
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = logs_dir / f"study_{timestamp}.log"

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(_RedactingFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
        )))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(
            getattr(logging, os.getenv("CONSOLE_LOG_LEVEL", "INFO").upper(), logging.INFO)
        )
        console_handler.setFormatter(_RedactingFormatter(logging.Formatter(
            "%(asctime)s - %(levelname)s - %(message)s"
        )))

        root_logger.setLevel(level)
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        if _is_enabled("ENABLE_JSON_LOGGING", "0"):
            json_handler = RotatingFileHandler(
                logs_dir / f"study_json_{timestamp}.log",
                maxBytes=5*1024*1024,
                backupCount=3,
                encoding='utf-8'
            )
            json_handler.setLevel(level)
            json_handler.setFormatter(_RedactingJsonFormatter())
            root_logger.addHandler(json_handler)
        if _is_enabled("METRICS_ENABLED"):
            root_logger.addHandler(_MetricsHandler())
        return log_file


def setup_logger(name: str = "error_trigram_study", log_level: Optional[str] = None) -> logging.Logger:
    """Return a configured logger instance"""
    return UnifiedLogger(name=name, log_level=log_level).get_logger()


class _MetricsHandler(logging.Handler):
    """Count every log record by level."""

    def emit(self, record: logging.LogRecord) -> None:
        metrics = get_metrics()
        metrics.record(f"log.{record.levelname.lower()}", success=record.levelno < logging.ERROR)
        action = getattr(record, "action", None)
        if action:
            metrics.record(f"action.{str(action).lower()}", success=record.levelno < logging.ERROR)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, base: logging.Formatter):
        super().__init__(base._fmt, base.datefmt)
        self._base = base

    def format(self, record: logging.LogRecord) -> str:
        original_msg, original_args = record.msg, record.args
        record.msg = _redact_text(record.getMessage())
        record.args = ()
        try:
            return self._base.format(record)
        finally:
            record.msg, record.args = original_msg, original_args


class _RedactingJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": _redact_text(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if hasattr(record, "action"):
            log_obj["action"] = _redact_obj(record.action)
        if hasattr(record, "details"):
            log_obj["details"] = _redact_obj(record.details)
        return json.dumps(log_obj, default=str)
