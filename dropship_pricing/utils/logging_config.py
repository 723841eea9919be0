"""
Logging setup for the pricing engine.

Records can be rendered as text or JSON. Fields attached with LogContext
(product id, marketplace) are appended to text lines and merged into JSON
payloads.
"""

import logging
import logging.handlers
import sys
import threading
from contextvars import ContextVar
from pathlib import Path

from pythonjsonlogger.json import JsonFormatter

from dropship_pricing.utils.config_loader import LoggingConfig

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ContextTextFormatter(logging.Formatter):
    """Text formatter that appends LogContext fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if fields:
            line += " [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]"
        return line


class JSONFormatter(JsonFormatter):
    """JSON formatter emitting level, logger and source location."""

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict):
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["location"] = f"{record.module}.{record.funcName}:{record.lineno}"
        log_record.update(getattr(record, "extra_fields", {}))


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return JSONFormatter(JSON_FORMAT)
    return ContextTextFormatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: Path | None = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure root logging for an application embedding the engine.

    Replaces any handlers already on the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO.
        log_format: "text" or "json".
        log_file: Optional file that receives the same records, rotated by size.
        max_bytes: Rotation size of log_file.
        backup_count: Rotated files to keep.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    formatter = _build_formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    root_logger.info(f"Logging configured: level={level}, format={log_format}")


def setup_logging_from_config(config: LoggingConfig) -> None:
    """Configure logging from the `logging` section of AppConfig."""
    setup_logging(
        level=config.level,
        log_format=config.format,
        log_file=Path(config.file) if config.file else None,
    )


_context_stack: ContextVar[tuple["LogContext", ...]] = ContextVar("log_context_stack", default=())
_factory_lock = threading.Lock()
_factory_installed = False


def _install_record_factory() -> None:
    """Wrap the current record factory once so records pick up LogContext fields."""
    global _factory_installed
    with _factory_lock:
        if _factory_installed:
            return
        base_factory = logging.getLogRecordFactory()

        def record_factory(*args, **kwargs):
            record = base_factory(*args, **kwargs)
            stack = _context_stack.get()
            if stack:
                fields: dict = {}
                for context in stack:
                    fields.update(context.fields)
                record.extra_fields = fields
            return record

        logging.setLogRecordFactory(record_factory)
        _factory_installed = True


class LogContext:
    """
    Context manager that tags every record logged inside it.

    Used to attach a product id or marketplace to the engine's own log lines
    without threading them through the pure pricing functions. Nested
    contexts merge their fields, inner values winning.

    Fields live in a ContextVar, so each thread or asyncio task sees only
    the contexts it entered itself, and contexts may exit in any order.
    """

    def __init__(self, **fields):
        self.fields = fields

    def __enter__(self):
        _install_record_factory()
        _context_stack.set(_context_stack.get() + (self,))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _context_stack.set(tuple(c for c in _context_stack.get() if c is not self))
        return False
