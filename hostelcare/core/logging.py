"""
Logging Configuration and Utilities

Structured logging on top of the standard library: JSON output through
python-json-logger, human-readable console output through structlog's
ProcessorFormatter, and request context injected into every record.
"""

import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from pythonjsonlogger import jsonlogger

from hostelcare.config.settings import settings

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)

SENSITIVE_KEYS = (
    'password', 'token', 'secret', 'credentials',
    'authorization', 'cookie', 'session',
)


def _sanitize(event_dict: Dict[str, Any]) -> None:
    """Mask sensitive values in place"""
    for key in list(event_dict.keys()):
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event_dict[key] = '[REDACTED]'
        elif isinstance(event_dict[key], dict):
            _sanitize(event_dict[key])


class RequestContextProcessor:
    """Add request context to structlog event dicts"""

    def __call__(self, logger, method_name, event_dict):
        req_id = request_id.get()
        if req_id:
            event_dict['request_id'] = req_id

        uid = user_id.get()
        if uid:
            event_dict['user_id'] = uid

        event_dict['service'] = 'hostelcare'
        event_dict['environment'] = settings.ENVIRONMENT
        return event_dict


class SecurityLogProcessor:
    """Flag auth-related events and redact sensitive fields"""

    def __call__(self, logger, method_name, event_dict):
        if any(keyword in str(event_dict.get('event', '')).lower()
               for keyword in ['auth', 'login', 'logout', 'token']):
            event_dict['security_event'] = True

        _sanitize(event_dict)
        return event_dict


class RequestContextFilter(logging.Filter):
    """Copy request context variables onto stdlib log records"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id.get()
        record.user_id = user_id.get()
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno
        log_record['service'] = 'hostelcare'

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        _sanitize(log_record)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        """Configure structlog so its loggers share the stdlib handlers"""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                RequestContextProcessor(),
                SecurityLogProcessor(),
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            context_class=dict,
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def build_formatter(log_format: str) -> logging.Formatter:
        if log_format == "json":
            return CustomJsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')

        return structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.ExtraAdder(),
                RequestContextProcessor(),
                SecurityLogProcessor(),
                structlog.processors.TimeStamper(fmt="iso", utc=True),
            ],
        )

    @staticmethod
    def configure_standard_logging():
        """Configure standard Python logging"""
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.addFilter(RequestContextFilter())
        console_handler.setFormatter(LoggingConfig.build_formatter(settings.LOG_FORMAT))
        root_logger.addHandler(console_handler)

        # Reduce noise from external libraries
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(
            logging.INFO if settings.DB_ECHO else logging.WARNING
        )
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)


class LoggerAdapter:
    """Logger wrapper that merges bound context into every record"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._context: Dict[str, Any] = {}

    def add_context(self, **kwargs):
        self._context.update(kwargs)
        return self

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(kwargs.get('extra') or {})
        extra.update(self._context)
        kwargs['extra'] = extra
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to the package logger)

    Returns:
        Enhanced logger adapter
    """
    return LoggerAdapter(logging.getLogger(name or 'hostelcare'))


_configured = False


def setup_logging() -> None:
    """Initialize logging configuration once per process"""
    global _configured
    if _configured:
        return

    LoggingConfig.configure_structured_logging()
    LoggingConfig.configure_standard_logging()
    _configured = True

    get_logger(__name__).info(
        "Logging system initialized",
        extra={'log_level': settings.LOG_LEVEL, 'log_format': settings.LOG_FORMAT},
    )


__all__ = [
    'get_logger',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
    'user_id',
]
