"""Logging configuration for the Mindify API.

This module provides structured logging with different handlers for
development, test and production environments, including JSON formatting
for log aggregation.
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from mindify.utils.context import get_request_id


class MindifyFormatter(jsonlogger.JsonFormatter):
    """JSON formatter for Mindify application logs."""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record dictionary to modify
            record: The original logging record
            message_dict: Additional message data
        """
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['module'] = record.module
        log_record['function'] = record.funcName
        log_record['line'] = record.lineno

        log_record['application'] = 'mindify'
        log_record['service'] = 'mindify-api'

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)


class ContextFilter(logging.Filter):
    """Filter to add fixed contextual information to log records."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        """Initialize context filter.

        Args:
            context: Additional context to add to all log records
        """
        super().__init__()
        self.context = context or {}

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.context.items():
            setattr(record, key, value)
        return True


class RequestContextFilter(logging.Filter):
    """Filter to add the current request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = get_request_id()
        if request_id and not hasattr(record, "request_id"):
            record.request_id = request_id
        return True


class LoggerConfig:
    """Logger configuration manager."""

    # Component loggers
    COMPONENTS = {
        'api': 'mindify.api',
        'database': 'mindify.database',
        'llm': 'mindify.llm',
        'business': 'mindify.business',
    }

    def __init__(
        self,
        environment: str = 'development',
        log_level: str = 'INFO',
        format_type: str = 'json',
        log_file: Optional[str] = None,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ):
        """Initialize logger configuration.

        Args:
            environment: Environment name (development, test, staging, production)
            log_level: Default log level
            format_type: Console format, "json" or "text"
            log_file: Optional path of a rotating log file
            max_bytes: Max size of the log file before rotation
            backup_count: Number of rotated files to keep
        """
        self.environment = environment
        self.log_level = getattr(logging, log_level.upper())
        self.format_type = format_type
        self.log_file = Path(log_file) if log_file else None
        self.max_bytes = max_bytes
        self.backup_count = backup_count

        self._configure_root_logger()
        self._configure_component_loggers()

    def _configure_root_logger(self) -> None:
        """Configure the root logger."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self.log_level)

        root_logger.handlers.clear()

        if self.environment == 'test':
            self._add_test_handlers(root_logger)
        else:
            self._add_console_handler(root_logger)
            if self.log_file:
                self._add_file_handler(root_logger)

    def _build_formatter(self) -> logging.Formatter:
        if self.format_type == 'json':
            return MindifyFormatter(fmt='%(timestamp)s %(level)s %(logger)s %(message)s')
        return logging.Formatter(
            fmt='%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-15s:%(lineno)-3d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def _add_console_handler(self, logger: logging.Logger) -> None:
        """Add the stdout handler.

        Args:
            logger: Logger to configure
        """
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(self._build_formatter())
        console_handler.addFilter(RequestContextFilter())

        logger.addHandler(console_handler)

    def _add_file_handler(self, logger: logging.Logger) -> None:
        """Add a rotating file handler.

        Args:
            logger: Logger to configure
        """
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=self.log_file,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(self.log_level)
        file_handler.setFormatter(MindifyFormatter(fmt='%(timestamp)s %(level)s %(logger)s %(message)s'))
        file_handler.addFilter(RequestContextFilter())

        logger.addHandler(file_handler)

    def _add_test_handlers(self, logger: logging.Logger) -> None:
        """Add test environment handlers.

        Args:
            logger: Logger to configure
        """
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)  # Only warnings and errors during tests

        test_formatter = logging.Formatter(
            fmt='TEST | %(levelname)s | %(name)s | %(message)s'
        )
        console_handler.setFormatter(test_formatter)

        logger.addHandler(console_handler)

    def _configure_component_loggers(self) -> None:
        """Configure individual component loggers."""
        for component, logger_name in self.COMPONENTS.items():
            logger = logging.getLogger(logger_name)
            logger.setLevel(self.log_level)

            if not any(isinstance(f, ContextFilter) for f in logger.filters):
                logger.addFilter(ContextFilter({'component': component}))

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance.

        Args:
            name: Logger name

        Returns:
            logging.Logger: Configured logger instance
        """
        return logging.getLogger(name)

    def get_component_logger(self, component: str) -> logging.Logger:
        """Get a component-specific logger.

        Args:
            component: Component name (api, database, llm, business)

        Returns:
            logging.Logger: Component logger

        Raises:
            ValueError: If component is not recognized
        """
        if component not in self.COMPONENTS:
            raise ValueError(f"Unknown component: {component}. Available: {list(self.COMPONENTS.keys())}")

        return logging.getLogger(self.COMPONENTS[component])


# Global logger configuration instance
_logger_config: Optional[LoggerConfig] = None


def setup_logging(
    environment: str = 'development',
    level: str = 'INFO',
    format_type: str = 'json',
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> LoggerConfig:
    """Setup application logging.

    Args:
        environment: Environment name
        level: Log level
        format_type: Console format, "json" or "text"
        log_file: Optional rotating log file path
        max_bytes: Max log file size in bytes
        backup_count: Rotated file count

    Returns:
        LoggerConfig: Configured logger instance
    """
    global _logger_config
    _logger_config = LoggerConfig(
        environment=environment,
        log_level=level,
        format_type=format_type,
        log_file=log_file,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )
    return _logger_config


def get_logger(name: str = __name__) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name, defaults to caller's module name

    Returns:
        logging.Logger: Logger instance
    """
    if _logger_config is None:
        setup_logging()

    return _logger_config.get_logger(name)


def get_component_logger(component: str) -> logging.Logger:
    """Get a component-specific logger.

    Args:
        component: Component name

    Returns:
        logging.Logger: Component logger
    """
    if _logger_config is None:
        setup_logging()

    return _logger_config.get_component_logger(component)


def get_api_logger() -> logging.Logger:
    """Get API component logger."""
    return get_component_logger('api')


def get_database_logger() -> logging.Logger:
    """Get database component logger."""
    return get_component_logger('database')


def get_llm_logger() -> logging.Logger:
    """Get LLM component logger."""
    return get_component_logger('llm')


def get_business_logger() -> logging.Logger:
    """Get business logic logger."""
    return get_component_logger('business')


def log_api_response(method: str, path: str, status_code: int, duration_ms: float, logger: Optional[logging.Logger] = None) -> None:
    """Log API response.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
        logger: Logger instance
    """
    if logger is None:
        logger = get_api_logger()

    level = logging.WARNING if status_code >= 400 else logging.INFO

    logger.log(level, f"{method} {path} - {status_code}", extra={
        'http_method': method,
        'request_path': path,
        'status_code': status_code,
        'duration_ms': duration_ms,
        'event_type': 'api_response'
    })


def log_llm_request(model: str, purpose: str, latency_ms: float, logger: Optional[logging.Logger] = None) -> None:
    """Log a completed LLM API request.

    Args:
        model: Model name
        purpose: Why the request was made
        latency_ms: Round-trip latency
        logger: Logger instance
    """
    if logger is None:
        logger = get_llm_logger()

    logger.info(f"LLM request to {model}", extra={
        'model': model,
        'purpose': purpose,
        'latency_ms': latency_ms,
        'event_type': 'llm_request'
    })



class PerformanceLogger:
    """Context manager for performance logging."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None, extra: Optional[Dict[str, Any]] = None):
        """Initialize performance logger.

        Args:
            operation: Operation name
            logger: Logger instance
            extra: Additional fields to log
        """
        self.operation = operation
        self.logger = logger or get_logger()
        self.extra = extra or {}
        self.start_time: Optional[datetime] = None
        self.duration_ms: float = 0.0

    def __enter__(self) -> 'PerformanceLogger':
        self.start_time = datetime.now(timezone.utc)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.start_time:
            duration = datetime.now(timezone.utc) - self.start_time
            self.duration_ms = duration.total_seconds() * 1000

            level = logging.WARNING if self.duration_ms > 5000 else logging.DEBUG  # Warn if > 5 seconds

            self.logger.log(level, f"Completed {self.operation}", extra={
                'operation': self.operation,
                'duration_ms': self.duration_ms,
                'event_type': 'performance_end',
                'success': exc_type is None,
                **self.extra
            })
