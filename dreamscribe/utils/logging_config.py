"""
Dreamscribe Logging Configuration

Structured logging for the Dreamscribe AI core:
- structlog on top of stdlib logging
- Rotating file output plus an errors-only file
- Optional console output for development
- Quiet HTTP library loggers

Applications call setup_logging() once at startup, or pass
``configure_logging=True`` to create_dream_ai_service().
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

import structlog

EXTERNAL_MODULES = ["aiohttp", "aiohttp.client", "aiohttp.access", "urllib3", "asyncio"]


class DreamscribeLogger:
    """
    Centralized logging configuration for Dreamscribe.

    Provides structured logging with:
    - File rotation by size
    - Console output for development
    - Separate errors file
    """

    def __init__(
        self,
        log_dir: str = "logs",
        log_level: str = "INFO",
        enable_console: bool = True,
        max_file_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        """
        Initialize the logging system.

        Args:
            log_dir: Directory to store log files
            log_level: Default log level
            enable_console: Whether to enable console logging
            max_file_size: Maximum size per log file before rotation
            backup_count: Number of backup files to keep
        """
        self.log_dir = Path(log_dir)
        self.log_level = getattr(logging, log_level.upper())
        self.enable_console = enable_console
        self.max_file_size = max_file_size
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)

        self._setup_logging()

    def _setup_logging(self):
        """Configure the complete logging system."""
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        self._configure_structlog()
        self._setup_file_handlers()

        if self.enable_console:
            self._setup_console_handler()

        # HTTP libraries stay at WARNING even when debugging
        for ext_module in EXTERNAL_MODULES:
            logging.getLogger(ext_module).setLevel(logging.WARNING)

        root_logger.setLevel(self.log_level)

    def _configure_structlog(self):
        """Configure structlog for structured logging."""
        shared_processors = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]

        structlog.configure(
            processors=shared_processors + [
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    def _setup_file_handlers(self):
        """Setup rotating file handlers for the main and error logs."""
        root_logger = logging.getLogger()
        root_logger.addHandler(
            self._create_rotating_file_handler("dreamscribe.log", self.log_level)
        )
        root_logger.addHandler(
            self._create_rotating_file_handler("errors.log", logging.ERROR)
        )

    def _create_rotating_file_handler(
        self,
        filename: str,
        level: int
    ) -> logging.handlers.RotatingFileHandler:
        """Create a rotating file handler with plain structured output."""
        handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / filename,
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        handler.setLevel(level)
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
        ))
        return handler

    def _setup_console_handler(self):
        """Setup console handler for development."""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True),
        ))
        logging.getLogger().addHandler(console_handler)

    def get_logger(self, name: str) -> structlog.stdlib.BoundLogger:
        """Get a structured logger for a specific component."""
        return structlog.get_logger(name)


# Global logger instance
_logger_instance: Optional[DreamscribeLogger] = None


def setup_logging(
    log_dir: str = "logs",
    log_level: str = "INFO",
    enable_console: bool = True,
    **kwargs
) -> DreamscribeLogger:
    """
    Setup the global logging configuration.

    Args:
        log_dir: Directory to store log files
        log_level: Default log level
        enable_console: Whether to enable console logging
        **kwargs: Additional arguments for DreamscribeLogger

    Returns:
        Configured logger instance
    """
    global _logger_instance

    _logger_instance = DreamscribeLogger(
        log_dir=log_dir,
        log_level=log_level,
        enable_console=enable_console,
        **kwargs
    )

    return _logger_instance


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger for a specific component.

    Raises:
        RuntimeError: If logging hasn't been setup
    """
    if _logger_instance is None:
        raise RuntimeError("Logging not setup. Call setup_logging() first.")

    return _logger_instance.get_logger(name)
