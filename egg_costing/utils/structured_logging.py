"""
Structured logging setup for the cost engine.
"""

import logging
import os
from typing import Optional

import structlog


class StructuredLogger:
    """Structured logging setup shared by every engine module"""

    def __init__(self, service_name: str = "egg_costing", log_level: Optional[str] = None):
        self.service_name = service_name
        self.environment = os.getenv("APP_ENVIRONMENT", "development")
        self.log_level = (log_level or self._default_level()).upper()
        self._setup_logging()

    def _default_level(self) -> str:
        return "INFO" if self.environment == "production" else "DEBUG"

    def _setup_logging(self):
        """Setup structured logging"""
        # Configure structlog
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        # Setup standard logging
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format="%(message)s",
        )
        logging.getLogger().setLevel(getattr(logging, self.log_level, logging.INFO))

    def get_logger(self, name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
        """Get a structured logger instance"""
        logger_name = name or self.service_name
        return structlog.get_logger(logger_name)


# Global instance
_structured_logger = None


def get_structured_logger() -> StructuredLogger:
    """Get global structured logger instance"""
    global _structured_logger
    if _structured_logger is None:
        _structured_logger = StructuredLogger()
    return _structured_logger


def configure_logging(service_name: str, log_level: str) -> StructuredLogger:
    """Replace the global structured logger with one built from settings"""
    global _structured_logger
    _structured_logger = StructuredLogger(service_name=service_name, log_level=log_level)
    return _structured_logger
