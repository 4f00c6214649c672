"""
Shared helpers: dates, daily series and structured logging.
"""

from .date_utils import DateUtils
from .series import make_daily_index, records_to_frame
from .structured_logging import StructuredLogger, get_structured_logger, configure_logging

__all__ = [
    "DateUtils",
    "make_daily_index",
    "records_to_frame",
    "StructuredLogger",
    "get_structured_logger",
    "configure_logging",
]
