"""
Egg production cost accounting engine.

Turns a laying lot's expense and production ledgers into daily cost per egg,
an Initial/Productive phase analysis, window statistics with trend and
alerts, and a per-lot report.
"""

from .config.settings import Settings
from .container import Container, configure_container, get_container, cleanup_container
from .engine import EggCostingEngine
from .exceptions import (
    CostingError,
    ErrorCode,
    InvalidLotStateError,
    LotNotFoundError,
    UpstreamUnavailableError,
)

__version__ = "1.0.0"

__all__ = [
    "Settings",
    "Container",
    "configure_container",
    "get_container",
    "cleanup_container",
    "EggCostingEngine",
    "CostingError",
    "ErrorCode",
    "InvalidLotStateError",
    "LotNotFoundError",
    "UpstreamUnavailableError",
]
