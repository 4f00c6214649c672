"""
Collaborator interfaces consumed by the cost engine.

The engine only reads through these. Storage, querying and caching belong to
the implementations supplied by the host application.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from ..models import ExpenseEntry, Lot, ProductionEntry
from ..utils.date_utils import DateUtils


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; a ``None`` bound is open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start and self.end and self.start > self.end:
            raise ValueError("DateRange start must not be after end")

    @classmethod
    def single_day(cls, day: date) -> "DateRange":
        return cls(day, day)

    @classmethod
    def up_to(cls, day: date) -> "DateRange":
        return cls(None, day)

    def contains(self, day: date) -> bool:
        return DateUtils.in_range(day, self.start, self.end)


class LotRegistry(ABC):
    """Lot identity, bird counts and lifecycle state."""

    @abstractmethod
    def get_lot(self, lot_id: str) -> Optional[Lot]:
        """Return the lot or ``None`` when it does not exist."""

    @abstractmethod
    def list_active_lots(self) -> List[Lot]:
        """Return every lot in the ACTIVO state."""


class ExpenseLedger(ABC):
    """Append-only dated expenses tagged to lots."""

    @abstractmethod
    def get_expenses(self, lot_id: str, date_range: DateRange) -> List[ExpenseEntry]:
        pass


class ProductionLedger(ABC):
    """Append-only dated egg counts tagged to lots."""

    @abstractmethod
    def get_production(self, lot_id: str, date_range: DateRange) -> List[ProductionEntry]:
        pass


class RevenueSource(ABC):
    """Sales collaborator. Optional: the engine works without one."""

    @abstractmethod
    def get_revenue(self, lot_id: str) -> Optional[Decimal]:
        """Revenue attributable to the lot, or ``None`` when unknown."""
